"""Analysis driver - runs rules against syntax trees.

The driver:
1. Refuses to run detectors on a tree with syntax errors
2. Runs every rule, isolating detector failures as diagnostics
3. Flattens, deduplicates and sorts the findings
"""

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from src.lint.config import LintSettings
from src.lint.errors import DetectorFault, ParseError
from src.lint.frontend import SourceParser, SyntaxTree
from src.lint.registry import Rule, RuleRegistry
from src.models.diagnostics import FILE_START, Diagnostic, DiagnosticKind, Finding, Severity, Span

logger = structlog.get_logger()

PARSE_ERROR_RULE_ID = "parse-error"

SKIPPED_DIRECTORIES = {"node_modules"}


def parse_error_diagnostic(error: ParseError) -> Diagnostic:
    """File-level diagnostic for a file that could not be parsed or read."""
    return Diagnostic(
        file_path=error.file_path,
        rule_id=PARSE_ERROR_RULE_ID,
        severity=Severity.ERROR,
        span=Span(error.offset, error.offset, error.line, error.column, error.line, error.column),
        message=error.reason,
        kind=DiagnosticKind.PARSE_ERROR,
    )


def run_detector(rule: Rule, tree: SyntaxTree) -> list[Finding]:
    """Run one rule and validate what it returns.

    Raises:
        DetectorFault: if the detector raises or returns anything but
            a list of findings for its own rule id
    """
    try:
        result = rule.run(tree)
    except Exception as e:
        raise DetectorFault(rule.id, f"{type(e).__name__}: {e}") from e

    if not isinstance(result, (list, tuple)):
        raise DetectorFault(rule.id, f"expected a list of findings, got {type(result).__name__}")
    for item in result:
        if not isinstance(item, Finding):
            raise DetectorFault(rule.id, f"expected a Finding, got {type(item).__name__}")
        if item.rule_id != rule.id:
            raise DetectorFault(rule.id, f"reported a finding for '{item.rule_id}'")
    return list(result)


def merge_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Sort by (span start, rule id) and drop repeated (rule id, span) pairs."""
    merged = []
    seen = set()
    for diagnostic in sorted(diagnostics, key=lambda d: d.sort_key):
        if diagnostic.dedupe_key in seen:
            continue
        seen.add(diagnostic.dedupe_key)
        merged.append(diagnostic)
    return merged


def analyze(tree: SyntaxTree, rules: Iterable[Rule]) -> list[Diagnostic]:
    """Run ``rules`` against ``tree`` and return ordered diagnostics.

    A tree with syntax errors yields a single parse-error diagnostic and
    no detector runs. A failing detector yields one detector-fault
    diagnostic naming its rule; the other rules still run.
    """
    try:
        tree.check()
    except ParseError as e:
        logger.warning("Skipping detectors for unparsable file", file=tree.file_path, reason=e.reason)
        return [parse_error_diagnostic(e)]

    diagnostics: list[Diagnostic] = []
    for rule in rules:
        try:
            findings = run_detector(rule, tree)
        except DetectorFault as fault:
            logger.error("Detector failed", rule=rule.id, file=tree.file_path, reason=fault.reason)
            diagnostics.append(Diagnostic(
                file_path=tree.file_path,
                rule_id=rule.id,
                severity=Severity.ERROR,
                span=FILE_START,
                message=str(fault),
                kind=DiagnosticKind.DETECTOR_FAULT,
            ))
            continue
        diagnostics.extend(Diagnostic.from_finding(f, tree.file_path, rule.severity) for f in findings)

    return merge_diagnostics(diagnostics)


@dataclass
class FileResult:
    """Diagnostics for one analyzed file."""

    file_path: str
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """True if no error-severity diagnostics."""
        return not self.errors

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.WARNING]

    @property
    def faults(self) -> list[Diagnostic]:
        """Diagnostics that are not detector findings."""
        return [d for d in self.diagnostics if d.kind != DiagnosticKind.FINDING]


class AnalysisDriver:
    """Analyzes sources, files and whole directory trees.

    Holds a frozen registry and a parser; every file gets its own tree,
    so batches run on a thread pool without shared state.
    """

    def __init__(self, registry: RuleRegistry | None = None, settings: LintSettings | None = None):
        from src.rules import build_registry

        self.settings = settings or LintSettings()
        self.registry = registry if registry is not None else build_registry(self.settings)
        if not self.registry.frozen:
            self.registry.freeze()
        self.parser = SourceParser()
        self._logger = logger.bind(component="AnalysisDriver")

    def _rules(self, rules: Iterable[Rule] | None) -> list[Rule]:
        return list(rules) if rules is not None else self.registry.all()

    def analyze_source(
        self,
        code: str,
        file_path: str = "<string>",
        rules: Iterable[Rule] | None = None,
    ) -> FileResult:
        """Analyze source text.

        Args:
            code: TypeScript or TSX source
            file_path: Path for reporting; also selects the grammar
            rules: Rules to run (all registered rules if None)
        """
        tree = self.parser.parse(code, file_path)
        diagnostics = analyze(tree, self._rules(rules))
        self._logger.debug("Analyzed source", file=file_path, diagnostics=len(diagnostics))
        return FileResult(file_path, diagnostics)

    def analyze_file(self, file_path: str | Path, rules: Iterable[Rule] | None = None) -> FileResult:
        """Analyze a file; an unreadable file becomes a parse-error diagnostic."""
        self._logger.info("Analyzing file", file=str(file_path))
        try:
            tree = self.parser.parse_file(file_path)
        except ParseError as e:
            self._logger.warning("Cannot read file", file=str(file_path), reason=e.reason)
            return FileResult(str(file_path), [parse_error_diagnostic(e)])
        return FileResult(str(file_path), analyze(tree, self._rules(rules)))

    def analyze_files(
        self,
        files: Iterable[str | Path],
        rules: Iterable[Rule] | None = None,
    ) -> list[FileResult]:
        """Analyze files concurrently; results come back in input order."""
        files = list(files)
        selected = self._rules(rules)
        results: list[FileResult | None] = [None] * len(files)

        with ThreadPoolExecutor(max_workers=self.settings.max_workers) as executor:
            futures = {
                executor.submit(self.analyze_file, path, selected): index
                for index, path in enumerate(files)
            }
            for future in as_completed(futures):
                results[futures[future]] = future.result()

        self._logger.info(
            "Batch complete",
            files=len(files),
            diagnostics=sum(len(r.diagnostics) for r in results),
        )
        return results

    def collect_files(self, paths: Iterable[str | Path]) -> list[Path]:
        """Expand directories into the source files they contain.

        Only files with a configured extension are collected; ``node_modules``
        and hidden directories are skipped. Explicit file paths are kept
        as given.
        """
        extensions = {ext.lower() for ext in self.settings.extensions}
        collected: list[Path] = []
        for raw in paths:
            path = Path(raw)
            if not path.is_dir():
                collected.append(path)
                continue
            for candidate in sorted(path.rglob("*")):
                relative = candidate.relative_to(path).parts
                if any(part in SKIPPED_DIRECTORIES or part.startswith(".") for part in relative[:-1]):
                    continue
                if candidate.is_file() and candidate.suffix.lower() in extensions:
                    collected.append(candidate)
        return collected

    def check_paths(self, paths: Iterable[str | Path], rules: Iterable[Rule] | None = None) -> list[FileResult]:
        """Collect and analyze every source file under ``paths``."""
        return self.analyze_files(self.collect_files(paths), rules)

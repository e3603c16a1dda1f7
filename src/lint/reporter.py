"""Rendering of lint results as text, JSON, Markdown and SARIF."""

import json
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import structlog

from src import __version__
from src.lint.driver import FileResult
from src.lint.registry import Rule
from src.models.diagnostics import Diagnostic, DiagnosticKind

logger = structlog.get_logger()

SARIF_SCHEMA = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"


class ReportFormat(str, Enum):
    """Output format for reports."""

    TEXT = "text"
    JSON = "json"
    MARKDOWN = "markdown"
    SARIF = "sarif"  # Static Analysis Results Interchange Format


EXTENSION_FORMATS = {
    ".txt": ReportFormat.TEXT,
    ".json": ReportFormat.JSON,
    ".md": ReportFormat.MARKDOWN,
    ".sarif": ReportFormat.SARIF,
}


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


@dataclass
class LintSummary:
    """Diagnostic counts over a batch of files."""

    files: int = 0
    failed: int = 0
    errors: int = 0
    warnings: int = 0
    faults: int = 0
    by_rule: Counter = field(default_factory=Counter)

    @classmethod
    def of(cls, results: Iterable[FileResult]) -> "LintSummary":
        summary = cls()
        for result in results:
            summary.files += 1
            summary.failed += not result.passed
            summary.errors += len(result.errors)
            summary.warnings += len(result.warnings)
            summary.faults += len(result.faults)
            summary.by_rule.update(d.rule_id for d in result.diagnostics)
        return summary

    @property
    def problems(self) -> int:
        return self.errors + self.warnings

    def headline(self) -> str:
        """One line such as ``3 problems (1 error, 2 warnings) in 2 files, 1 failed``."""
        counts = [_plural(self.errors, "error"), _plural(self.warnings, "warning")]
        if self.faults:
            counts.append(_plural(self.faults, "fault"))
        return (
            f"{_plural(self.problems, 'problem')} ({', '.join(counts)}) "
            f"in {_plural(self.files, 'file')}, {self.failed} failed"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": self.files,
            "failed": self.failed,
            "errors": self.errors,
            "warnings": self.warnings,
            "faults": self.faults,
            "by_rule": dict(sorted(self.by_rule.items())),
        }


def _label(diagnostic: Diagnostic) -> str:
    """Rule id, marked when the diagnostic is not a detector finding."""
    if diagnostic.kind == DiagnosticKind.FINDING:
        return diagnostic.rule_id
    return f"{diagnostic.rule_id} ({diagnostic.kind.value})"


class ReportGenerator:
    """Renders per-file results; rule descriptions come from the registry."""

    def __init__(self, rules: Iterable[Rule] | None = None):
        self._descriptions = {rule.id: rule.description for rule in rules or []}
        self._logger = logger.bind(component="ReportGenerator")
        self._formatters = {
            ReportFormat.TEXT: self._format_text,
            ReportFormat.JSON: self._format_json,
            ReportFormat.MARKDOWN: self._format_markdown,
            ReportFormat.SARIF: self._format_sarif,
        }

    def generate(self, results: list[FileResult], format: ReportFormat = ReportFormat.TEXT) -> str:
        """Render ``results`` in ``format``."""
        return self._formatters[ReportFormat(format)](results, LintSummary.of(results))

    def _format_text(self, results: list[FileResult], summary: LintSummary) -> str:
        """One block per file, one ``line:column  severity  message  rule`` row per diagnostic."""
        lines = []
        for result in results:
            lines.append(f"{'✓ PASS' if result.passed else '✗ FAIL'} {result.file_path}")
            rows = [(str(d.span), d.severity.value, d.message, _label(d)) for d in result.diagnostics]
            if rows:
                location_width = max(len(row[0]) for row in rows)
                for location, severity, message, label in rows:
                    lines.append(f"  {location:<{location_width}}  {severity:<7}  {message}  {label}")
        lines.append("")
        lines.append(summary.headline())
        return "\n".join(lines)

    def _format_json(self, results: list[FileResult], summary: LintSummary) -> str:
        return json.dumps({
            "version": __version__,
            "summary": summary.to_dict(),
            "results": [
                {
                    "file": result.file_path,
                    "passed": result.passed,
                    "diagnostics": [d.to_dict() for d in result.diagnostics],
                }
                for result in results
            ],
        }, indent=2)

    def _format_markdown(self, results: list[FileResult], summary: LintSummary) -> str:
        """A single table of every diagnostic, for pull request comments."""
        lines = ["# Convention Lint Report", "", f"**{summary.headline()}**", ""]
        diagnostics = [d for result in results for d in result.diagnostics]
        if not diagnostics:
            lines.append("No diagnostics.")
            return "\n".join(lines)

        lines.append("| File | Location | Severity | Rule | Message |")
        lines.append("|------|----------|----------|------|---------|")
        for d in diagnostics:
            cells = [f"`{d.file_path}`", str(d.span), d.severity.value, _label(d), d.message]
            lines.append("| " + " | ".join(cell.replace("|", "\\|") for cell in cells) + " |")
        return "\n".join(lines)

    def _format_sarif(self, results: list[FileResult], summary: LintSummary) -> str:
        """SARIF 2.1.0 with one reporting descriptor per rule that fired."""
        rule_ids = sorted(summary.by_rule)
        rule_index = {rule_id: index for index, rule_id in enumerate(rule_ids)}
        descriptors = [
            {"id": rule_id, "shortDescription": {"text": self._descriptions.get(rule_id) or rule_id}}
            for rule_id in rule_ids
        ]
        sarif_results = [
            {
                "ruleId": d.rule_id,
                "ruleIndex": rule_index[d.rule_id],
                "level": d.severity.value,
                "message": {"text": d.message},
                "locations": [{
                    "physicalLocation": {
                        "artifactLocation": {"uri": Path(d.file_path).as_posix()},
                        "region": {
                            "startLine": d.span.line,
                            "startColumn": d.span.column,
                            "endLine": d.span.end_line,
                            "endColumn": d.span.end_column,
                        },
                    },
                }],
                "properties": {"kind": d.kind.value},
            }
            for result in results
            for d in result.diagnostics
        ]
        return json.dumps({
            "$schema": SARIF_SCHEMA,
            "version": "2.1.0",
            "runs": [{
                "tool": {"driver": {"name": "convlint", "version": __version__, "rules": descriptors}},
                "results": sarif_results,
            }],
        }, indent=2)

    def save_report(
        self,
        results: list[FileResult],
        output_path: str | Path,
        format: ReportFormat | None = None,
    ) -> None:
        """Write a report, inferring the format from the file extension when not given."""
        path = Path(output_path)
        if format is None:
            format = EXTENSION_FORMATS.get(path.suffix.lower(), ReportFormat.TEXT)

        path.write_text(self.generate(results, format), encoding="utf-8")
        self._logger.info("Report saved", path=str(path), format=format.value)

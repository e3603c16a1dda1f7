"""Fixture harness - checks rules against annotated source files.

A fixture is a source file split by marker comments:

    import { createSignal } from "solid-js";   <- prelude, must stay clean
    // ── VALID ──
    const a = 1;                                <- must produce no findings
    // ── INVALID ──
    // 1) reassignable binding
    let b = 2;                                  <- exactly one finding
    // 2) var binding
    var c = 3;                                  <- exactly one finding

Each numbered sub-case runs from its annotation to the line before the
next annotation and must produce exactly one finding inside those bounds.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from src.lint.driver import AnalysisDriver
from src.lint.errors import FixtureMismatch, MalformedFixture
from src.models.diagnostics import Diagnostic, DiagnosticKind

logger = structlog.get_logger()

VALID_MARKER = re.compile(r"^\s*//.*\bVALID\b")
INVALID_MARKER = re.compile(r"^\s*//.*\bINVALID\b")
SUBCASE_ANNOTATION = re.compile(r"^\s*//\s*(\d+)\)\s*(.*)$")


@dataclass(frozen=True)
class SubCase:
    """One numbered INVALID sub-case; lines are 1-indexed and inclusive."""

    number: int
    description: str
    start_line: int
    end_line: int

    def contains(self, diagnostic: Diagnostic) -> bool:
        return self.start_line <= diagnostic.span.line and diagnostic.span.end_line <= self.end_line

    def __str__(self) -> str:
        label = f"sub-case {self.number}"
        return f"{label} ({self.description})" if self.description else label


@dataclass(frozen=True)
class Fixture:
    """A parsed fixture file."""

    path: str
    source: str
    valid_line: int
    invalid_line: int
    cases: tuple[SubCase, ...]

    def case_for(self, diagnostic: Diagnostic) -> SubCase | None:
        for case in self.cases:
            if case.contains(diagnostic):
                return case
        return None


@dataclass
class FixtureReport:
    """Outcome of checking one fixture."""

    fixture: Fixture
    rule_ids: list[str]
    diagnostics: list[Diagnostic]
    problems: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.problems


def rule_ids_for_fixture(path: str | Path) -> list[str]:
    """Rule id a fixture is named after: ``fixtures/solid/prefer-for.tsx`` -> ``solid/prefer-for``."""
    path = Path(path)
    return [f"{path.parent.name}/{path.stem}"]


def parse_fixture(source: str, path: str = "<fixture>") -> Fixture:
    """Split fixture source into its prelude, VALID region and sub-cases.

    Raises:
        MalformedFixture: if markers are missing or misordered, if the
            INVALID region has no sub-cases, has code outside a sub-case,
            misnumbers its sub-cases or has an empty one
    """
    lines = source.splitlines()

    valid_line = next((i + 1 for i, line in enumerate(lines) if VALID_MARKER.match(line)), None)
    invalid_line = next((i + 1 for i, line in enumerate(lines) if INVALID_MARKER.match(line)), None)
    if valid_line is None:
        raise MalformedFixture(path, "missing VALID marker")
    if invalid_line is None:
        raise MalformedFixture(path, "missing INVALID marker")
    if invalid_line < valid_line:
        raise MalformedFixture(path, "INVALID marker precedes VALID marker")

    annotations: list[tuple[int, int, str]] = []
    for number, line in enumerate(lines[invalid_line:], start=invalid_line + 1):
        match = SUBCASE_ANNOTATION.match(line)
        if match:
            annotations.append((number, int(match.group(1)), match.group(2).strip()))
        elif line.strip() and not annotations:
            raise MalformedFixture(path, f"line {number} is outside every sub-case")

    if not annotations:
        raise MalformedFixture(path, "INVALID region has no numbered sub-cases")

    cases = []
    for index, (start, case_number, description) in enumerate(annotations):
        end = annotations[index + 1][0] - 1 if index + 1 < len(annotations) else len(lines)
        if cases and case_number <= cases[-1].number:
            raise MalformedFixture(path, f"sub-case {case_number} at line {start} is out of sequence")
        if not any(lines[i - 1].strip() for i in range(start + 1, end + 1)):
            raise MalformedFixture(path, f"sub-case {case_number} at line {start} has no code")
        cases.append(SubCase(case_number, description, start, end))

    return Fixture(path, source, valid_line, invalid_line, tuple(cases))


def check_fixture(fixture: Fixture, diagnostics: list[Diagnostic]) -> list[str]:
    """List every way ``diagnostics`` violate the fixture's expectations."""
    problems = []
    per_case: dict[int, list[Diagnostic]] = {case.number: [] for case in fixture.cases}

    for d in diagnostics:
        where = f"{d.rule_id} at {d.span}: {d.message}"
        if d.kind != DiagnosticKind.FINDING:
            problems.append(f"{d.kind.value} {where}")
        elif d.span.line < fixture.valid_line:
            problems.append(f"finding in prelude: {where}")
        elif d.span.line < fixture.invalid_line:
            problems.append(f"finding in VALID region: {where}")
        else:
            case = fixture.case_for(d)
            if case is None:
                problems.append(f"finding outside every sub-case: {where}")
            else:
                per_case[case.number].append(d)

    for case in fixture.cases:
        found = per_case[case.number]
        if not found:
            problems.append(f"{case} at line {case.start_line} produced no finding")
        elif len(found) > 1:
            locations = ", ".join(str(d.span) for d in found)
            problems.append(f"{case} at line {case.start_line} produced {len(found)} findings ({locations})")

    return problems


class FixtureHarness:
    """Runs rules over fixture files and checks the VALID/INVALID partition."""

    def __init__(self, driver: AnalysisDriver | None = None):
        self.driver = driver or AnalysisDriver()
        self._logger = logger.bind(component="FixtureHarness")

    def load(self, path: str | Path) -> Fixture:
        path = Path(path)
        if not path.is_file():
            raise MalformedFixture(str(path), "file not found")
        return parse_fixture(path.read_text(encoding="utf-8"), str(path))

    def run(self, path: str | Path, rule_ids: list[str] | None = None) -> FixtureReport:
        """Analyze a fixture and collect every expectation problem."""
        fixture = self.load(path)
        rule_ids = rule_ids or rule_ids_for_fixture(path)
        rules = self.driver.registry.select(rule_ids)

        result = self.driver.analyze_source(fixture.source, fixture.path, rules)
        report = FixtureReport(fixture, rule_ids, result.diagnostics, check_fixture(fixture, result.diagnostics))

        self._logger.info(
            "Fixture checked",
            fixture=fixture.path,
            rules=rule_ids,
            cases=len(fixture.cases),
            passed=report.passed,
        )
        return report

    def check(self, path: str | Path, rule_ids: list[str] | None = None) -> FixtureReport:
        """Like ``run`` but raises on any problem.

        Raises:
            MalformedFixture: if the fixture layout is invalid
            FixtureMismatch: if the findings do not match the layout
        """
        report = self.run(path, rule_ids)
        if not report.passed:
            raise FixtureMismatch(report.fixture.path, report.problems)
        return report

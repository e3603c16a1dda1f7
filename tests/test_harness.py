"""Tests for the fixture harness."""

from pathlib import Path

import pytest

from src.lint.errors import FixtureMismatch, MalformedFixture
from src.lint.harness import FixtureHarness, check_fixture, parse_fixture, rule_ids_for_fixture
from src.models.diagnostics import Diagnostic, DiagnosticKind, Severity, Span

VALID = "// ── VALID ──────────────"
INVALID = "// ── INVALID ────────────"


def _fixture_source(*lines: str) -> str:
    return "\n".join(lines) + "\n"


def _at(line: int, rule_id: str = "functional/no-let", kind: DiagnosticKind = DiagnosticKind.FINDING) -> Diagnostic:
    return Diagnostic("f.ts", rule_id, Severity.ERROR, Span(0, 1, line, 1, line, 2), "m", kind)


SOURCE = _fixture_source(
    'import { a } from "b";',   # 1
    VALID,                       # 2
    "const x = 1;",              # 3
    "",                          # 4
    INVALID,                     # 5
    "",                          # 6
    "// 1) simple let",          # 7
    "let y = 1;",                # 8
    "",                          # 9
    "// 2) var",                 # 10
    "var z = 1;",                # 11
)


class TestParseFixture:
    """Tests for splitting fixture files into regions."""

    def test_regions(self):
        """Test that markers and sub-cases are located."""
        fixture = parse_fixture(SOURCE, "no-let.ts")

        assert fixture.valid_line == 2
        assert fixture.invalid_line == 5
        assert [(c.number, c.description, c.start_line, c.end_line) for c in fixture.cases] == [
            (1, "simple let", 7, 9),
            (2, "var", 10, 11),
        ]

    def test_missing_valid_marker(self):
        """Test that a fixture without a VALID marker is malformed."""
        with pytest.raises(MalformedFixture, match="VALID"):
            parse_fixture(_fixture_source(INVALID, "// 1) a", "let a = 1;"))

    def test_missing_invalid_marker(self):
        """Test that a fixture without an INVALID marker is malformed."""
        with pytest.raises(MalformedFixture, match="INVALID"):
            parse_fixture(_fixture_source(VALID, "const a = 1;"))

    def test_markers_out_of_order(self):
        """Test that INVALID before VALID is malformed."""
        with pytest.raises(MalformedFixture, match="precedes"):
            parse_fixture(_fixture_source(INVALID, "// 1) a", "let a = 1;", VALID))

    def test_no_subcases(self):
        """Test that an INVALID region without numbered sub-cases is malformed."""
        with pytest.raises(MalformedFixture, match="no numbered sub-cases"):
            parse_fixture(_fixture_source(VALID, INVALID, ""))

    def test_code_before_first_subcase(self):
        """Test that code outside every sub-case is malformed."""
        with pytest.raises(MalformedFixture, match="outside every sub-case"):
            parse_fixture(_fixture_source(VALID, INVALID, "let a = 1;", "// 1) a", "let b = 1;"))

    def test_subcases_out_of_sequence(self):
        """Test that sub-case numbers must increase."""
        with pytest.raises(MalformedFixture, match="out of sequence"):
            parse_fixture(_fixture_source(VALID, INVALID, "// 2) a", "let a = 1;", "// 1) b", "let b = 1;"))

    def test_empty_subcase(self):
        """Test that a sub-case with no code is malformed."""
        with pytest.raises(MalformedFixture, match="has no code"):
            parse_fixture(_fixture_source(VALID, INVALID, "// 1) a", "", "// 2) b", "let b = 1;"))

    def test_rule_id_from_path(self):
        """Test that the rule id comes from the plugin directory and file stem."""
        assert rule_ids_for_fixture(Path("fixtures/solid/prefer-for.tsx")) == ["solid/prefer-for"]


class TestCheckFixture:
    """Tests for matching diagnostics against a parsed fixture."""

    def test_exact_match(self):
        """Test that one finding per sub-case passes."""
        fixture = parse_fixture(SOURCE)

        assert check_fixture(fixture, [_at(8), _at(11)]) == []

    def test_missing_finding(self):
        """Test that a silent sub-case is a problem."""
        problems = check_fixture(parse_fixture(SOURCE), [_at(8)])

        assert len(problems) == 1
        assert "sub-case 2" in problems[0]
        assert "no finding" in problems[0]

    def test_extra_finding(self):
        """Test that two findings in one sub-case are a problem."""
        problems = check_fixture(parse_fixture(SOURCE), [_at(8), _at(9), _at(11)])

        assert problems == ["sub-case 1 (simple let) at line 7 produced 2 findings (8:1, 9:1)"]

    def test_valid_region_finding(self):
        """Test that findings in the VALID region or prelude are problems."""
        problems = check_fixture(parse_fixture(SOURCE), [_at(1), _at(3), _at(8), _at(11)])

        assert len(problems) == 2
        assert problems[0].startswith("finding in prelude")
        assert problems[1].startswith("finding in VALID region")

    def test_finding_between_marker_and_first_subcase(self):
        """Test that a finding before the first sub-case is a problem."""
        problems = check_fixture(parse_fixture(SOURCE), [_at(6), _at(8), _at(11)])

        assert problems == ["finding outside every sub-case: functional/no-let at 6:1: m"]

    def test_faults_are_problems(self):
        """Test that fault diagnostics always fail the fixture."""
        fault = _at(1, "functional/no-let", DiagnosticKind.DETECTOR_FAULT)
        problems = check_fixture(parse_fixture(SOURCE), [fault, _at(8), _at(11)])

        assert len(problems) == 1
        assert problems[0].startswith("detector-fault")


class TestFixtureHarness:
    """Tests for running fixture files through the driver."""

    def test_passing_fixture(self, harness: FixtureHarness, tmp_path: Path):
        """Test a well-formed fixture whose findings line up."""
        path = tmp_path / "no-let.ts"
        path.write_text(SOURCE, encoding="utf-8")

        report = harness.check(path, ["functional/no-let"])

        assert report.passed
        assert [d.span.line for d in report.diagnostics] == [8, 11]

    def test_mismatch_raises(self, harness: FixtureHarness, tmp_path: Path):
        """Test that a fixture with a finding in VALID fails loudly."""
        path = tmp_path / "no-let.ts"
        path.write_text(SOURCE.replace("const x = 1;", "let x = 1;"), encoding="utf-8")

        with pytest.raises(FixtureMismatch) as exc_info:
            harness.check(path, ["functional/no-let"])
        assert any("VALID region" in p for p in exc_info.value.problems)

    def test_missing_fixture(self, harness: FixtureHarness, tmp_path: Path):
        """Test that a missing fixture file is malformed, not skipped."""
        with pytest.raises(MalformedFixture):
            harness.run(tmp_path / "functional" / "no-let.ts")

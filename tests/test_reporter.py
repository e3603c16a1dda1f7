"""Tests for the report generator."""

import json
from pathlib import Path

import pytest

from src.lint.driver import FileResult
from src.lint.reporter import LintSummary, ReportFormat, ReportGenerator
from src.models.diagnostics import FILE_START, Diagnostic, DiagnosticKind, Severity, Span


@pytest.fixture
def results() -> list[FileResult]:
    """One failing, one warning-only and one clean file."""
    span = Span(4, 5, 1, 5, 1, 6)
    return [
        FileResult("src/a.ts", [
            Diagnostic("src/a.ts", "functional/no-let", Severity.ERROR, span, "Unexpected let, use const instead."),
        ]),
        FileResult("src/b.tsx", [
            Diagnostic("src/b.tsx", "solid/prefer-show", Severity.WARNING, span, "Use Solid's `<Show />` | here"),
            Diagnostic("src/b.tsx", "test/crash", Severity.WARNING, FILE_START, "boom", DiagnosticKind.DETECTOR_FAULT),
        ]),
        FileResult("src/c.ts", []),
    ]


class TestReportGenerator:
    """Tests for ReportGenerator."""

    def test_text(self, results: list[FileResult]):
        """Test the per-file blocks and the closing headline."""
        text = ReportGenerator().generate(results, ReportFormat.TEXT)
        lines = text.splitlines()

        assert lines[0] == "✗ FAIL src/a.ts"
        assert lines[1] == "  1:5  error    Unexpected let, use const instead.  functional/no-let"
        assert "✓ PASS src/b.tsx" in lines
        assert "  1:1  warning  boom  test/crash (detector-fault)" in lines
        assert lines[-1] == "3 problems (1 error, 2 warnings, 1 fault) in 3 files, 1 failed"

    def test_headline_singular(self):
        """Test that counts of one are not pluralized and faults are omitted when absent."""
        summary = LintSummary(files=1, failed=0, errors=0, warnings=1)

        assert summary.headline() == "1 problem (0 errors, 1 warning) in 1 file, 0 failed"

    def test_json(self, results: list[FileResult]):
        """Test that JSON output carries the summary and every diagnostic."""
        data = json.loads(ReportGenerator().generate(results, ReportFormat.JSON))

        assert data["summary"]["errors"] == 1
        assert data["summary"]["warnings"] == 2
        assert data["summary"]["faults"] == 1
        assert data["summary"]["by_rule"] == {"functional/no-let": 1, "solid/prefer-show": 1, "test/crash": 1}
        first = data["results"][0]["diagnostics"][0]
        assert first["ruleId"] == "functional/no-let"
        assert first["span"]["column"] == 5
        assert data["results"][1]["diagnostics"][1]["kind"] == "detector-fault"
        assert data["results"][2] == {"file": "src/c.ts", "passed": True, "diagnostics": []}

    def test_markdown_escapes_pipes(self, results: list[FileResult]):
        """Test that table cells escape pipe characters."""
        markdown = ReportGenerator().generate(results, ReportFormat.MARKDOWN)

        assert markdown.startswith("# Convention Lint Report")
        assert "| `src/a.ts` | 1:5 | error | functional/no-let | Unexpected let, use const instead. |" in markdown
        assert "`<Show />` \\| here" in markdown

    def test_markdown_without_diagnostics(self):
        """Test that a clean batch says so instead of printing an empty table."""
        markdown = ReportGenerator().generate([FileResult("src/c.ts", [])], ReportFormat.MARKDOWN)

        assert "No diagnostics." in markdown
        assert "| File |" not in markdown

    def test_sarif(self, results: list[FileResult], registry):
        """Test SARIF rules and result locations."""
        sarif = json.loads(ReportGenerator(registry.all()).generate(results, ReportFormat.SARIF))
        run = sarif["runs"][0]

        assert sarif["version"] == "2.1.0"
        rules = run["tool"]["driver"]["rules"]
        assert [rule["id"] for rule in rules] == ["functional/no-let", "solid/prefer-show", "test/crash"]
        assert rules[0]["shortDescription"]["text"] == "Disallow mutable variable bindings"
        assert rules[2]["shortDescription"]["text"] == "test/crash"
        assert len(run["results"]) == 3
        region = run["results"][0]["locations"][0]["physicalLocation"]["region"]
        assert region == {"startLine": 1, "startColumn": 5, "endLine": 1, "endColumn": 6}
        assert run["results"][1]["level"] == "warning"
        assert run["results"][2]["ruleIndex"] == 2

    @pytest.mark.parametrize("suffix,marker", [
        (".json", '"summary"'),
        (".md", "# Convention Lint Report"),
        (".sarif", '"version": "2.1.0"'),
        (".log", "✗ FAIL src/a.ts"),
    ])
    def test_save_report_infers_format(self, results: list[FileResult], tmp_path: Path, suffix: str, marker: str):
        """Test that the output format follows the file extension."""
        path = tmp_path / f"report{suffix}"
        ReportGenerator().save_report(results, path)

        assert marker in path.read_text(encoding="utf-8")

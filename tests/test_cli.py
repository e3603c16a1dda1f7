"""Tests for the command line interface."""

import json
from pathlib import Path

from typer.testing import CliRunner

from src.lint.cli import app

runner = CliRunner()

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class TestCheckCommand:
    """Tests for `convlint check`."""

    def test_clean_files_pass(self, tmp_path: Path):
        """Test that a clean tree exits 0."""
        (tmp_path / "ok.ts").write_text("const a = 1;\n", encoding="utf-8")

        result = runner.invoke(app, ["check", str(tmp_path)])

        assert result.exit_code == 0
        assert "✓ PASS" in result.output

    def test_errors_fail(self, tmp_path: Path):
        """Test that an error-severity finding exits 1."""
        (tmp_path / "bad.ts").write_text("let a = 1;\n", encoding="utf-8")

        result = runner.invoke(app, ["check", str(tmp_path)])

        assert result.exit_code == 1
        assert "functional/no-let" in result.output

    def test_rule_selection(self, tmp_path: Path):
        """Test that --rule restricts the rules that run."""
        (tmp_path / "bad.ts").write_text("let a = 1;\n", encoding="utf-8")

        result = runner.invoke(app, ["check", str(tmp_path), "--rule", "functional/no-throw-statements"])

        assert result.exit_code == 0

    def test_report_file(self, tmp_path: Path):
        """Test writing a JSON report to a file."""
        (tmp_path / "bad.ts").write_text("var a = 1;\n", encoding="utf-8")
        output = tmp_path / "report.json"

        result = runner.invoke(app, ["check", str(tmp_path / "bad.ts"), "--output", str(output)])

        assert result.exit_code == 1
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["summary"]["errors"] == 1
        assert data["results"][0]["diagnostics"][0]["ruleId"] == "functional/no-let"

    def test_unknown_rule(self, tmp_path: Path):
        """Test that an unknown rule id is a usage error."""
        result = runner.invoke(app, ["check", str(tmp_path), "--rule", "functional/nope"])

        assert result.exit_code == 2
        assert "functional/nope" in result.output

    def test_missing_config(self, tmp_path: Path):
        """Test that an unreadable config file is a usage error."""
        result = runner.invoke(app, ["check", str(tmp_path), "--config", str(tmp_path / "missing.json")])

        assert result.exit_code == 2

    def test_config_file(self, tmp_path: Path):
        """Test that rule selection can come from a config file."""
        (tmp_path / "bad.ts").write_text("let a = 1;\n", encoding="utf-8")
        config = tmp_path / "convlint.json"
        config.write_text(json.dumps({"disabled_rules": ["functional/no-let"]}), encoding="utf-8")

        result = runner.invoke(app, ["check", str(tmp_path / "bad.ts"), "--config", str(config)])

        assert result.exit_code == 0


class TestRulesCommand:
    """Tests for `convlint rules`."""

    def test_lists_all_rules(self, registry):
        """Test that every registered rule is counted."""
        result = runner.invoke(app, ["rules"])

        assert result.exit_code == 0
        assert f"{len(registry)} rules" in result.output

    def test_category_filter(self):
        """Test listing a single category."""
        result = runner.invoke(app, ["rules", "--category", "router"])

        assert result.exit_code == 0
        assert "2 rules" in result.output


class TestFixtureCommand:
    """Tests for `convlint fixture`."""

    def test_fixture_directory_passes(self):
        """Test that the bundled fixtures all pass."""
        result = runner.invoke(app, ["fixture", str(FIXTURES_DIR / "router")])

        assert result.exit_code == 0
        assert result.output.count("✓ PASS") == 2

    def test_failing_fixture(self, tmp_path: Path):
        """Test that a fixture with a silent sub-case exits 1."""
        fixture = tmp_path / "functional" / "no-let.ts"
        fixture.parent.mkdir()
        fixture.write_text(
            "// ── VALID ──\nconst a = 1;\n// ── INVALID ──\n// 1) const is fine\nconst b = 2;\n",
            encoding="utf-8",
        )

        result = runner.invoke(app, ["fixture", str(fixture)])

        assert result.exit_code == 1
        assert "produced no finding" in result.output

    def test_malformed_fixture(self, tmp_path: Path):
        """Test that a malformed fixture is reported as an error."""
        fixture = tmp_path / "functional" / "no-let.ts"
        fixture.parent.mkdir()
        fixture.write_text("let a = 1;\n", encoding="utf-8")

        result = runner.invoke(app, ["fixture", str(fixture)])

        assert result.exit_code == 1
        assert "✗ ERROR" in result.output

    def test_fixture_config_options(self, tmp_path: Path):
        """Test that rule options from a config file apply to fixture checks."""
        fixture = tmp_path / "functional" / "no-let.ts"
        fixture.parent.mkdir()
        fixture.write_text(
            "// ── VALID ──\nconst a = 1;\n// ── INVALID ──\n// 1) loop counter\nfor (let i = 0; i < 3; i++) {}\n",
            encoding="utf-8",
        )
        config = tmp_path / "convlint.json"
        config.write_text(
            json.dumps({"rule_options": {"functional/no-let": {"allowInForLoopInit": True}}}), encoding="utf-8",
        )

        assert runner.invoke(app, ["fixture", str(fixture)]).exit_code == 0
        result = runner.invoke(app, ["fixture", str(fixture), "--config", str(config)])

        assert result.exit_code == 1
        assert "produced no finding" in result.output

    def test_fixture_missing_config(self, tmp_path: Path):
        """Test that a missing config file is a usage error."""
        result = runner.invoke(app, ["fixture", str(FIXTURES_DIR / "router"), "--config", str(tmp_path / "none.json")])

        assert result.exit_code == 2

"""Tests for settings loading and logging configuration."""

import json
from pathlib import Path

import pytest
import structlog
from pydantic import ValidationError

from src.lint.config import LintSettings, configure_logging, load_settings
from src.models.diagnostics import RuleCategory, Severity


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults(self):
        """Test that defaults select every rule over TypeScript sources."""
        settings = LintSettings()

        assert settings.rules == []
        assert settings.extensions == [".ts", ".tsx"]
        assert settings.max_workers >= 1

    def test_config_file_and_overrides(self, tmp_path: Path):
        """Test that explicit overrides win over the config file."""
        config = tmp_path / "convlint.json"
        config.write_text(json.dumps({
            "categories": ["router"],
            "severity_overrides": {"router/route-param-names": "warning"},
            "max_workers": 2,
        }), encoding="utf-8")

        settings = load_settings(config, max_workers=8, report_format=None)

        assert settings.categories == [RuleCategory.ROUTER]
        assert settings.severity_overrides == {"router/route-param-names": Severity.WARNING}
        assert settings.max_workers == 8
        assert settings.report_format == "text"

    def test_environment(self, monkeypatch: pytest.MonkeyPatch):
        """Test that CONVLINT_ variables are read."""
        monkeypatch.setenv("CONVLINT_MAX_WORKERS", "3")
        monkeypatch.setenv("CONVLINT_DISABLED_RULES", '["functional/no-let"]')

        settings = load_settings()

        assert settings.max_workers == 3
        assert settings.disabled_rules == ["functional/no-let"]

    def test_invalid_values(self):
        """Test that invalid settings fail validation."""
        with pytest.raises(ValidationError):
            LintSettings(max_workers=0)
        with pytest.raises(ValidationError):
            LintSettings(categories=["styling"])


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_writes_to_stderr(self, capsys: pytest.CaptureFixture):
        """Test that log lines go to stderr at or above the level."""
        configure_logging("INFO")
        log = structlog.get_logger()
        log.debug("hidden event")
        log.info("visible event", rule="functional/no-let")

        captured = capsys.readouterr()
        assert "visible event" in captured.err
        assert "hidden event" not in captured.err
        assert captured.out == ""

    def test_unknown_level_falls_back(self, capsys: pytest.CaptureFixture):
        """Test that an unknown level name behaves like WARNING."""
        configure_logging("chatty")
        log = structlog.get_logger()
        log.info("quiet event")
        log.warning("loud event")

        captured = capsys.readouterr()
        assert "quiet event" not in captured.err
        assert "loud event" in captured.err

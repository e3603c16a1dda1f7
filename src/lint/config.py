"""Lint settings and logging configuration.

Settings come from ``CONVLINT_*`` environment variables, optionally
overlaid by a JSON config file passed to ``load_settings``.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.models.diagnostics import RuleCategory, Severity

logger = structlog.get_logger()


class LintSettings(BaseSettings):
    """Convention lint settings."""

    model_config = SettingsConfigDict(
        env_prefix="CONVLINT_",
        case_sensitive=False,
    )

    # Rule selection; empty means every registered rule
    rules: list[str] = Field(default_factory=list)
    categories: list[RuleCategory] = Field(default_factory=list)
    disabled_rules: list[str] = Field(default_factory=list)

    # Per-rule configuration, keyed by rule id
    rule_options: dict[str, dict[str, Any]] = Field(default_factory=dict)
    severity_overrides: dict[str, Severity] = Field(default_factory=dict)

    # File discovery and execution
    extensions: list[str] = Field(default_factory=lambda: [".ts", ".tsx"])
    max_workers: int = Field(default=4, ge=1)

    # Output
    report_format: str = Field(default="text")
    log_level: str = Field(default="WARNING")


def load_settings(config_path: str | Path | None = None, **overrides: Any) -> LintSettings:
    """Build settings from the environment, a JSON file and explicit overrides.

    Later sources win: environment < config file < overrides.
    """
    data: dict[str, Any] = {}
    if config_path is not None:
        path = Path(config_path)
        data.update(json.loads(path.read_text(encoding="utf-8")))
        logger.info("Loaded config file", path=str(path), keys=sorted(data))

    data.update({k: v for k, v in overrides.items() if v is not None})
    return LintSettings(**data)


def configure_logging(level: str = "WARNING") -> None:
    """Route structlog output to stderr, filtered at ``level``."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

"""Lint engine: syntax front-end, rule registry, analysis driver and harness.

This package implements the engine around the rules:
- Syntax Front-End: tree-sitter parsing of TypeScript and TSX
- Rule Registry: append-only, frozen before analysis
- Analysis Driver: runs rules, isolates faults, merges diagnostics
- Report Generator: text, JSON, Markdown and SARIF output
- Fixture Harness: checks rules against annotated fixture files
"""

from .config import (
    LintSettings,
    configure_logging,
    load_settings,
)
from .driver import (
    AnalysisDriver,
    FileResult,
    analyze,
    merge_diagnostics,
)
from .errors import (
    DetectorFault,
    DuplicateRuleId,
    FixtureMismatch,
    LintError,
    MalformedFixture,
    ParseError,
    RegistryFrozen,
    UnknownRuleId,
)
from .frontend import (
    SourceLanguage,
    SourceParser,
    SyntaxTree,
)
from .harness import (
    Fixture,
    FixtureHarness,
    FixtureReport,
    SubCase,
    parse_fixture,
    rule_ids_for_fixture,
)
from .registry import (
    Rule,
    RuleRegistry,
)
from .reporter import (
    ReportFormat,
    ReportGenerator,
)

__all__ = [
    # Config
    "LintSettings",
    "configure_logging",
    "load_settings",
    # Driver
    "AnalysisDriver",
    "FileResult",
    "analyze",
    "merge_diagnostics",
    # Errors
    "DetectorFault",
    "DuplicateRuleId",
    "FixtureMismatch",
    "LintError",
    "MalformedFixture",
    "ParseError",
    "RegistryFrozen",
    "UnknownRuleId",
    # Front-end
    "SourceLanguage",
    "SourceParser",
    "SyntaxTree",
    # Harness
    "Fixture",
    "FixtureHarness",
    "FixtureReport",
    "SubCase",
    "parse_fixture",
    "rule_ids_for_fixture",
    # Registry
    "Rule",
    "RuleRegistry",
    # Reporter
    "ReportFormat",
    "ReportGenerator",
]

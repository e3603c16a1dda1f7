"""Data models for the convention linter."""

from .diagnostics import (
    FILE_START,
    Diagnostic,
    DiagnosticKind,
    Finding,
    RuleCategory,
    Severity,
    Span,
)

__all__ = [
    "FILE_START",
    "Diagnostic",
    "DiagnosticKind",
    "Finding",
    "RuleCategory",
    "Severity",
    "Span",
]

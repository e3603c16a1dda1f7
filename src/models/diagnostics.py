"""Diagnostic model shared by the front-end, detectors, driver and reporter.

Everything here is an immutable value object: detectors return
``Finding`` instances, the driver enriches them into ``Diagnostic``
records and the reporter serializes those.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class RuleCategory(str, Enum):
    """Categories of convention rules."""

    FUNCTIONAL = "functional"
    REACTIVE_COMPONENT = "reactive-component"
    DATA_FETCHING_HOOK = "data-fetching-hook"
    ROUTER = "router"


class Severity(str, Enum):
    """How a diagnostic should be treated by the reporting side."""

    ERROR = "error"
    WARNING = "warning"


class DiagnosticKind(str, Enum):
    """Where a diagnostic came from."""

    FINDING = "finding"  # A detector matched
    DETECTOR_FAULT = "detector-fault"  # A detector crashed or returned junk
    PARSE_ERROR = "parse-error"  # The file could not be parsed or read


@dataclass(frozen=True)
class Span:
    """Location of a syntax node.

    ``start``/``end`` are byte offsets into the source; lines and columns
    are 1-indexed.
    """

    start: int
    end: int
    line: int
    column: int
    end_line: int
    end_column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"

    def contains_line(self, line: int) -> bool:
        return self.line <= line <= self.end_line

    def to_dict(self) -> dict[str, int]:
        return {
            "start": self.start,
            "end": self.end,
            "line": self.line,
            "column": self.column,
            "end_line": self.end_line,
            "end_column": self.end_column,
        }


FILE_START = Span(start=0, end=0, line=1, column=1, end_line=1, end_column=1)


@dataclass(frozen=True)
class Finding:
    """A single detector match within one file."""

    rule_id: str
    span: Span
    message: str


@dataclass(frozen=True)
class Diagnostic:
    """A finding enriched with file and severity, the externally visible unit."""

    file_path: str
    rule_id: str
    severity: Severity
    span: Span
    message: str
    kind: DiagnosticKind = DiagnosticKind.FINDING

    @classmethod
    def from_finding(
        cls,
        finding: Finding,
        file_path: str,
        severity: Severity,
    ) -> "Diagnostic":
        return cls(
            file_path=file_path,
            rule_id=finding.rule_id,
            severity=severity,
            span=finding.span,
            message=finding.message,
        )

    @property
    def sort_key(self) -> tuple[int, str, int, str]:
        return (self.span.start, self.rule_id, self.span.end, self.message)

    @property
    def dedupe_key(self) -> tuple[str, int, int]:
        return (self.rule_id, self.span.start, self.span.end)

    @property
    def location(self) -> str:
        return f"{self.file_path}:{self.span.line}:{self.span.column}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file_path,
            "ruleId": self.rule_id,
            "severity": self.severity.value,
            "kind": self.kind.value,
            "span": self.span.to_dict(),
            "message": self.message,
        }

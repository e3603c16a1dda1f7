"""Exceptions raised by the lint engine."""


class LintError(Exception):
    """Base class for all lint engine errors."""


class DuplicateRuleId(LintError):
    """A rule with the same id is already registered."""

    def __init__(self, rule_id: str):
        self.rule_id = rule_id
        super().__init__(f"Rule '{rule_id}' is already registered")


class RegistryFrozen(LintError):
    """The registry no longer accepts rules."""

    def __init__(self, rule_id: str):
        self.rule_id = rule_id
        super().__init__(f"Cannot register '{rule_id}': registry is frozen")


class UnknownRuleId(LintError):
    """A rule id was requested that is not registered."""

    def __init__(self, rule_id: str):
        self.rule_id = rule_id
        super().__init__(f"Unknown rule '{rule_id}'")


class DetectorFault(LintError):
    """A detector raised or returned data the driver cannot use."""

    def __init__(self, rule_id: str, reason: str):
        self.rule_id = rule_id
        self.reason = reason
        super().__init__(f"Detector '{rule_id}' failed: {reason}")


class ParseError(LintError):
    """A source file could not be turned into a usable syntax tree."""

    def __init__(self, file_path: str, reason: str, line: int = 1, column: int = 1, offset: int = 0):
        self.file_path = file_path
        self.reason = reason
        self.line = line
        self.column = column
        self.offset = offset
        super().__init__(f"{file_path}:{line}:{column}: {reason}")


class MalformedFixture(LintError):
    """A fixture file does not follow the VALID/INVALID layout."""

    def __init__(self, fixture_path: str, reason: str):
        self.fixture_path = fixture_path
        self.reason = reason
        super().__init__(f"Malformed fixture {fixture_path}: {reason}")


class FixtureMismatch(AssertionError):
    """Findings for a fixture did not match its VALID/INVALID partition."""

    def __init__(self, fixture_path: str, problems: list[str]):
        self.fixture_path = fixture_path
        self.problems = problems
        details = "\n".join(f"  - {p}" for p in problems)
        super().__init__(f"Fixture {fixture_path} failed:\n{details}")

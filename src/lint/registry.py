"""Rule definitions and the rule registry.

The registry is the central authority consulted by the driver:
1. Rules are registered once, in a fixed order
2. The registry is frozen before any analysis runs
3. Lookups by id or category never mutate it
"""

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from typing import Any

import structlog
from pydantic import BaseModel

from src.lint.errors import DuplicateRuleId, RegistryFrozen, UnknownRuleId
from src.lint.frontend import SyntaxTree
from src.models.diagnostics import Finding, RuleCategory, Severity

logger = structlog.get_logger()

Detector = Callable[[SyntaxTree, Any], list[Finding]]


@dataclass(frozen=True)
class Rule:
    """A single convention rule.

    ``detect`` is a pure function ``(tree, options) -> findings``. Rules
    with settings carry a pydantic ``options_model``; ``options`` is
    always an instance of it (or None for option-less rules).
    """

    id: str
    category: RuleCategory
    severity: Severity
    detect: Detector
    description: str = ""
    options_model: type[BaseModel] | None = None
    options: BaseModel | None = None

    def __post_init__(self) -> None:
        if self.options_model is not None and self.options is None:
            object.__setattr__(self, "options", self.options_model())

    def with_options(self, raw: Mapping[str, Any]) -> "Rule":
        """Return a copy configured with validated options."""
        if self.options_model is None:
            if raw:
                raise ValueError(f"Rule '{self.id}' takes no options")
            return self
        return replace(self, options=self.options_model.model_validate(dict(raw)))

    def with_severity(self, severity: Severity) -> "Rule":
        return replace(self, severity=severity)

    def run(self, tree: SyntaxTree) -> list[Finding]:
        return self.detect(tree, self.options)


class RuleRegistry:
    """Append-only registry of rules, keyed by id."""

    def __init__(self):
        self._rules: dict[str, Rule] = {}
        self._by_category: dict[RuleCategory, list[Rule]] = {}
        self._frozen = False
        self._logger = logger.bind(component="RuleRegistry")

    def register(self, rule: Rule) -> None:
        """Register a rule.

        Raises:
            DuplicateRuleId: if a rule with the same id exists
            RegistryFrozen: if the registry has been frozen
        """
        if self._frozen:
            raise RegistryFrozen(rule.id)
        if rule.id in self._rules:
            raise DuplicateRuleId(rule.id)

        self._rules[rule.id] = rule
        self._by_category.setdefault(rule.category, []).append(rule)
        self._logger.debug("Registered rule", rule=rule.id, category=rule.category.value)

    def register_all(self, rules: Iterable[Rule]) -> None:
        for rule in rules:
            self.register(rule)

    def freeze(self) -> None:
        """Freeze the registry, preventing further registrations."""
        self._frozen = True
        self._logger.info("Registry frozen", rule_count=len(self._rules))

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, rule_id: str) -> Rule:
        """Get a rule by id."""
        try:
            return self._rules[rule_id]
        except KeyError:
            raise UnknownRuleId(rule_id) from None

    def all(self) -> list[Rule]:
        """Get all rules in registration order."""
        return list(self._rules.values())

    def by_category(self, category: RuleCategory) -> list[Rule]:
        """Get the rules of one category in registration order."""
        return list(self._by_category.get(category, []))

    def select(
        self,
        rule_ids: Iterable[str] | None = None,
        categories: Iterable[RuleCategory] | None = None,
        exclude: Iterable[str] | None = None,
    ) -> list[Rule]:
        """Select a subset of rules, preserving registration order.

        Args:
            rule_ids: Only these rules (all when empty or None)
            categories: Only rules of these categories
            exclude: Rules to leave out

        Raises:
            UnknownRuleId: if any requested or excluded id is not registered
        """
        wanted = set(rule_ids or [])
        excluded = set(exclude or [])
        for rule_id in wanted | excluded:
            if rule_id not in self._rules:
                raise UnknownRuleId(rule_id)
        wanted_categories = set(categories or [])

        return [
            rule for rule in self._rules.values()
            if (not wanted or rule.id in wanted)
            and (not wanted_categories or rule.category in wanted_categories)
            and rule.id not in excluded
        ]

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._rules)

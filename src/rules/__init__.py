"""Builtin convention rules.

Rules are registered in a fixed order:
- Functional purity
- Reactive components (structure, then markup hygiene)
- Data-fetching hooks
- Router
"""

import structlog

from src.lint.config import LintSettings
from src.lint.registry import Rule, RuleRegistry

from . import components, functional, markup, query, router

logger = structlog.get_logger()


def builtin_rules() -> list[Rule]:
    """Every builtin rule with default options, in registration order."""
    return [
        *functional.RULES,
        *components.RULES,
        *markup.RULES,
        *query.RULES,
        *router.RULES,
    ]


def build_registry(settings: LintSettings | None = None) -> RuleRegistry:
    """Register the configured builtin rules and freeze the registry.

    Selection (``rules``, ``categories``, ``disabled_rules``), per-rule
    options and severity overrides all come from ``settings``.

    Raises:
        UnknownRuleId: if settings name a rule that does not exist
        ValueError: if rule options fail validation
    """
    settings = settings or LintSettings()

    catalog = RuleRegistry()
    catalog.register_all(builtin_rules())
    for rule_id in [*settings.rule_options, *settings.severity_overrides]:
        catalog.get(rule_id)
    selected = catalog.select(settings.rules, settings.categories, settings.disabled_rules)

    registry = RuleRegistry()
    for rule in selected:
        if rule.id in settings.rule_options:
            rule = rule.with_options(settings.rule_options[rule.id])
        if rule.id in settings.severity_overrides:
            rule = rule.with_severity(settings.severity_overrides[rule.id])
        registry.register(rule)
    registry.freeze()

    logger.info("Registry built", rules=len(registry), total=len(catalog))
    return registry


__all__ = [
    "build_registry",
    "builtin_rules",
]

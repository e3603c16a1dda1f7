"""Tests for rule definitions, the registry and registry construction."""

import pytest
from pydantic import ValidationError

from src.lint.config import LintSettings
from src.lint.errors import DuplicateRuleId, RegistryFrozen, UnknownRuleId
from src.lint.registry import Rule, RuleRegistry
from src.models.diagnostics import RuleCategory, Severity
from src.rules import build_registry, builtin_rules
from src.rules.functional import NoLetOptions


def _noop(tree, options):
    return []


def _rule(rule_id: str, category: RuleCategory = RuleCategory.FUNCTIONAL) -> Rule:
    return Rule(rule_id, category, Severity.ERROR, _noop)


class TestRuleRegistry:
    """Tests for the RuleRegistry."""

    def test_register_and_get(self):
        """Test that a registered rule can be looked up by id."""
        registry = RuleRegistry()
        rule = _rule("functional/a")
        registry.register(rule)

        assert registry.get("functional/a") is rule
        assert "functional/a" in registry
        assert len(registry) == 1

    def test_duplicate_id_rejected(self):
        """Test that registering the same id twice fails."""
        registry = RuleRegistry()
        registry.register(_rule("functional/a"))

        with pytest.raises(DuplicateRuleId) as exc_info:
            registry.register(_rule("functional/a"))
        assert exc_info.value.rule_id == "functional/a"

    def test_frozen_registry_rejects_rules(self):
        """Test that a frozen registry refuses registrations."""
        registry = RuleRegistry()
        registry.register(_rule("functional/a"))
        registry.freeze()

        assert registry.frozen
        with pytest.raises(RegistryFrozen):
            registry.register(_rule("functional/b"))
        assert len(registry) == 1

    def test_unknown_rule(self):
        """Test that looking up a missing id raises UnknownRuleId."""
        with pytest.raises(UnknownRuleId):
            RuleRegistry().get("functional/missing")

    def test_registration_order_preserved(self):
        """Test that all() and by_category() keep registration order."""
        registry = RuleRegistry()
        registry.register_all([
            _rule("router/b", RuleCategory.ROUTER),
            _rule("functional/a"),
            _rule("router/a", RuleCategory.ROUTER),
        ])

        assert [r.id for r in registry.all()] == ["router/b", "functional/a", "router/a"]
        assert [r.id for r in registry.by_category(RuleCategory.ROUTER)] == ["router/b", "router/a"]
        assert registry.by_category(RuleCategory.DATA_FETCHING_HOOK) == []
        assert [r.id for r in registry] == ["router/b", "functional/a", "router/a"]

    def test_select(self):
        """Test selecting by id, by category and with exclusions."""
        registry = RuleRegistry()
        registry.register_all([
            _rule("functional/a"),
            _rule("functional/b"),
            _rule("router/a", RuleCategory.ROUTER),
        ])

        assert [r.id for r in registry.select()] == ["functional/a", "functional/b", "router/a"]
        assert [r.id for r in registry.select(["router/a", "functional/a"])] == ["functional/a", "router/a"]
        assert [r.id for r in registry.select(categories=[RuleCategory.ROUTER])] == ["router/a"]
        assert [r.id for r in registry.select(exclude=["functional/b"])] == ["functional/a", "router/a"]

    def test_select_unknown_id(self):
        """Test that selecting or excluding a missing id fails loudly."""
        registry = RuleRegistry()
        registry.register(_rule("functional/a"))

        with pytest.raises(UnknownRuleId):
            registry.select(["functional/typo"])
        with pytest.raises(UnknownRuleId):
            registry.select(exclude=["functional/typo"])


class TestRule:
    """Tests for Rule options and overrides."""

    def test_default_options(self):
        """Test that rules with an options model get default options."""
        rule = Rule("functional/no-let", RuleCategory.FUNCTIONAL, Severity.ERROR, _noop, options_model=NoLetOptions)

        assert isinstance(rule.options, NoLetOptions)
        assert rule.options.allow_in_for_loop_init is False

    def test_with_options_uses_aliases(self):
        """Test that options are validated from their camelCase names."""
        rule = Rule("functional/no-let", RuleCategory.FUNCTIONAL, Severity.ERROR, _noop, options_model=NoLetOptions)
        configured = rule.with_options({"allowInForLoopInit": True})

        assert configured.options.allow_in_for_loop_init is True
        assert rule.options.allow_in_for_loop_init is False

    def test_with_options_rejects_unknown_keys(self):
        """Test that unknown option keys fail validation."""
        rule = Rule("functional/no-let", RuleCategory.FUNCTIONAL, Severity.ERROR, _noop, options_model=NoLetOptions)

        with pytest.raises(ValidationError):
            rule.with_options({"allowEverything": True})

    def test_options_on_optionless_rule(self):
        """Test that options for a rule without settings are rejected."""
        with pytest.raises(ValueError):
            _rule("functional/a").with_options({"anything": 1})
        assert _rule("functional/a").with_options({}).options is None

    def test_with_severity(self):
        """Test overriding severity returns a modified copy."""
        rule = _rule("functional/a")
        assert rule.with_severity(Severity.WARNING).severity == Severity.WARNING
        assert rule.severity == Severity.ERROR


class TestBuildRegistry:
    """Tests for building the builtin registry from settings."""

    def test_builtin_rules_unique(self):
        """Test that builtin rule ids are unique and namespaced."""
        ids = [rule.id for rule in builtin_rules()]

        assert len(ids) == len(set(ids))
        assert all(rule_id.split("/")[0] in {"functional", "solid", "query", "router"} for rule_id in ids)

    def test_every_category_populated(self, registry: RuleRegistry):
        """Test that each category has rules."""
        for category in RuleCategory:
            assert registry.by_category(category)

    def test_default_registry_is_frozen(self, registry: RuleRegistry):
        """Test that the built registry is frozen and complete."""
        assert registry.frozen
        assert len(registry) == len(builtin_rules())

    def test_select_by_settings(self):
        """Test rule and category selection through settings."""
        registry = build_registry(LintSettings(
            categories=[RuleCategory.ROUTER],
            disabled_rules=["router/create-route-property-order"],
        ))

        assert [r.id for r in registry.all()] == ["router/route-param-names"]

    def test_options_and_severity_overrides(self):
        """Test that configured options and severities reach the rules."""
        registry = build_registry(LintSettings(
            rule_options={"functional/no-let": {"allowInForLoopInit": True}},
            severity_overrides={"functional/no-let": "warning"},
        ))
        rule = registry.get("functional/no-let")

        assert rule.options.allow_in_for_loop_init is True
        assert rule.severity == Severity.WARNING

    def test_unknown_rule_in_settings(self):
        """Test that settings naming a missing rule fail."""
        with pytest.raises(UnknownRuleId):
            build_registry(LintSettings(rule_options={"functional/nope": {}}))
        with pytest.raises(UnknownRuleId):
            build_registry(LintSettings(rules=["functional/nope"]))

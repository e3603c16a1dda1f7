"""Runs every rule against its fixture file."""

from pathlib import Path

import pytest

from src.lint.harness import FixtureHarness, rule_ids_for_fixture
from src.lint.registry import RuleRegistry

FIXTURES_DIR = Path(__file__).parent / "fixtures"
FIXTURE_FILES = sorted(p for p in FIXTURES_DIR.rglob("*") if p.suffix in {".ts", ".tsx"})


@pytest.mark.parametrize("fixture_path", FIXTURE_FILES, ids=lambda p: p.relative_to(FIXTURES_DIR).as_posix())
def test_fixture(harness: FixtureHarness, fixture_path: Path):
    """Test that the VALID region is clean and each sub-case yields one finding."""
    report = harness.check(fixture_path)

    assert report.passed
    assert len(report.diagnostics) == len(report.fixture.cases)


def test_every_rule_has_a_fixture(registry: RuleRegistry):
    """Test that each builtin rule is covered by a fixture file."""
    covered = {rule_id for path in FIXTURE_FILES for rule_id in rule_ids_for_fixture(path)}

    assert {rule.id for rule in registry.all()} == covered

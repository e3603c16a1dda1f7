"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest
import structlog

from src.lint.driver import AnalysisDriver
from src.lint.frontend import SourceParser
from src.lint.harness import FixtureHarness
from src.lint.registry import RuleRegistry
from src.models.diagnostics import Diagnostic
from src.rules import build_registry

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore default structlog configuration after each test.

    The CLI and ``configure_logging`` bind output to the current stderr,
    which pytest replaces per test.
    """
    yield
    structlog.reset_defaults()


@pytest.fixture
def parser() -> SourceParser:
    """Create a source parser."""
    return SourceParser()


@pytest.fixture
def registry() -> RuleRegistry:
    """Create a frozen registry holding every builtin rule."""
    return build_registry()


@pytest.fixture
def driver(registry: RuleRegistry) -> AnalysisDriver:
    """Create a driver over the builtin rules."""
    return AnalysisDriver(registry)


@pytest.fixture
def harness(driver: AnalysisDriver) -> FixtureHarness:
    """Create a fixture harness over the builtin rules."""
    return FixtureHarness(driver)


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the per-rule fixture files."""
    return FIXTURES_DIR


@pytest.fixture
def lint(driver: AnalysisDriver) -> Callable[..., list[Diagnostic]]:
    """Analyze a snippet with a single rule.

    TSX is the default grammar; pass ``file_path="x.ts"`` for plain
    TypeScript.
    """

    def run(code: str, rule_id: str, file_path: str = "snippet.tsx") -> list[Diagnostic]:
        rules = driver.registry.select([rule_id])
        return driver.analyze_source(code, file_path, rules).diagnostics

    return run


@pytest.fixture
def lint_with(driver: AnalysisDriver) -> Callable[..., list[Diagnostic]]:
    """Analyze a snippet with a single rule configured with ``options``."""

    def run(code: str, rule_id: str, options: dict, file_path: str = "snippet.tsx") -> list[Diagnostic]:
        rule = driver.registry.get(rule_id).with_options(options)
        return driver.analyze_source(code, file_path, [rule]).diagnostics

    return run


@pytest.fixture
def sample_clean_component() -> str:
    """A small Solid component that follows every convention."""
    return '''import { createSignal, For, Show } from "solid-js";

type Todo = {
  readonly id: number;
  readonly label: string;
};

export function TodoList(props: { readonly todos: readonly Todo[] }) {
  const [filter, setFilter] = createSignal("");
  return (
    <section class="todos">
      <input value={filter()} onInput={(event) => setFilter(event.currentTarget.value)} />
      <Show when={props.todos.length > 0}>
        <For each={props.todos}>{(todo) => <p>{todo.label}</p>}</For>
      </Show>
    </section>
  );
}
'''


@pytest.fixture
def sample_code_with_violations() -> str:
    """A component breaking several conventions at once."""
    return '''import { createSignal } from "solid-js";

let renders = 0;

export function Counter({ start }: { start: number }) {
  const [count, setCount] = createSignal(start);
  const history = [];
  history.push(start);
  return <button className="counter" onClick={() => setCount(count() + 1)}>{count}</button>;
}
'''

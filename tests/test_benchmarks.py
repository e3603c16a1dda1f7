"""Performance benchmark suite for the convention linter.

Measures performance of key components:
- Parsing throughput
- Full-registry analysis of a component file
- Concurrent batch analysis
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import pytest

from src.lint.driver import AnalysisDriver, analyze
from src.lint.frontend import SourceParser
from src.lint.registry import RuleRegistry


@dataclass
class BenchmarkResult:
    """Result of a benchmark run."""

    name: str
    iterations: int
    total_time: float
    avg_time: float
    min_time: float
    max_time: float
    ops_per_sec: float
    metadata: dict[str, Any]

    def __str__(self) -> str:
        return (
            f"{self.name}:\n"
            f"  Iterations: {self.iterations}\n"
            f"  Total: {self.total_time:.3f}s\n"
            f"  Avg: {self.avg_time*1000:.2f}ms\n"
            f"  Min: {self.min_time*1000:.2f}ms\n"
            f"  Max: {self.max_time*1000:.2f}ms\n"
            f"  Ops/sec: {self.ops_per_sec:.1f}"
        )


def benchmark(
    name: str,
    func: Callable,
    iterations: int = 20,
    warmup: int = 2,
    **kwargs,
) -> BenchmarkResult:
    """Run a synchronous benchmark.

    Args:
        name: Benchmark name
        func: Function to benchmark
        iterations: Number of iterations
        warmup: Warmup iterations (not counted)
        **kwargs: Arguments to pass to func

    Returns:
        Benchmark result
    """
    # Warmup
    for _ in range(warmup):
        func(**kwargs)

    # Benchmark
    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        func(**kwargs)
        elapsed = time.perf_counter() - start
        times.append(elapsed)

    total_time = sum(times)
    avg_time = total_time / iterations
    min_time = min(times)
    max_time = max(times)
    ops_per_sec = iterations / total_time if total_time > 0 else 0

    return BenchmarkResult(
        name=name,
        iterations=iterations,
        total_time=total_time,
        avg_time=avg_time,
        min_time=min_time,
        max_time=max_time,
        ops_per_sec=ops_per_sec,
        metadata={k: v for k, v in kwargs.items() if isinstance(v, (int, str))},
    )


def make_component_file(count: int) -> str:
    """A TSX module with ``count`` small components mixing clean and flagged code."""
    parts = ['import { createSignal, For, Show } from "solid-js";\n']
    for i in range(count):
        parts.append(f'''
export function Widget{i}(props: {{ readonly items: readonly string[] }}) {{
  const [open, setOpen] = createSignal(false);
  let clicks = {i};
  return (
    <section class="widget">
      <button onClick={{() => setOpen(!open())}}>toggle</button>
      <Show when={{open()}}>
        <For each={{props.items}}>{{(item) => <p>{{item}}</p>}}</For>
      </Show>
      <span className="count">{{clicks}}</span>
    </section>
  );
}}
''')
    return "".join(parts)


# =============================================================================
# Front-end Benchmarks
# =============================================================================


class TestParsingBenchmarks:
    """Benchmarks for the syntax front-end."""

    def test_benchmark_parse_large_file(self, parser: SourceParser):
        """Benchmark parsing a module with many components."""
        code = make_component_file(100)

        result = benchmark("parse_large_file", parser.parse, code=code, file_path="widgets.tsx")

        print(f"\n{result}")
        assert result.avg_time < 1.0


# =============================================================================
# Analysis Benchmarks
# =============================================================================


class TestAnalysisBenchmarks:
    """Benchmarks for running the full rule set."""

    def test_benchmark_all_rules(self, parser: SourceParser, registry: RuleRegistry):
        """Benchmark every builtin rule over one large file."""
        tree = parser.parse(make_component_file(50), "widgets.tsx")
        rules = registry.all()

        result = benchmark("analyze_all_rules", analyze, iterations=5, tree=tree, rules=rules)

        print(f"\n{result}")
        assert result.avg_time < 10.0

    def test_findings_scale_with_input(self, parser: SourceParser, registry: RuleRegistry):
        """Test that each generated component contributes its own findings."""
        small = analyze(parser.parse(make_component_file(2), "a.tsx"), registry.all())
        large = analyze(parser.parse(make_component_file(10), "b.tsx"), registry.all())

        assert len(small) > 0
        assert len(large) > len(small)

    @pytest.mark.parametrize("workers", [1, 4])
    def test_benchmark_batch(self, tmp_path: Path, registry: RuleRegistry, workers: int):
        """Benchmark analyzing a directory of files."""
        for i in range(20):
            (tmp_path / f"widget{i}.tsx").write_text(make_component_file(5), encoding="utf-8")
        driver = AnalysisDriver(registry)
        driver.settings = driver.settings.model_copy(update={"max_workers": workers})

        result = benchmark("batch", driver.check_paths, iterations=3, warmup=1, paths=[tmp_path])

        print(f"\n{result}")
        assert result.avg_time < 30.0

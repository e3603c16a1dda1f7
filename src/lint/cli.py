"""Command line interface for the convention linter."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from src.lint.config import LintSettings, configure_logging, load_settings
from src.lint.driver import AnalysisDriver
from src.lint.errors import LintError
from src.lint.harness import FixtureHarness
from src.lint.reporter import ReportFormat, ReportGenerator
from src.models.diagnostics import RuleCategory, Severity

app = typer.Typer(
    name="convlint",
    help="Convention linter for Solid components, TanStack Query hooks and TanStack Router routes.",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

FIXTURE_EXTENSIONS = (".ts", ".tsx")


def _fail(message: str, code: int = 2) -> None:
    err_console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code)


def _driver(settings: LintSettings) -> AnalysisDriver:
    try:
        return AnalysisDriver(settings=settings)
    except (LintError, ValueError) as e:
        _fail(str(e))


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level for diagnostics on stderr"),
) -> None:
    configure_logging(log_level)


@app.command()
def check(
    paths: list[Path] = typer.Argument(..., help="Files or directories to lint"),
    rule: list[str] = typer.Option(None, "--rule", "-r", help="Only run these rules"),
    category: list[RuleCategory] = typer.Option(None, "--category", "-c", help="Only run these categories"),
    format: ReportFormat | None = typer.Option(None, "--format", "-f", help="Report format"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the report to a file"),
    config: Path | None = typer.Option(None, "--config", help="JSON config file"),
) -> None:
    """Lint files and exit non-zero when any error is reported."""
    try:
        settings = load_settings(
            config,
            rules=rule or None,
            categories=category or None,
            report_format=format.value if format else None,
        )
        report_format = ReportFormat(settings.report_format)
    except (LintError, ValueError, OSError) as e:
        _fail(str(e))

    driver = _driver(settings)
    results = driver.check_paths(paths)
    generator = ReportGenerator(driver.registry.all())

    if output is not None:
        generator.save_report(results, output, format)
        console.print(f"Report written to [bold]{output}[/bold]")
    else:
        typer.echo(generator.generate(results, report_format))

    if not all(result.passed for result in results):
        raise typer.Exit(1)


@app.command()
def rules(
    category: list[RuleCategory] = typer.Option(None, "--category", "-c", help="Only list these categories"),
    config: Path | None = typer.Option(None, "--config", help="JSON config file"),
) -> None:
    """List the registered rules."""
    try:
        settings = load_settings(config, categories=category or None)
    except (LintError, ValueError, OSError) as e:
        _fail(str(e))
    registry = _driver(settings).registry

    table = Table(title="Registered Rules")
    table.add_column("Rule", style="cyan")
    table.add_column("Category")
    table.add_column("Severity")
    table.add_column("Options", style="dim")
    table.add_column("Description")

    for r in registry.all():
        severity = "[red]error[/red]" if r.severity == Severity.ERROR else "[yellow]warning[/yellow]"
        option_names = ""
        if r.options_model is not None:
            option_names = ", ".join(
                info.alias or name for name, info in r.options_model.model_fields.items()
            )
        table.add_row(r.id, r.category.value, severity, option_names, r.description)

    console.print(table)
    console.print(f"\n{len(registry)} rules")


def _fixture_files(paths: list[Path]) -> list[Path]:
    files = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(p for p in path.rglob("*") if p.suffix in FIXTURE_EXTENSIONS))
        else:
            files.append(path)
    return files


@app.command()
def fixture(
    paths: list[Path] = typer.Argument(..., help="Fixture files or directories"),
    rule: list[str] = typer.Option(None, "--rule", "-r", help="Rules to check (default: from the file name)"),
    config: Path | None = typer.Option(None, "--config", help="JSON config file with rule options"),
) -> None:
    """Check fixture files against their VALID/INVALID annotations."""
    try:
        settings = load_settings(config)
    except (LintError, ValueError, OSError) as e:
        _fail(str(e))
    harness = FixtureHarness(_driver(settings))
    failed = 0

    for path in _fixture_files(paths):
        try:
            report = harness.run(path, rule or None)
        except LintError as e:
            console.print(f"[red]✗ ERROR[/red] {path}: {e}")
            failed += 1
            continue

        if report.passed:
            console.print(f"[green]✓ PASS[/green] {path} ({len(report.fixture.cases)} sub-cases)")
        else:
            failed += 1
            console.print(f"[red]✗ FAIL[/red] {path}")
            for problem in report.problems:
                console.print(f"    - {problem}", markup=False)

    if failed:
        console.print(f"\n[red]{failed} fixture(s) failed[/red]")
        raise typer.Exit(1)

"""CLI entry point for the test analyzer."""

from __future__ import annotations

import logging
import sys
from datetime import date
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from uxdash.errors import AnalysisError, NoTestFilesFoundError, ResultsNotFoundError
from uxdash.models.config import AnalyzerConfig
from uxdash.models.test_metadata import AnalysisResult
from uxdash.orchestrator import Orchestrator

console = Console()

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def attach_log_file(log_dir: str) -> Path:
    """Also write log records to a daily file under ``log_dir``."""
    path = Path(log_dir) / f"dashboard-{date.today().isoformat()}.log"
    path.parent.mkdir(parents=True, exist_ok=True)
    root = logging.getLogger()
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == path.resolve():
            return path
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return path


def _load_config(config: str) -> AnalyzerConfig:
    try:
        cfg = AnalyzerConfig.load(config)
    except FileNotFoundError:
        logging.getLogger(__name__).debug("Config file %s not found, using defaults", config)
        cfg = AnalyzerConfig()
    if cfg.log_dir:
        attach_log_file(cfg.log_dir)
    return cfg


def _print_summary(result: AnalysisResult, title: str) -> None:
    table = Table(title=title)
    table.add_column("Metric", style="bold")
    table.add_column("Value")
    table.add_row("Tests Analyzed", str(result.tests_analyzed))
    for area in result.coverage_matrix.areas:
        table.add_row(area, str(result.coverage_matrix.coverage.get(area, 0)))
    degraded = sum(1 for record in result.test_metadata if record.error)
    table.add_row("Errors", f"[red]{degraded}[/red]" if degraded else "0")
    console.print(table)


def _print_tally(counts: dict[str, int], title: str) -> None:
    if not counts:
        return
    table = Table(title=title)
    table.add_column("Type", style="bold")
    table.add_column("Count")
    for name, count in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])):
        table.add_row(name, str(count))
    console.print(table)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """UX test dashboard analyzer"""
    setup_logging(verbose)


@cli.command()
@click.option("--config", "-c", default="uxdash-config.json", help="Config file path")
@click.option("--root", "-r", default=None, help="Scan this directory instead of resolving one")
@click.option("--pattern", "-p", default=None, help="Only analyze paths containing this text")
def analyze(config: str, root: str | None, pattern: str | None) -> None:
    """Analyze all test files and save the results."""
    cfg = _load_config(config)
    if pattern:
        cfg.search_pattern = pattern

    orchestrator = Orchestrator(cfg, root=root)
    try:
        result = orchestrator.run_analysis()
    except NoTestFilesFoundError as e:
        console.print(f"[yellow]{e}[/yellow]")
        sys.exit(1)
    except AnalysisError as e:
        console.print(f"[red]Analysis failed: {e}[/red]")
        sys.exit(1)

    console.print("\n[bold green]Analysis Complete[/bold green]")
    _print_summary(result, "Analysis Summary")
    console.print(f"  Results: [blue]{orchestrator.store.analysis_path}[/blue]")


@cli.command()
@click.option("--config", "-c", default="uxdash-config.json", help="Config file path")
def results(config: str) -> None:
    """Show the last saved analysis without rescanning."""
    cfg = _load_config(config)
    orchestrator = Orchestrator(cfg)
    try:
        result = orchestrator.load_last_results()
    except ResultsNotFoundError as e:
        console.print(f"[yellow]{e}[/yellow]")
        sys.exit(1)
    except AnalysisError as e:
        console.print(f"[red]Could not load results: {e}[/red]")
        sys.exit(1)

    _print_summary(result, "Last Analysis")
    _print_tally(result.quality_metrics.selector_types, "Selector Types")
    _print_tally(result.quality_metrics.assertion_coverage, "Assertion Types")


@cli.command()
@click.option("--config", "-c", default="uxdash-config.json", help="Config file path")
def init(config: str) -> None:
    """Create a default configuration file."""
    config_path = Path(config)
    if config_path.exists():
        if not click.confirm(f"{config_path} already exists. Overwrite?"):
            return

    AnalyzerConfig().save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nYou can now customize this file and run:")
    console.print("  [blue]uxdash analyze[/blue]")


if __name__ == "__main__":
    cli()

"""Baseline commands: update, analyze, status.

Exit codes follow CI conventions: skipped and rejected runs exit 0 because
"no update" is a valid outcome; missing results and write failures exit 1.
"""

from __future__ import annotations

import json
import random
from pathlib import Path  # noqa: TC003 Typer evaluates type hints at runtime
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from ci_baseline.context import ExecutionContext
from ci_baseline.delta import format_bytes
from ci_baseline.errors import BaselineError
from ci_baseline.models import METRICS, BaselineConfig, UpdateOutcome
from ci_baseline.snapshot import generate_mock_results, write_results
from ci_baseline.storage import FileBaselineStore
from ci_baseline.updater import BaselineUpdater

console = Console()

_OUTCOME_STYLES = {
    UpdateOutcome.NOT_MAIN_BRANCH: ("dim", "Not on a main-line branch, baseline unchanged"),
    UpdateOutcome.NOT_QUALIFYING_EVENT: ("dim", "Not a merge event, baseline unchanged"),
    UpdateOutcome.REJECTED: ("yellow", "Metrics rejected, baseline unchanged"),
    UpdateOutcome.CREATED: ("green", "Baseline created"),
    UpdateOutcome.UPDATED: ("green", "Baseline updated"),
}

_TREND_STYLES = {
    "improving": "green",
    "worsening": "red",
    "stable": "cyan",
    "insufficient_data": "dim",
}


def _format_metric(metric: str, value: float | None) -> str:
    if value is None:
        return "-"
    if metric == "bundle_size":
        return format_bytes(value)
    return f"{value:.1f}%"


def update(
    baseline_dir: Annotated[
        Path | None, typer.Option("--baseline-dir", "-d", help="Directory holding baseline files")
    ] = None,
    results: Annotated[
        Path | None, typer.Option("--results", "-r", help="Analysis results JSON")
    ] = None,
) -> None:
    """Gate the current metrics and roll them into the baseline."""
    config = BaselineConfig()
    store = FileBaselineStore(baseline_dir or config.baseline_dir)
    updater = BaselineUpdater(store, config=config, context=ExecutionContext())

    try:
        result = updater.run_from_path(results)
    except BaselineError as e:
        console.print(f"[red]Baseline update failed:[/red] {e}")
        raise typer.Exit(1) from None

    style, message = _OUTCOME_STYLES[result.outcome]
    console.print(f"[{style}]{message}[/{style}]")

    if result.outcome == UpdateOutcome.REJECTED and result.gate is not None:
        console.print(f"Score: {result.gate.score:.1f}%")
        for issue in result.gate.issues:
            console.print(f"  [yellow]✗[/yellow] {issue}")
    elif result.summary is not None:
        console.print(f"History entries: {result.summary.history_length}")
        for metric in METRICS:
            trend = result.summary.trends.get(metric).trend
            color = _TREND_STYLES[trend]
            console.print(f"  {metric}: [{color}]{trend}[/{color}]")


def analyze(
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Where to write analysis results")
    ] = None,
    seed: Annotated[
        int | None, typer.Option("--seed", help="Seed for reproducible mock scores")
    ] = None,
) -> None:
    """Write mock analysis results for the current commit."""
    config = BaselineConfig()
    context = ExecutionContext()
    document = generate_mock_results(
        random.Random(seed),
        commit=context.sha or "unknown",
        branch=context.ref_name or "unknown",
    )
    path = write_results(output or config.results_path, document)
    console.print(f"[green]✓[/green] Analysis results written to [cyan]{path}[/cyan]")
    console.print(f"  Performance: {document['lighthouse']['performance']}")
    console.print(f"  Coverage (statements): {document['coverage']['statements']:.1f}%")
    console.print(f"  Bundle size: {round(document['bundleSize']['totalSize'] / 1024)}KB")


def status(
    baseline_dir: Annotated[
        Path | None, typer.Option("--baseline-dir", "-d", help="Directory holding baseline files")
    ] = None,
    output_format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: text or json")
    ] = "text",
) -> None:
    """Show the stored baseline, history size and latest trends."""
    config = BaselineConfig()
    store = FileBaselineStore(baseline_dir or config.baseline_dir)
    try:
        baseline = store.load_baseline()
        history = store.load_history()
        trends = store.load_trends()
    except BaselineError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    if output_format == "json":
        payload = {
            "baseline": baseline.model_dump(mode="json") if baseline else None,
            "history_length": len(history),
            "trends": trends.model_dump(mode="json") if trends else None,
        }
        console.print_json(json.dumps(payload))
        return
    if output_format != "text":
        console.print(f"[red]Unknown format: {output_format}. Use text or json.[/red]")
        raise typer.Exit(1)

    if baseline is None:
        console.print(f"[dim]No baseline in {store.directory}[/dim]")
        return

    table = Table(title=f"Baseline {baseline.commit[:8]} ({baseline.branch})")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Change", justify="right")
    table.add_column("Trend")
    for metric in METRICS:
        delta = baseline.delta.get(metric) if baseline.delta else None
        if delta is None:
            change = "-"
        elif delta.change_percent is None:
            change = f"{delta.change:+g}"
        else:
            change = f"{delta.change_percent:+.1f}%"
        trend = trends.get(metric).trend if trends else "insufficient_data"
        color = _TREND_STYLES[trend]
        table.add_row(
            metric,
            _format_metric(metric, baseline.get(metric)),
            change,
            f"[{color}]{trend}[/{color}]",
        )
    console.print(table)
    console.print(f"Last updated: {baseline.last_updated}  History entries: {len(history)}")


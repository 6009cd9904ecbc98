"""ci-baseline CLI."""

import logging

import typer

from ci_baseline.cli.baseline import analyze, status, update
from ci_baseline.models import BaselineConfig

app = typer.Typer(
    name="ci-baseline",
    help="Metrics baseline gate, history and trend tracking for CI pipelines",
    no_args_is_help=True,
)

app.command(help="Gate current metrics and update the baseline")(update)
app.command(help="Write mock analysis results")(analyze)
app.command(help="Show the stored baseline and trends")(status)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """ci-baseline CLI."""
    level = "DEBUG" if verbose else BaselineConfig().log_level.upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    app()

"""Delta calculation between a candidate snapshot and the stored baseline."""

from __future__ import annotations

from ci_baseline.models import (
    METRICS,
    Baseline,
    BaselineDelta,
    MetricDelta,
    MetricsSnapshot,
)


def calculate_delta(current: MetricsSnapshot, baseline: Baseline | None) -> BaselineDelta | None:
    """Per-metric change from the baseline to the current snapshot.

    Returns None when there is no baseline yet, which is distinct from a
    delta whose changes are all zero. Metrics missing on either side are
    left out. Inputs are never mutated.
    """
    if baseline is None:
        return None

    deltas: dict[str, MetricDelta] = {}
    for metric in METRICS:
        new = current.get(metric)
        old = baseline.get(metric)
        if new is None or old is None:
            continue
        deltas[metric] = metric_delta(new, old)

    return BaselineDelta(timestamp=current.timestamp, commit=current.commit, **deltas)


def metric_delta(current: float, baseline: float) -> MetricDelta:
    change = current - baseline
    return MetricDelta(
        current=current,
        baseline=baseline,
        change=change,
        change_percent=_pct_change(change, baseline),
    )


def _pct_change(change: float, baseline: float) -> float | None:
    """Percentage change relative to the baseline. None if the baseline is 0."""
    if baseline == 0:
        return None
    return (change / baseline) * 100


def format_bytes(size: float) -> str:
    """Human readable signed byte count, e.g. ``-1.5 KB``."""
    if size == 0:
        return "0 B"
    units = ("B", "KB", "MB", "GB")
    magnitude = abs(size)
    exponent = 0
    while magnitude >= 1024 and exponent < len(units) - 1:
        magnitude /= 1024
        exponent += 1
    sign = "-" if size < 0 else ""
    return f"{sign}{round(magnitude, 1):g} {units[exponent]}"

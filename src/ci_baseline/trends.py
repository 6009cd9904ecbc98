"""Trend Analyzer - classifies recent metric movement.

Each metric is fitted independently with an ordinary least-squares line,
using the position in the window (0..n-1) as x:

    slope = (n*Σxy - Σx*Σy) / (n*Σx² - (Σx)²)

Classification:
- fewer than 2 values: insufficient_data
- |slope| below the stable threshold: stable / no_change
- otherwise direction follows the slope sign; the improving/worsening label
  follows it too, flipped for inverse metrics (bundle size, where smaller
  is better)

Nothing is carried between runs; trends are always recomputed from history.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ci_baseline.history import TREND_WINDOW, metric_series, trailing_window
from ci_baseline.models import (
    METRICS,
    Direction,
    HistoryEntry,
    MetricName,
    Trend,
    TrendAnalysis,
    TrendResult,
)

logger = logging.getLogger("ci_baseline.trends")

STABLE_SLOPE_THRESHOLD = 0.5

# Metrics where a decreasing value is the desirable direction.
INVERSE_METRICS: frozenset[MetricName] = frozenset({"bundle_size"})


def regression_slope(values: Sequence[float]) -> float:
    """Least-squares slope of ``values`` against their index."""
    n = len(values)
    if n < 2:
        msg = "At least 2 values are required to fit a slope"
        raise ValueError(msg)
    x_sum = n * (n - 1) / 2
    y_sum = sum(values)
    xy_sum = sum(x * y for x, y in enumerate(values))
    x2_sum = sum(x * x for x in range(n))
    return (n * xy_sum - x_sum * y_sum) / (n * x2_sum - x_sum * x_sum)


def analyze_trend(
    values: Sequence[float],
    *,
    inverse: bool = False,
    stable_threshold: float = STABLE_SLOPE_THRESHOLD,
) -> TrendResult:
    """Classify the direction of one metric's series.

    Args:
        values: Non-null metric values in chronological order
        inverse: True when decreasing values are an improvement
        stable_threshold: Slopes below this magnitude count as stable

    Returns:
        TrendResult; slope and direction are None for insufficient data.
    """
    if len(values) < 2:
        return TrendResult(trend=Trend.INSUFFICIENT_DATA)

    slope = regression_slope(values)

    if abs(slope) < stable_threshold:
        return TrendResult(trend=Trend.STABLE, slope=slope, direction=Direction.NO_CHANGE)

    rising = slope > 0
    improving = rising != inverse
    return TrendResult(
        trend=Trend.IMPROVING if improving else Trend.WORSENING,
        slope=slope,
        direction=Direction.INCREASING if rising else Direction.DECREASING,
    )


def analyze_history(
    history: Sequence[HistoryEntry],
    *,
    window: int = TREND_WINDOW,
    stable_threshold: float = STABLE_SLOPE_THRESHOLD,
    commit: str | None = None,
) -> TrendAnalysis:
    """Trend per metric over the trailing ``window`` history entries."""
    recent = trailing_window(history, window)
    results: dict[str, TrendResult] = {}
    for metric in METRICS:
        series = metric_series(recent, metric)
        results[metric] = analyze_trend(
            series,
            inverse=metric in INVERSE_METRICS,
            stable_threshold=stable_threshold,
        )
        logger.debug(
            "Trend for %s over %d point(s): %s", metric, len(series), results[metric].trend
        )
    return TrendAnalysis(commit=commit, **results)

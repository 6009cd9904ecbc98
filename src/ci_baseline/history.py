"""Bounded history of accepted baselines.

Insertion order is chronological order. Once the cap is exceeded the oldest
entries are dropped, not archived.
"""

from __future__ import annotations

from collections.abc import Sequence

from ci_baseline.models import Baseline, HistoryEntry, HistoryMetadata, MetricName

HISTORY_LIMIT = 50
TREND_WINDOW = 5


def entry_from_baseline(baseline: Baseline) -> HistoryEntry:
    return HistoryEntry(
        timestamp=baseline.last_updated,
        commit=baseline.commit,
        branch=baseline.branch,
        performance=baseline.performance,
        coverage=baseline.coverage,
        bundle_size=baseline.bundle_size,
        metadata=HistoryMetadata(
            actor=baseline.metadata.creator,
            run_id=baseline.metadata.run_id,
        ),
    )


def append_entry(
    history: Sequence[HistoryEntry],
    entry: HistoryEntry,
    limit: int = HISTORY_LIMIT,
) -> list[HistoryEntry]:
    """Return a new history with ``entry`` appended and trimmed to ``limit``."""
    if limit < 1:
        msg = f"History limit must be positive, got {limit}"
        raise ValueError(msg)
    updated = [*history, entry]
    return updated[-limit:]


def trailing_window(
    history: Sequence[HistoryEntry], size: int = TREND_WINDOW
) -> list[HistoryEntry]:
    return list(history[-size:]) if size > 0 else []


def metric_series(entries: Sequence[HistoryEntry], metric: MetricName) -> list[float]:
    """Values of one metric in order, skipping entries where it is absent."""
    return [value for entry in entries if (value := entry.get(metric)) is not None]

"""Pytest configuration and fixtures for the baseline updater tests."""

import pytest

from ci_baseline.context import ExecutionContext
from ci_baseline.models import Baseline, BaselineMetadata, HistoryEntry, MetricsSnapshot
from ci_baseline.storage import InMemoryBaselineStore


@pytest.fixture
def good_snapshot() -> MetricsSnapshot:
    """Snapshot that passes every threshold."""
    return MetricsSnapshot(
        timestamp="2026-03-02T10:00:00Z",
        commit="abc1234",
        branch="main",
        performance=90,
        coverage=80,
        bundle_size=150_000,
    )


@pytest.fixture
def poor_snapshot() -> MetricsSnapshot:
    """Snapshot that fails performance and coverage."""
    return MetricsSnapshot(
        timestamp="2026-03-02T10:00:00Z",
        commit="bad0001",
        branch="main",
        performance=50,
        coverage=40,
        bundle_size=150_000,
    )


@pytest.fixture
def existing_baseline() -> Baseline:
    return Baseline(
        created="2026-02-01T09:00:00Z",
        last_updated="2026-03-01T09:00:00Z",
        commit="0ld5ha1",
        branch="main",
        performance=80,
        coverage=75,
        bundle_size=160_000,
        metadata=BaselineMetadata(creator="octocat", repository="acme/web", run_id="41"),
    )


@pytest.fixture
def main_push_context() -> ExecutionContext:
    return ExecutionContext(
        ref_name="main",
        event_name="push",
        actor="octocat",
        repository="acme/web",
        workflow="CI",
        run_id="42",
    )


@pytest.fixture
def memory_store() -> InMemoryBaselineStore:
    return InMemoryBaselineStore()


def _make_history(performance: list[float | None], **overrides) -> list[HistoryEntry]:
    """History entries with the given performance values, one per day."""
    return [
        HistoryEntry(
            timestamp=f"2026-01-{i + 1:02d}T00:00:00Z",
            commit=f"c{i:04d}",
            branch="main",
            performance=value,
            **overrides,
        )
        for i, value in enumerate(performance)
    ]


@pytest.fixture
def make_history():
    """Factory for chronological history entries keyed on performance values."""
    return _make_history

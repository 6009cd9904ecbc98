"""Property tests for the bounded history log and baseline persistence."""

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from ci_baseline.history import append_entry
from ci_baseline.models import Baseline, HistoryEntry
from ci_baseline.storage import FileBaselineStore

from .strategies import baselines, histories, history_entries


@given(
    history=histories(),
    entry=history_entries(index=99),
    limit=st.integers(min_value=1, max_value=60),
)
@settings(max_examples=300)
def test_append_respects_cap(history: list[HistoryEntry], entry: HistoryEntry, limit: int):
    updated = append_entry(history, entry, limit)
    assert len(updated) == min(len(history) + 1, limit)
    assert updated[-1] == entry
    assert updated[:-1] == history[len(history) + 1 - len(updated) :]


@given(history=histories(max_size=10), entries=st.lists(history_entries(), max_size=70))
@settings(max_examples=100)
def test_repeated_appends_never_exceed_cap(
    history: list[HistoryEntry], entries: list[HistoryEntry]
):
    for entry in entries:
        history = append_entry(history, entry)
        assert len(history) <= 50


@given(baseline=baselines())
@settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_baseline_file_round_trip(tmp_path, baseline: Baseline):
    store = FileBaselineStore(tmp_path)
    store.save_baseline(baseline)
    assert store.load_baseline() == baseline


@given(history=histories(max_size=20))
@settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_history_file_round_trip(tmp_path, history: list[HistoryEntry]):
    store = FileBaselineStore(tmp_path)
    store.save_history(history)
    assert store.load_history() == history

"""Baseline Updater - orchestrates gate, delta, history and trends.

State machine for one CI run:

    NotMainBranch        -> halt (nothing read or written)
    NotQualifyingEvent   -> halt (nothing read or written)
    NoResultsAvailable   -> MissingResultsError (fatal, nothing written)
    Evaluating           -> Acceptance Gate
    Rejected             -> rejection record written, baseline untouched
    Accepted             -> delta, history append, trends, then persist
                            baseline + history + trends + summary

INVARIANT: the baseline and history only change after an accepting gate.

Every accepted run is a full read-modify-write of the store. The store is
not locked; one updater per branch at a time is assumed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from whenever import Instant

from ci_baseline.context import ExecutionContext
from ci_baseline.delta import calculate_delta, format_bytes
from ci_baseline.gate import build_rejection, evaluate_snapshot
from ci_baseline.history import append_entry, entry_from_baseline
from ci_baseline.models import (
    Baseline,
    BaselineConfig,
    BaselineDelta,
    BaselineSummary,
    MetricsSnapshot,
    MetricValues,
    UpdateOutcome,
    UpdateResult,
)
from ci_baseline.snapshot import load_snapshot
from ci_baseline.storage import BaselineStore
from ci_baseline.trends import analyze_history

logger = logging.getLogger("ci_baseline.updater")

SnapshotLoader = Callable[[], MetricsSnapshot]


class BaselineUpdater:
    """Runs one baseline update against an injected store."""

    def __init__(
        self,
        store: BaselineStore,
        *,
        config: BaselineConfig | None = None,
        context: ExecutionContext | None = None,
    ) -> None:
        self.store = store
        self.config = config if config is not None else BaselineConfig()
        self.context = context if context is not None else ExecutionContext()

    def run(self, load: SnapshotLoader) -> UpdateResult:
        """Execute the update state machine.

        Args:
            load: Returns the candidate snapshot. Raising MissingResultsError
                aborts the run before anything is written.

        Returns:
            UpdateResult describing the terminal state.
        """
        logger.info(
            "Baseline update for branch=%s event=%s",
            self.context.ref_name or "unknown",
            self.context.event_name or "unknown",
        )

        if not self.context.is_main_branch(self.config.main_branches):
            logger.info("Not on a main-line branch, skipping baseline update")
            return UpdateResult(outcome=UpdateOutcome.NOT_MAIN_BRANCH)

        if not self.context.is_update_event(self.config.update_events):
            logger.info("Not a merge event, skipping baseline update")
            return UpdateResult(outcome=UpdateOutcome.NOT_QUALIFYING_EVENT)

        snapshot = load()
        existing = self.store.load_baseline()

        logger.info("Evaluating metrics for commit %s", snapshot.commit)
        gate = evaluate_snapshot(snapshot, self.config.criteria)

        if not gate.acceptable:
            logger.info("Metrics not acceptable for baseline (%.1f%%)", gate.score)
            for issue in gate.issues:
                logger.info("  - %s", issue)
            rejection = build_rejection(snapshot, gate)
            self.store.save_rejection(rejection)
            return UpdateResult(outcome=UpdateOutcome.REJECTED, gate=gate, rejection=rejection)

        logger.info("Metrics acceptable (%.1f%%)", gate.score)

        delta = calculate_delta(snapshot, existing)
        if delta is not None:
            _log_delta(delta)

        baseline = self._build_baseline(snapshot, existing, delta)
        history = append_entry(
            self.store.load_history(),
            entry_from_baseline(baseline),
            self.config.history_limit,
        )
        trends = analyze_history(
            history,
            window=self.config.trend_window,
            stable_threshold=self.config.stable_slope_threshold,
            commit=baseline.commit,
        )

        action = "updated" if existing is not None else "created"
        summary = BaselineSummary(
            action=action,
            commit=baseline.commit,
            branch=baseline.branch,
            metrics=MetricValues(
                performance=baseline.performance,
                coverage=baseline.coverage,
                bundle_size=baseline.bundle_size,
            ),
            delta=delta,
            trends=trends,
            metadata=baseline.metadata,
            history_length=len(history),
        )

        self.store.save_baseline(baseline)
        self.store.save_history(history)
        self.store.save_trends(trends)
        self.store.save_summary(summary)

        logger.info(
            "Baseline %s: %d metric(s), %d history entries",
            action,
            len(baseline.available_metrics()),
            len(history),
        )
        logger.info(
            "Trends: performance=%s coverage=%s bundle_size=%s",
            trends.performance.trend,
            trends.coverage.trend,
            trends.bundle_size.trend,
        )
        return UpdateResult(
            outcome=UpdateOutcome.UPDATED if existing is not None else UpdateOutcome.CREATED,
            gate=gate,
            summary=summary,
        )

    def run_from_path(self, path: Path | str | None = None) -> UpdateResult:
        """Run with the snapshot read from an analysis results file."""
        results_path = Path(path) if path is not None else Path(self.config.results_path)
        return self.run(lambda: load_snapshot(results_path))

    def _build_baseline(
        self,
        snapshot: MetricsSnapshot,
        existing: Baseline | None,
        delta: BaselineDelta | None,
    ) -> Baseline:
        now = Instant.now().format_iso()
        return Baseline(
            created=existing.created if existing is not None else now,
            last_updated=now,
            commit=snapshot.commit,
            branch=snapshot.branch if snapshot.branch != "unknown" else self.context.ref_name,
            performance=snapshot.performance,
            coverage=snapshot.coverage,
            bundle_size=snapshot.bundle_size,
            metadata=self.context.metadata(),
            delta=delta,
        )


def _log_delta(delta: BaselineDelta) -> None:
    logger.info("Baseline comparison:")
    if delta.performance is not None:
        logger.info("  Performance: %+.1f", delta.performance.change)
    if delta.coverage is not None:
        logger.info("  Coverage: %+.1f", delta.coverage.change)
    if delta.bundle_size is not None:
        change = delta.bundle_size.change
        sign = "+" if change > 0 else ""
        logger.info("  Bundle size: %s%s", sign, format_bytes(change))

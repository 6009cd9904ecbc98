"""Acceptance Gate - decides whether a snapshot may become the baseline.

Scoring:
- A present metric adds its weight to the total weight
- A present metric that meets its bound also adds its weight to the score
- Absent metrics are neither counted nor penalized
- score = passed / total * 100, or 0 when no metric is present

The gate fails closed: a snapshot without metrics is never acceptable.
Evaluation is pure, so the same candidate always yields the same result.
"""

from __future__ import annotations

import logging
import math

from ci_baseline.models import (
    AcceptanceCriteria,
    GateResult,
    MetricsSnapshot,
    RejectionRecord,
)

logger = logging.getLogger("ci_baseline.gate")


def evaluate_snapshot(
    snapshot: MetricsSnapshot,
    criteria: AcceptanceCriteria | None = None,
) -> GateResult:
    """Score a candidate snapshot against the weighted thresholds.

    Args:
        snapshot: Candidate metrics for this run
        criteria: Thresholds and weights (defaults to 70/60/1000KB)

    Returns:
        GateResult with the percentage score and one issue per failing
        metric, ordered performance, coverage, bundle size.
    """
    if criteria is None:
        criteria = AcceptanceCriteria()

    score = 0.0
    total_weight = 0.0
    issues: list[str] = []

    if snapshot.performance is not None:
        rule = criteria.performance
        total_weight += rule.weight
        if snapshot.performance >= rule.minimum:
            score += rule.weight
        else:
            issues.append(
                f"Performance too low: {_fmt(snapshot.performance)}% (min: {_fmt(rule.minimum)}%)"
            )

    if snapshot.coverage is not None:
        rule = criteria.coverage
        total_weight += rule.weight
        if snapshot.coverage >= rule.minimum:
            score += rule.weight
        else:
            issues.append(
                f"Coverage too low: {_fmt(snapshot.coverage)}% (min: {_fmt(rule.minimum)}%)"
            )

    if snapshot.bundle_size is not None:
        size_rule = criteria.bundle_size
        total_weight += size_rule.weight
        size_kb = size_in_kb(snapshot.bundle_size)
        if size_kb <= size_rule.max_kb:
            score += size_rule.weight
        else:
            issues.append(f"Bundle too large: {size_kb}KB (max: {size_rule.max_kb}KB)")

    percentage = (score / total_weight) * 100 if total_weight > 0 else 0.0
    acceptable = total_weight > 0 and percentage >= criteria.pass_percentage

    logger.debug(
        "Gate scored %.1f%% over %d metric(s), %d issue(s)",
        percentage,
        len(snapshot.available_metrics()),
        len(issues),
    )
    return GateResult(
        acceptable=acceptable,
        score=percentage,
        issues=issues,
        criteria=criteria,
    )


def build_rejection(snapshot: MetricsSnapshot, result: GateResult) -> RejectionRecord:
    """Audit record for a candidate the gate turned down."""
    return RejectionRecord(
        commit=snapshot.commit,
        score=result.score,
        issues=list(result.issues),
        criteria=result.criteria,
    )


def size_in_kb(size_bytes: int) -> int:
    """Whole KB, rounding halves up."""
    return math.floor(size_bytes / 1024 + 0.5)


def _fmt(value: float) -> str:
    """Full precision, without a trailing .0 on whole numbers."""
    number = float(value)
    return str(int(number)) if number.is_integer() else repr(number)

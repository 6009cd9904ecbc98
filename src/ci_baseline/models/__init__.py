"""Pydantic models for the baseline updater.

Data flow:
- MetricsSnapshot: one CI run's metrics (absent metric = None)
- GateResult: weighted threshold check deciding acceptance
- BaselineDelta: change versus the previous baseline
- HistoryEntry: bounded log of accepted snapshots
- TrendAnalysis: per-metric regression-slope classification

Terminal artifacts:
- BaselineSummary when a snapshot is accepted
- RejectionRecord when the gate fails
"""

from .config import (
    AcceptanceCriteria,
    BaselineConfig,
    MaximumSizeCriterion,
    MinimumCriterion,
)
from .metrics import (
    BASELINE_VERSION,
    METRICS,
    Baseline,
    BaselineDelta,
    BaselineMetadata,
    CoverageBreakdown,
    HistoryEntry,
    HistoryMetadata,
    MetricDelta,
    MetricName,
    MetricsSnapshot,
    MetricValues,
)
from .results import (
    BaselineSummary,
    Direction,
    GateResult,
    RejectionRecord,
    Trend,
    TrendAnalysis,
    TrendResult,
    UpdateOutcome,
    UpdateResult,
)

__all__ = [
    # Config
    "AcceptanceCriteria",
    "BaselineConfig",
    "MaximumSizeCriterion",
    "MinimumCriterion",
    # Metrics
    "BASELINE_VERSION",
    "METRICS",
    "Baseline",
    "BaselineDelta",
    "BaselineMetadata",
    "CoverageBreakdown",
    "HistoryEntry",
    "HistoryMetadata",
    "MetricDelta",
    "MetricName",
    "MetricsSnapshot",
    "MetricValues",
    # Results
    "BaselineSummary",
    "Direction",
    "GateResult",
    "RejectionRecord",
    "Trend",
    "TrendAnalysis",
    "TrendResult",
    "UpdateOutcome",
    "UpdateResult",
]

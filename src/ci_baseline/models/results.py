"""Records produced by a baseline update run.

The summary and rejection records are the only artifacts downstream
notifiers and PR commenters should read. They must not recompute gate,
delta or trend logic themselves.
"""

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field

from .config import AcceptanceCriteria
from .metrics import BaselineDelta, BaselineMetadata, MetricName, MetricValues, _now_iso


class Trend(StrEnum):
    INSUFFICIENT_DATA = "insufficient_data"
    STABLE = "stable"
    IMPROVING = "improving"
    WORSENING = "worsening"


class Direction(StrEnum):
    """Raw movement of the underlying value, regardless of desirability."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    NO_CHANGE = "no_change"


class TrendResult(BaseModel):
    trend: Trend
    slope: float | None = None
    direction: Direction | None = None


class TrendAnalysis(BaseModel):
    """Per-metric trends over the trailing history window.

    Always recomputed from history; persisted only as a report.
    """

    performance: TrendResult
    coverage: TrendResult
    bundle_size: TrendResult
    updated: str = Field(default_factory=_now_iso)
    commit: str | None = None

    def get(self, metric: MetricName) -> TrendResult:
        return getattr(self, metric)


class GateResult(BaseModel):
    """Outcome of the acceptance gate for one candidate snapshot."""

    acceptable: bool
    score: float = Field(description="Percentage of present-metric weight that passed")
    issues: list[str] = Field(default_factory=list)
    criteria: AcceptanceCriteria


class RejectionRecord(BaseModel):
    """Audit record written when a candidate fails the gate."""

    timestamp: str = Field(default_factory=_now_iso)
    commit: str
    reason: Literal["metrics_not_acceptable"] = "metrics_not_acceptable"
    score: float
    issues: list[str]
    criteria: AcceptanceCriteria


class BaselineSummary(BaseModel):
    """Summary of an accepted baseline update."""

    action: Literal["created", "updated"]
    timestamp: str = Field(default_factory=_now_iso)
    commit: str
    branch: str
    metrics: MetricValues
    delta: BaselineDelta | None = None
    trends: TrendAnalysis
    metadata: BaselineMetadata
    history_length: int = Field(ge=0)


class UpdateOutcome(StrEnum):
    """Terminal states of the baseline updater."""

    NOT_MAIN_BRANCH = "not_main_branch"
    NOT_QUALIFYING_EVENT = "not_qualifying_event"
    REJECTED = "rejected"
    CREATED = "created"
    UPDATED = "updated"


class UpdateResult(BaseModel):
    outcome: UpdateOutcome
    gate: GateResult | None = None
    summary: BaselineSummary | None = None
    rejection: RejectionRecord | None = None

    @property
    def changed_baseline(self) -> bool:
        return self.outcome in (UpdateOutcome.CREATED, UpdateOutcome.UPDATED)

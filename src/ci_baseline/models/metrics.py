"""Snapshot, baseline and history models.

A snapshot is one measurement cycle. A baseline is the last snapshot that
passed the acceptance gate on a main-line branch. History keeps the most
recent accepted snapshots for trend analysis.

Absent metrics are ``None`` everywhere. Zero is a real measurement.

Date/Time: All timestamps use `whenever` library (UTC-first, Rust-backed).
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from whenever import Instant

MetricName = Literal["performance", "coverage", "bundle_size"]

# Canonical metric order: gate issues, deltas and trends all follow it.
METRICS: tuple[MetricName, ...] = ("performance", "coverage", "bundle_size")

BASELINE_VERSION = "1.0.0"


def _now_iso() -> str:
    """Return current UTC time as ISO 8601 string."""
    return Instant.now().format_iso()


class MetricValues(BaseModel):
    """The three tracked metrics, each nullable."""

    performance: float | None = Field(
        default=None, allow_inf_nan=False, description="Performance score 0-100"
    )
    coverage: float | None = Field(
        default=None, allow_inf_nan=False, description="Aggregate coverage 0-100"
    )
    bundle_size: int | None = Field(default=None, ge=0, description="Bundle size in bytes")

    def get(self, metric: MetricName) -> float | None:
        return getattr(self, metric)

    def available_metrics(self) -> list[MetricName]:
        """Names of the metrics that are present, in canonical order."""
        return [m for m in METRICS if self.get(m) is not None]


class MetricsSnapshot(MetricValues):
    """One measurement cycle. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    timestamp: str = Field(default_factory=_now_iso, description="Measurement time (ISO 8601 UTC)")
    commit: str = "unknown"
    branch: str = "unknown"


class CoverageBreakdown(BaseModel):
    """Per-kind coverage percentages as reported by the test runner."""

    statements: float | None = None
    branches: float | None = None
    functions: float | None = None
    lines: float | None = None

    @property
    def total(self) -> float | None:
        """Equal-weighted mean of the sub-scores that are present."""
        parts = [
            v for v in (self.statements, self.branches, self.functions, self.lines) if v is not None
        ]
        if not parts:
            return None
        return sum(parts) / len(parts)


class MetricDelta(BaseModel):
    """Change of one metric between a candidate and the existing baseline."""

    current: float
    baseline: float
    change: float
    change_percent: float | None = Field(
        default=None, description="change / baseline * 100; None when the baseline is 0"
    )


class BaselineDelta(BaseModel):
    """Per-metric deltas. A metric missing on either side has no delta."""

    performance: MetricDelta | None = None
    coverage: MetricDelta | None = None
    bundle_size: MetricDelta | None = None
    timestamp: str
    commit: str

    def get(self, metric: MetricName) -> MetricDelta | None:
        return getattr(self, metric)


class BaselineMetadata(BaseModel):
    """Provenance of a baseline. Never used by gate, delta or trend logic."""

    creator: str = "automated"
    repository: str | None = None
    workflow: str | None = None
    run_id: str | None = None


class Baseline(MetricValues):
    """Last accepted snapshot for the main line, stored in expanded form."""

    version: str = BASELINE_VERSION
    created: str = Field(default_factory=_now_iso)
    last_updated: str = Field(default_factory=_now_iso)
    commit: str = "unknown"
    branch: str = "unknown"
    metadata: BaselineMetadata = Field(default_factory=BaselineMetadata)
    # Delta against the baseline this one replaced; None for the first baseline.
    delta: BaselineDelta | None = None


class HistoryMetadata(BaseModel):
    actor: str = "automated"
    run_id: str | None = None


class HistoryEntry(MetricValues):
    """One accepted data point. List order is chronological order."""

    timestamp: str
    commit: str = "unknown"
    branch: str = "unknown"
    metadata: HistoryMetadata = Field(default_factory=HistoryMetadata)


"""Configuration models for the baseline updater.

Acceptance Gate:
- Each present metric contributes its weight to the total
- A metric that meets its bound contributes its weight to the score
- A candidate is accepted when score / total >= pass_percentage

Performance and coverage use a minimum; bundle size uses a maximum in KB.
"""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class MinimumCriterion(BaseModel):
    """Passes when the metric is at or above the minimum."""

    minimum: float = Field(description="Lowest acceptable value")
    weight: float = Field(gt=0, description="Contribution to the gate score")


class MaximumSizeCriterion(BaseModel):
    """Passes when the size, rounded to whole KB, is at or below the maximum."""

    max_kb: int = Field(description="Largest acceptable size in KB")
    weight: float = Field(gt=0, description="Contribution to the gate score")


class AcceptanceCriteria(BaseModel):
    """Weighted thresholds a snapshot must meet to become the baseline."""

    performance: MinimumCriterion = Field(
        default_factory=lambda: MinimumCriterion(minimum=70, weight=30)
    )
    coverage: MinimumCriterion = Field(
        default_factory=lambda: MinimumCriterion(minimum=60, weight=40)
    )
    bundle_size: MaximumSizeCriterion = Field(
        default_factory=lambda: MaximumSizeCriterion(max_kb=1000, weight=30)
    )
    pass_percentage: float = Field(
        default=70.0,
        ge=0,
        le=100,
        description="Share of present-metric weight that must pass",
    )


class BaselineConfig(BaseSettings):
    """Main configuration for the baseline updater."""

    # Storage
    baseline_dir: str = Field(default="baselines", description="Directory for baseline files")
    results_path: str = Field(
        default="reports/analysis-results.json",
        description="Analysis results produced by the metrics step",
    )

    # Guards
    main_branches: list[str] = Field(
        default=["main", "master", "develop"],
        description="Branches allowed to update the baseline (case-insensitive)",
    )
    update_events: list[str] = Field(
        default=["push"], description="CI events that may update the baseline"
    )

    # History and trends
    history_limit: int = Field(default=50, ge=1, description="Accepted snapshots to retain")
    trend_window: int = Field(
        default=5, ge=2, description="Trailing history entries used for trend analysis"
    )
    stable_slope_threshold: float = Field(
        default=0.5, ge=0, description="Slopes smaller than this in magnitude are stable"
    )

    # Gate (nested)
    criteria: AcceptanceCriteria = Field(default_factory=AcceptanceCriteria)

    log_level: str = Field(default="INFO", description="Root logging level")

    model_config = {"env_prefix": "CI_BASELINE_", "env_nested_delimiter": "__"}

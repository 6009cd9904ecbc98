"""Unit tests for the acceptance gate."""

from ci_baseline.gate import build_rejection, evaluate_snapshot, size_in_kb
from ci_baseline.models import AcceptanceCriteria, MetricsSnapshot, MinimumCriterion


def _snap(**metrics) -> MetricsSnapshot:
    return MetricsSnapshot(timestamp="2026-03-02T10:00:00Z", commit="abc1234", **metrics)


class TestScoring:
    def test_all_metrics_pass(self, good_snapshot):
        result = evaluate_snapshot(good_snapshot)
        assert result.acceptable
        assert result.score == 100.0
        assert result.issues == []

    def test_low_performance_still_accepted_at_seventy_percent(self):
        # Coverage (40) + bundle (30) = 70 of 100
        result = evaluate_snapshot(_snap(performance=50, coverage=80, bundle_size=150_000))
        assert result.acceptable
        assert result.score == 70.0
        assert result.issues == ["Performance too low: 50% (min: 70%)"]

    def test_low_coverage_rejected(self):
        # Performance (30) + bundle (30) = 60 of 100
        result = evaluate_snapshot(_snap(performance=90, coverage=50, bundle_size=150_000))
        assert not result.acceptable
        assert result.score == 60.0
        assert result.issues == ["Coverage too low: 50% (min: 60%)"]

    def test_large_bundle_reports_size_in_kb(self):
        result = evaluate_snapshot(_snap(performance=90, coverage=80, bundle_size=2_000_000))
        assert result.acceptable
        assert result.issues == ["Bundle too large: 1953KB (max: 1000KB)"]

    def test_minimums_are_inclusive(self):
        result = evaluate_snapshot(_snap(performance=70, coverage=60))
        assert result.acceptable
        assert result.issues == []

    def test_fractional_values_in_issue(self):
        result = evaluate_snapshot(_snap(performance=69.5))
        assert result.issues == ["Performance too low: 69.5% (min: 70%)"]

    def test_averaged_coverage_keeps_full_precision(self):
        result = evaluate_snapshot(_snap(coverage=59.12345678))
        assert result.issues == ["Coverage too low: 59.12345678% (min: 60%)"]

    def test_issues_follow_metric_order(self):
        result = evaluate_snapshot(_snap(performance=10, coverage=10, bundle_size=5_000_000))
        first_words = [issue.split()[0] for issue in result.issues]
        assert first_words == ["Performance", "Coverage", "Bundle"]
        assert result.score == 0.0


class TestBundleRounding:
    def test_rounds_half_up(self):
        assert size_in_kb(1024 * 1000 + 511) == 1000
        assert size_in_kb(1024 * 1000 + 512) == 1001

    def test_boundary_pass_and_fail(self):
        at_limit = evaluate_snapshot(_snap(bundle_size=1024 * 1000 + 511))
        over_limit = evaluate_snapshot(_snap(bundle_size=1024 * 1000 + 512))
        assert at_limit.acceptable
        assert not over_limit.acceptable
        assert over_limit.issues == ["Bundle too large: 1001KB (max: 1000KB)"]


class TestAbsentMetrics:
    def test_absent_metrics_not_penalized(self):
        result = evaluate_snapshot(_snap(coverage=80))
        assert result.acceptable
        assert result.score == 100.0

    def test_single_failing_metric(self):
        result = evaluate_snapshot(_snap(performance=50))
        assert not result.acceptable
        assert result.score == 0.0

    def test_no_metrics_fails_closed(self):
        result = evaluate_snapshot(_snap())
        assert not result.acceptable
        assert result.score == 0.0
        assert result.issues == []

    def test_no_metrics_fails_even_with_zero_pass_percentage(self):
        result = evaluate_snapshot(_snap(), AcceptanceCriteria(pass_percentage=0))
        assert not result.acceptable

    def test_zero_is_a_measurement_not_absence(self):
        result = evaluate_snapshot(_snap(performance=0))
        assert result.issues == ["Performance too low: 0% (min: 70%)"]


class TestCustomCriteria:
    def test_stricter_minimum(self):
        criteria = AcceptanceCriteria(performance=MinimumCriterion(minimum=95, weight=30))
        result = evaluate_snapshot(_snap(performance=90), criteria)
        assert not result.acceptable
        assert result.issues == ["Performance too low: 90% (min: 95%)"]

    def test_all_must_pass(self):
        criteria = AcceptanceCriteria(pass_percentage=100)
        result = evaluate_snapshot(_snap(performance=50, coverage=80, bundle_size=1), criteria)
        assert not result.acceptable
        assert result.criteria == criteria


class TestRejection:
    def test_rejection_record(self, poor_snapshot):
        result = evaluate_snapshot(poor_snapshot)
        rejection = build_rejection(poor_snapshot, result)
        assert rejection.reason == "metrics_not_acceptable"
        assert rejection.commit == "bad0001"
        assert rejection.score == result.score
        assert rejection.issues == result.issues
        assert rejection.criteria == result.criteria
        assert rejection.timestamp.endswith("Z")

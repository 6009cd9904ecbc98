"""Tests for the CI execution context and environment-driven config."""

from ci_baseline.context import ExecutionContext
from ci_baseline.models import BaselineConfig


class TestExecutionContext:
    def test_reads_github_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_REF_NAME", "develop")
        monkeypatch.setenv("GITHUB_EVENT_NAME", "push")
        monkeypatch.setenv("GITHUB_ACTOR", "octocat")
        monkeypatch.setenv("GITHUB_RUN_ID", "99")
        context = ExecutionContext()
        assert context.ref_name == "develop"
        assert context.is_main_branch(["main", "master", "develop"])
        assert context.is_update_event(["push"])
        assert context.metadata().run_id == "99"

    def test_event_match_is_exact(self):
        context = ExecutionContext(ref_name="main", event_name="Push")
        assert not context.is_update_event(["push"])

    def test_blank_actor_falls_back(self):
        assert ExecutionContext(actor="").metadata().creator == "automated"


class TestBaselineConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CI_BASELINE_HISTORY_LIMIT", raising=False)
        config = BaselineConfig()
        assert config.history_limit == 50
        assert config.trend_window == 5
        assert config.criteria.pass_percentage == 70
        assert config.criteria.bundle_size.max_kb == 1000

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CI_BASELINE_HISTORY_LIMIT", "10")
        monkeypatch.setenv("CI_BASELINE_CRITERIA__PASS_PERCENTAGE", "90")
        config = BaselineConfig()
        assert config.history_limit == 10
        assert config.criteria.pass_percentage == 90
        assert config.criteria.performance.minimum == 70

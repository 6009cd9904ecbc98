"""ci-baseline - metrics baseline gate, history and trends for CI pipelines.

Quick Start:
    from ci_baseline.storage import FileBaselineStore
    from ci_baseline.updater import BaselineUpdater

    updater = BaselineUpdater(FileBaselineStore("baselines"))
    result = updater.run_from_path("reports/analysis-results.json")
    print(result.outcome)
"""

__version__ = "0.1.0"

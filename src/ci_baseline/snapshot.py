"""Snapshot source - reads (or synthesizes) the analysis results document.

The metrics step of the pipeline writes ``reports/analysis-results.json``.
Scores are synthetic: :func:`generate_mock_results` stands in for Lighthouse,
the coverage reporter and the bundle analyzer.

Accepted shapes per metric (first match wins):
- performance: number, ``{"performance": n}``, or ``lighthouse.performance``
- coverage: number, ``{"total": n}``, or the mean of statements, branches,
  functions and lines
- bundle size: number, ``{"total": n}``, or ``{"totalSize": n}``

Anything else counts as absent, as do NaN, infinities and numbers too large
for a float.
"""

from __future__ import annotations

import json
import logging
import math
import random
from pathlib import Path
from typing import Any

from whenever import Instant

from ci_baseline.errors import MissingResultsError
from ci_baseline.models import CoverageBreakdown, MetricsSnapshot

logger = logging.getLogger("ci_baseline.snapshot")


def load_snapshot(path: Path | str) -> MetricsSnapshot:
    """Read the analysis results at ``path`` as a snapshot.

    Raises:
        MissingResultsError: The file is missing or is not a JSON object.
    """
    results_path = Path(path)
    if not results_path.exists():
        msg = f"Analysis results not found at {results_path}. Run analysis first."
        raise MissingResultsError(msg)
    try:
        data = json.loads(results_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        msg = f"Could not read analysis results {results_path}: {exc}"
        raise MissingResultsError(msg) from exc
    if not isinstance(data, dict):
        msg = f"Analysis results {results_path} must be a JSON object"
        raise MissingResultsError(msg)
    return snapshot_from_results(data)


def snapshot_from_results(data: dict[str, Any]) -> MetricsSnapshot:
    """Normalize an analysis results document into a MetricsSnapshot."""
    bundle = _bundle_size(data.get("bundleSize", data.get("bundle_size")))
    fields: dict[str, Any] = {
        "performance": _performance(data),
        "coverage": _coverage(data.get("coverage")),
        "bundle_size": bundle,
    }
    for key in ("timestamp", "commit", "branch"):
        value = data.get(key)
        if isinstance(value, str) and value:
            fields[key] = value
    snapshot = MetricsSnapshot(**fields)
    logger.debug("Loaded snapshot with metrics: %s", ", ".join(snapshot.available_metrics()))
    return snapshot


def _number(value: Any) -> float | None:
    """Finite number, or None. Booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _performance(data: dict[str, Any]) -> float | None:
    value = data.get("performance")
    if isinstance(value, dict):
        return _number(value.get("performance"))
    if value is not None:
        return _number(value)
    lighthouse = data.get("lighthouse")
    if isinstance(lighthouse, dict):
        return _number(lighthouse.get("performance"))
    return None


def _coverage(value: Any) -> float | None:
    if not isinstance(value, dict):
        return _number(value)
    total = _number(value.get("total"))
    if total is not None:
        return total
    return CoverageBreakdown(
        statements=_number(value.get("statements")),
        branches=_number(value.get("branches")),
        functions=_number(value.get("functions")),
        lines=_number(value.get("lines")),
    ).total


def _bundle_size(value: Any) -> int | None:
    if isinstance(value, dict):
        size = _number(value.get("total"))
        if size is None:
            size = _number(value.get("totalSize"))
    else:
        size = _number(value)
    if size is None or size < 0:
        return None
    return round(size)


def generate_mock_results(
    rng: random.Random | None = None,
    *,
    commit: str = "unknown",
    branch: str = "unknown",
) -> dict[str, Any]:
    """Synthesize an analysis results document with plausible scores."""
    rng = rng or random.Random()
    main_js = 187392 + rng.randrange(5000)
    return {
        "timestamp": Instant.now().format_iso(),
        "commit": commit,
        "branch": branch,
        "status": "success",
        "lighthouse": {
            "performance": 95 + rng.randrange(5),
            "accessibility": 98 + rng.randrange(3),
            "bestPractices": 95 + rng.randrange(5),
            "seo": 97 + rng.randrange(4),
            "pwa": 88 + rng.randrange(7),
        },
        "coverage": {
            "statements": 85.5 + rng.random() * 5,
            "branches": 80.2 + rng.random() * 8,
            "functions": 90.1 + rng.random() * 4,
            "lines": 87.3 + rng.random() * 6,
        },
        "bundleSize": {
            "totalSize": 245760 + rng.randrange(10000),
            "gzippedSize": 89334 + rng.randrange(5000),
            "assets": [
                {"name": "main.js", "size": main_js, "gzipped": 65432 + rng.randrange(2000)},
            ],
        },
    }


def write_results(path: Path | str, results: dict[str, Any]) -> Path:
    """Write an analysis results document, creating parent directories."""
    results_path = Path(path)
    results_path.parent.mkdir(parents=True, exist_ok=True)
    results_path.write_text(json.dumps(results, indent=2) + "\n", encoding="utf-8")
    logger.info("Wrote analysis results to %s", results_path)
    return results_path

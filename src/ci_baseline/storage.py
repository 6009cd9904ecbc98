"""Baseline storage - JSON files for CI runs, in-memory for tests.

Layout of the file store:
- metrics.json: current baseline
- history.json: bounded list of accepted snapshots
- trends.json: latest trend analysis (a report; the updater never reads it)
- summary.json: latest accepted update
- rejection.json: latest gate rejection

Every write replaces the whole file. There is no locking; one updater per
branch at a time is assumed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, TypeAdapter, ValidationError

from ci_baseline.errors import PersistenceError
from ci_baseline.models import (
    Baseline,
    BaselineSummary,
    HistoryEntry,
    RejectionRecord,
    TrendAnalysis,
)

logger = logging.getLogger("ci_baseline.storage")

BASELINE_FILE = "metrics.json"
HISTORY_FILE = "history.json"
TRENDS_FILE = "trends.json"
SUMMARY_FILE = "summary.json"
REJECTION_FILE = "rejection.json"

_history_adapter = TypeAdapter(list[HistoryEntry])


@runtime_checkable
class BaselineStore(Protocol):
    """Load-or-absent / store primitives for baseline state."""

    def load_baseline(self) -> Baseline | None: ...

    def save_baseline(self, baseline: Baseline) -> None: ...

    def load_history(self) -> list[HistoryEntry]: ...

    def save_history(self, history: list[HistoryEntry]) -> None: ...

    def save_trends(self, trends: TrendAnalysis) -> None: ...

    def save_summary(self, summary: BaselineSummary) -> None: ...

    def save_rejection(self, rejection: RejectionRecord) -> None: ...


class FileBaselineStore:
    """Stores baseline state as pretty-printed JSON files in one directory."""

    def __init__(self, directory: Path | str) -> None:
        self._dir = Path(directory)

    @property
    def directory(self) -> Path:
        return self._dir

    def path_for(self, name: str) -> Path:
        return self._dir / name

    def load_baseline(self) -> Baseline | None:
        """Current baseline, or None if missing or unreadable."""
        raw = self._read(BASELINE_FILE)
        if raw is None:
            return None
        try:
            return Baseline.model_validate_json(raw)
        except ValidationError:
            logger.warning(
                "Could not parse existing baseline %s, ignoring it",
                self.path_for(BASELINE_FILE),
            )
            return None

    def save_baseline(self, baseline: Baseline) -> None:
        self._write_model(BASELINE_FILE, baseline)

    def load_history(self) -> list[HistoryEntry]:
        """Stored history, or an empty list if missing or unreadable."""
        raw = self._read(HISTORY_FILE)
        if raw is None:
            return []
        try:
            return _history_adapter.validate_json(raw)
        except ValidationError:
            logger.warning(
                "Could not parse baseline history %s, starting empty",
                self.path_for(HISTORY_FILE),
            )
            return []

    def save_history(self, history: list[HistoryEntry]) -> None:
        self._write(HISTORY_FILE, _history_adapter.dump_json(history, indent=2).decode())

    def load_trends(self) -> TrendAnalysis | None:
        raw = self._read(TRENDS_FILE)
        if raw is None:
            return None
        try:
            return TrendAnalysis.model_validate_json(raw)
        except ValidationError:
            logger.warning("Could not parse trend report %s", self.path_for(TRENDS_FILE))
            return None

    def save_trends(self, trends: TrendAnalysis) -> None:
        self._write_model(TRENDS_FILE, trends)

    def save_summary(self, summary: BaselineSummary) -> None:
        self._write_model(SUMMARY_FILE, summary)

    def save_rejection(self, rejection: RejectionRecord) -> None:
        self._write_model(REJECTION_FILE, rejection)

    # -----------------
    # Internal helpers
    # -----------------

    def _read(self, name: str) -> str | None:
        path = self.path_for(name)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            logger.warning("File %s is not valid UTF-8, ignoring it", path)
            return None
        except OSError as exc:
            msg = f"Failed to read {path}: {exc}"
            raise PersistenceError(msg) from exc

    def _write_model(self, name: str, model: BaseModel) -> None:
        self._write(name, model.model_dump_json(indent=2))

    def _write(self, name: str, content: str) -> None:
        path = self.path_for(name)
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            path.write_text(content + "\n", encoding="utf-8")
        except OSError as exc:
            msg = f"Failed to write {path}: {exc}"
            raise PersistenceError(msg) from exc
        logger.debug("Wrote %s", path)


class InMemoryBaselineStore:
    """Attribute-backed store for tests and dry runs."""

    def __init__(
        self,
        baseline: Baseline | None = None,
        history: list[HistoryEntry] | None = None,
    ) -> None:
        self.baseline = baseline
        self.history: list[HistoryEntry] = list(history or [])
        self.trends: TrendAnalysis | None = None
        self.summary: BaselineSummary | None = None
        self.rejection: RejectionRecord | None = None

    def load_baseline(self) -> Baseline | None:
        return self.baseline

    def save_baseline(self, baseline: Baseline) -> None:
        self.baseline = baseline

    def load_history(self) -> list[HistoryEntry]:
        return list(self.history)

    def save_history(self, history: list[HistoryEntry]) -> None:
        self.history = list(history)

    def save_trends(self, trends: TrendAnalysis) -> None:
        self.trends = trends

    def save_summary(self, summary: BaselineSummary) -> None:
        self.summary = summary

    def save_rejection(self, rejection: RejectionRecord) -> None:
        self.rejection = rejection

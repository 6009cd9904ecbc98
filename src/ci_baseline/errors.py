"""Exceptions raised by the baseline updater.

Corrupt persisted state is not an error: the store logs a warning and treats
the file as absent. A gate rejection is an outcome, not an exception.
"""


class BaselineError(Exception):
    """Base class for fatal baseline update failures."""


class MissingResultsError(BaselineError):
    """The candidate snapshot could not be read. Nothing is written."""


class PersistenceError(BaselineError):
    """Writing baseline state failed. Not retried; a CI re-run is the retry."""

"""Exceptions raised by the evaluation engine."""
from __future__ import annotations


class ConfigurationError(ValueError):
    """Invalid settings or input shape, reported before any clustering runs."""


class DataError(ValueError):
    """No usable observations remain after dropping incomplete rows."""


class EvaluationCancelled(RuntimeError):
    """Raised when the caller cancels a run between cluster counts."""

"""Configuration model for k-means evaluation runs."""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, List

from .constants import (
    DEFAULT_MAX_ITER,
    DEFAULT_MAX_K,
    DEFAULT_MIN_K,
    DEFAULT_SOLUTION_K,
    SEED,
)
from .errors import ConfigurationError


@dataclass
class EvaluationConfig:
    """Evaluated k range, solution k and refinement settings."""

    min_k: int = DEFAULT_MIN_K
    max_k: int = DEFAULT_MAX_K
    solution_k: int = DEFAULT_SOLUTION_K
    max_iter: int = DEFAULT_MAX_ITER
    seed: int = SEED

    def validate(self) -> None:
        """Raise ``ConfigurationError`` if the settings cannot be run."""
        if self.min_k < 2:
            raise ConfigurationError("Min k must be at least 2.")
        if self.max_k <= self.min_k:
            raise ConfigurationError("Max k must be greater than Min k.")
        if self.solution_k < 1:
            raise ConfigurationError("Solution k must be at least 1.")
        if self.max_iter < 1:
            raise ConfigurationError("Iteration cap must be at least 1.")

    def in_range(self, k: int) -> bool:
        return self.min_k <= k <= self.max_k

    def span(self) -> range:
        """All k values between the smallest and largest requested k."""
        start = min(self.min_k, self.solution_k)
        end = max(self.max_k, self.solution_k)
        return range(start, end + 1)

    def visited(self) -> List[int]:
        """k values that need a clustering run, in ascending order."""
        return [k for k in self.span() if self.in_range(k) or k == self.solution_k]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "EvaluationConfig":
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {', '.join(unknown)}")
        values = {}
        for key, value in payload.items():
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationError(f"Config value {key!r} must be an integer.")
            values[key] = value
        return cls(**values)


def load_config(path: str | Path) -> EvaluationConfig:
    """Load and validate a configuration from a JSON file."""
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Config not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Config is not valid JSON: {path}") from exc
    if not isinstance(payload, dict):
        raise ConfigurationError(f"Config must be a JSON object: {path}")
    config = EvaluationConfig.from_dict(payload)
    config.validate()
    return config


def save_config(config: EvaluationConfig, path: str | Path) -> None:
    """Write a configuration to disk as JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(config.to_dict(), handle, indent=2)

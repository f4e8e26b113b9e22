"""Turn tabular input into numeric observation vectors."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

import numpy as np
import pandas as pd
from pandas.api import types as ptypes

from .errors import ConfigurationError, DataError

TABLE_READERS = {
    ".csv": pd.read_csv,
    ".txt": pd.read_csv,
    ".json": pd.read_json,
}


@dataclass
class Scaling:
    """Per-column z-score transform fitted on the kept observations."""

    mean: np.ndarray
    std: np.ndarray

    @classmethod
    def fit(cls, features: np.ndarray) -> "Scaling":
        std = features.std(axis=0)
        # Constant columns keep a unit divisor.
        std[std == 0] = 1.0
        return cls(mean=features.mean(axis=0), std=std)

    def apply(self, features: np.ndarray) -> np.ndarray:
        return (features - self.mean) / self.std

    def invert(self, features: np.ndarray) -> np.ndarray:
        return features * self.std + self.mean


@dataclass
class ObservationSet:
    """Numeric vectors with the row labels they came from."""

    features: np.ndarray
    row_ids: List[Any]
    columns: List[str]
    skipped: List[Any] = field(default_factory=list)
    scaling: Optional[Scaling] = None

    @property
    def dims(self) -> int:
        return self.features.shape[1]

    def __len__(self) -> int:
        return self.features.shape[0]

    def to_input_units(self, vectors: np.ndarray) -> np.ndarray:
        """Map vectors from feature space back to the input column units."""
        if self.scaling is None:
            return np.array(vectors, dtype=float, copy=True)
        return self.scaling.invert(vectors)


def load_table(path: str | Path) -> pd.DataFrame:
    """Read a CSV or JSON table from disk."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input not found: {path}")
    reader = TABLE_READERS.get(path.suffix.lower())
    if reader is None:
        supported = ", ".join(sorted(TABLE_READERS))
        raise ConfigurationError(
            f"Unsupported input format {path.suffix!r}; expected one of {supported}"
        )
    return reader(path)


def numeric_columns(frame: pd.DataFrame) -> List[Any]:
    """Labels of numeric, non-boolean columns in table order."""
    return [
        name
        for name in frame.columns
        if ptypes.is_numeric_dtype(frame[name]) and not ptypes.is_bool_dtype(frame[name])
    ]


def extract_observations(
    frame: pd.DataFrame | None, scale: bool = False
) -> ObservationSet:
    """Collect complete numeric rows; rows with any missing value are skipped.

    Row labels identify rows in the output tables, so they must be unique.
    """
    if frame is None:
        raise ConfigurationError("Input table is missing.")
    if not frame.index.is_unique:
        duplicated = frame.index[frame.index.duplicated()].unique().tolist()
        raise ConfigurationError(f"Row labels must be unique; duplicated: {duplicated[:5]}")
    columns = numeric_columns(frame)
    if not columns:
        raise ConfigurationError("No numeric columns found in input!")

    numeric = frame[columns]
    complete = numeric.notna().all(axis=1).to_numpy()
    features = numeric.to_numpy(dtype=float, na_value=np.nan)[complete]
    row_ids = list(frame.index[complete])
    skipped = list(frame.index[~complete])
    if features.shape[0] == 0:
        raise DataError("Input table is empty or all rows contained missing values!")

    scaling = None
    if scale:
        scaling = Scaling.fit(features)
        features = scaling.apply(features)
    return ObservationSet(
        features=features,
        row_ids=row_ids,
        columns=[str(name) for name in columns],
        skipped=skipped,
        scaling=scaling,
    )

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from kmeans_evaluation.extractor import ObservationSet, extract_observations


@pytest.fixture
def two_blobs() -> np.ndarray:
    """Two well separated groups of three 2D points."""
    return np.array(
        [
            [0.0, 0.0],
            [0.0, 1.0],
            [1.0, 0.0],
            [10.0, 10.0],
            [10.0, 11.0],
            [11.0, 10.0],
        ]
    )


@pytest.fixture
def two_blob_observations(two_blobs: np.ndarray) -> ObservationSet:
    return ObservationSet(
        features=two_blobs,
        row_ids=[f"row{i}" for i in range(len(two_blobs))],
        columns=["x", "y"],
    )


@pytest.fixture
def frame_with_missing() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "name": ["a", "b", "c", "d", "e", "f", "g"],
            "x": [0.0, 0.0, 1.0, np.nan, 10.0, 10.0, 11.0],
            "y": [0.0, 1.0, 0.0, 5.0, 10.0, 11.0, 10.0],
        },
        index=[f"Row{i}" for i in range(7)],
    )


@pytest.fixture
def missing_observations(frame_with_missing: pd.DataFrame) -> ObservationSet:
    return extract_observations(frame_with_missing)

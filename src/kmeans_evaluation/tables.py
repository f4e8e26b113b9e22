"""Output tables built from an evaluation result."""
from __future__ import annotations

import pandas as pd

from .constants import CENTER_PREFIX, CLUSTER_COLUMN
from .evaluation import EvaluationResult


def labeled_table(frame: pd.DataFrame, result: EvaluationResult) -> pd.DataFrame:
    """Input rows with the solution cluster (or ``Skipped``) appended."""
    labeled = frame.copy()
    labeled[CLUSTER_COLUMN] = [result.label_for(row_id) for row_id in frame.index]
    return labeled


def wcss_table(result: EvaluationResult) -> pd.DataFrame:
    ks = list(result.wcss)
    return pd.DataFrame(
        {"k": ks, "WCSS": [result.wcss[k] for k in ks]},
        index=[f"k_{k}" for k in ks],
    )


def silhouette_table(result: EvaluationResult) -> pd.DataFrame:
    ks = list(result.silhouette)
    return pd.DataFrame(
        {"k": ks, "Avg_Silhouette": [result.silhouette[k] for k in ks]},
        index=[f"k_{k}" for k in ks],
    )


def centers_table(result: EvaluationResult) -> pd.DataFrame:
    """One row per cluster per evaluated k with the cluster mean vector."""
    center_columns = [f"{CENTER_PREFIX}{name}" for name in result.columns]
    rows = []
    index = []
    for row in result.centroid_rows:
        entry = {"k": row.k, CLUSTER_COLUMN: row.label}
        entry.update(zip(center_columns, (float(v) for v in row.center)))
        rows.append(entry)
        index.append(f"k{row.k}_c{row.cluster}")
    return pd.DataFrame(
        rows, index=index, columns=["k", CLUSTER_COLUMN] + center_columns
    )

"""Run k-means once per required k and collect evaluation curves."""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import numpy as np
from tqdm import tqdm

from .clustering import kmeans
from .config import EvaluationConfig
from .constants import CLUSTER_PREFIX, SKIPPED_LABEL
from .errors import ConfigurationError, DataError, EvaluationCancelled
from .extractor import ObservationSet
from .metrics import average_silhouette, wcss

log = logging.getLogger(__name__)

ProgressCallback = Callable[[float, str], None]
CancelCheck = Callable[[], bool]


def cluster_label(cluster: int) -> str:
    return f"{CLUSTER_PREFIX}{cluster}"


@dataclass
class CentroidRow:
    """Center of one cluster for one evaluated k."""

    k: int
    cluster: int
    center: np.ndarray

    @property
    def label(self) -> str:
        return cluster_label(self.cluster)


@dataclass
class EvaluationResult:
    """Curves, centers and the solution assignment of a finished run."""

    columns: List[str]
    solution_k: int
    wcss: Dict[int, float] = field(default_factory=dict)
    silhouette: Dict[int, float] = field(default_factory=dict)
    centroid_rows: List[CentroidRow] = field(default_factory=list)
    solution_assignment: Dict[Any, int] = field(default_factory=dict)
    solution_centroids: Optional[np.ndarray] = None

    def label_for(self, row_id: Any) -> str:
        """Solution cluster name for a row, or the skipped marker."""
        if row_id in self.solution_assignment:
            return cluster_label(self.solution_assignment[row_id])
        return SKIPPED_LABEL

    def copy(self) -> "EvaluationResult":
        return copy.deepcopy(self)


class KMeansEvaluator:
    """Evaluate WCSS and silhouette over a k range and solve for one k."""

    def __init__(self, config: EvaluationConfig) -> None:
        self.config = config

    def _validate(self, observations: ObservationSet) -> None:
        self.config.validate()
        features = observations.features
        if features.ndim != 2 or features.shape[1] == 0:
            raise ConfigurationError("No numeric columns found in input!")
        if features.shape[0] == 0:
            raise DataError("Input table is empty or all rows contained missing values!")
        if len(observations.row_ids) != features.shape[0]:
            raise DataError(
                f"Row identities ({len(observations.row_ids)}) do not match "
                f"observations ({features.shape[0]})."
            )
        if len(set(observations.row_ids)) != len(observations.row_ids):
            raise ConfigurationError("Row identities must be unique.")

    def run(
        self,
        observations: ObservationSet,
        should_cancel: CancelCheck | None = None,
        progress: ProgressCallback | None = None,
        show_progress: bool = True,
    ) -> EvaluationResult:
        """Cluster every visited k and return a fresh result.

        ``should_cancel`` is polled before each k; when it returns True the
        run raises ``EvaluationCancelled`` and nothing computed so far is
        kept. ``progress`` receives the fraction of the k span covered and a
        status message.
        """
        self._validate(observations)
        config = self.config
        features = observations.features
        span = config.span()
        start, end = span.start, span.stop - 1
        visited = config.visited()

        log.info(
            "Evaluating k=%d..%d (solution k=%d) on %d observations with %d dims",
            config.min_k,
            config.max_k,
            config.solution_k,
            features.shape[0],
            features.shape[1],
        )

        result = EvaluationResult(
            columns=list(observations.columns), solution_k=config.solution_k
        )
        for k in tqdm(visited, desc="Clustering", disable=not show_progress):
            if should_cancel is not None and should_cancel():
                log.info("Evaluation cancelled before k=%d", k)
                raise EvaluationCancelled(f"Evaluation cancelled before k={k}.")
            if progress is not None:
                progress((k - start) / (end - start), f"Clustering k={k}")

            cluster_result = kmeans(
                features, k, max_iter=config.max_iter, seed=config.seed
            )

            if config.in_range(k):
                score = wcss(features, cluster_result.labels, cluster_result.centroids)
                sil = average_silhouette(features, cluster_result.labels, k)
                result.wcss[k] = score
                result.silhouette[k] = sil
                for cluster in range(k):
                    result.centroid_rows.append(
                        CentroidRow(
                            k=k,
                            cluster=cluster,
                            center=observations.to_input_units(
                                cluster_result.centroids[cluster]
                            ),
                        )
                    )
                log.debug(
                    "k=%d wcss=%.6g silhouette=%.4f iterations=%d",
                    k,
                    score,
                    sil,
                    cluster_result.n_iter,
                )

            if k == config.solution_k:
                result.solution_assignment = {
                    row_id: int(label)
                    for row_id, label in zip(observations.row_ids, cluster_result.labels)
                }
                result.solution_centroids = observations.to_input_units(
                    cluster_result.centroids
                )

        if progress is not None:
            progress(1.0, "Done")
        log.info("Evaluation finished: %d k values clustered", len(visited))
        return result


def evaluate(
    observations: ObservationSet,
    config: EvaluationConfig | None = None,
    **kwargs: Any,
) -> EvaluationResult:
    """Convenience wrapper around ``KMeansEvaluator.run``."""
    return KMeansEvaluator(config or EvaluationConfig()).run(observations, **kwargs)

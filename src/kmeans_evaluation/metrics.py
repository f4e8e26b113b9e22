"""Cluster quality scores: within-cluster sum of squares and silhouette."""
from __future__ import annotations

import numpy as np


def wcss(features: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> float:
    """Sum of squared distances from each observation to its centroid."""
    diffs = features - centroids[labels]
    return float(np.sum(diffs * diffs))


def average_silhouette(
    features: np.ndarray, labels: np.ndarray, n_clusters: int
) -> float:
    """Mean silhouette coefficient over all observations.

    Exact pairwise computation, O(n^2 * D). Observations alone in their
    cluster are left out of the mean. With fewer than two clusters the score
    is defined as 0.
    """
    if n_clusters < 2:
        return 0.0

    n_samples = features.shape[0]
    total = 0.0
    count = 0
    for idx in range(n_samples):
        dists = np.linalg.norm(features - features[idx], axis=1)
        others = np.ones(n_samples, dtype=bool)
        others[idx] = False
        sums = np.bincount(labels[others], weights=dists[others], minlength=n_clusters)
        counts = np.bincount(labels[others], minlength=n_clusters)

        own = labels[idx]
        if counts[own] == 0:
            continue
        a = sums[own] / counts[own]

        b = np.inf
        for cluster in range(n_clusters):
            if cluster == own or counts[cluster] == 0:
                continue
            mean_dist = sums[cluster] / counts[cluster]
            if mean_dist < b:
                b = mean_dist
        if b == np.inf:
            b = 0.0

        denom = max(a, b)
        total += (b - a) / denom if denom > 0 else 0.0
        count += 1
    return float(total / count) if count else 0.0

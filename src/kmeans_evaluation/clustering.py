"""K-means++ seeding and Lloyd refinement."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .constants import DEFAULT_MAX_ITER, SEED
from .errors import DataError


@dataclass
class ClusterResult:
    """Result of a clustering run."""

    labels: np.ndarray
    centroids: np.ndarray
    n_iter: int = 0


def squared_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Squared Euclidean distance between two vectors of equal length."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.shape != b.shape:
        raise ValueError(f"Dimension mismatch: {a.shape} vs {b.shape}")
    diff = a - b
    return float(np.dot(diff, diff))


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two vectors of equal length."""
    return float(np.sqrt(squared_distance(a, b)))


def kmeans_plus_plus(
    features: np.ndarray,
    k: int,
    seed: int = SEED,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """Pick ``k`` initial centroids with D^2-weighted sampling.

    A fresh generator is built from ``seed`` on every call, so the same data
    and k always produce the same centroids. The first centroid is drawn
    uniformly; each following one is the first observation whose cumulative
    weight reaches a uniform draw scaled by the total weight. When rounding
    keeps the cumulative sum below the draw, the last observation is used.
    """
    if features.shape[0] == 0:
        raise DataError("Cannot seed centroids from an empty observation set.")
    if k < 1:
        raise ValueError(f"k must be at least 1, got {k}")
    if rng is None:
        rng = np.random.default_rng(seed)

    n_samples = features.shape[0]
    centroids = np.empty((k, features.shape[1]), dtype=float)
    centroids[0] = features[int(rng.integers(n_samples))]
    closest = np.sum((features - centroids[0]) ** 2, axis=1)

    for idx in range(1, k):
        total = float(closest.sum())
        draw = float(rng.random()) * total
        cumulative = np.cumsum(closest)
        chosen = int(np.searchsorted(cumulative, draw, side="left"))
        if chosen >= n_samples:
            chosen = n_samples - 1
        centroids[idx] = features[chosen]
        closest = np.minimum(closest, np.sum((features - centroids[idx]) ** 2, axis=1))
    return centroids


def assign(features: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Index of the nearest centroid per observation, lowest index on ties."""
    distances = np.linalg.norm(
        features[:, None, :] - centroids[None, :, :], axis=2
    )
    return distances.argmin(axis=1)


def update(features: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Move each non-empty cluster to its member mean; empty ones stay put."""
    updated = centroids.copy()
    for idx in range(centroids.shape[0]):
        members = features[labels == idx]
        if members.size:
            updated[idx] = members.mean(axis=0)
    return updated


def lloyd(
    features: np.ndarray,
    centroids: np.ndarray,
    max_iter: int = DEFAULT_MAX_ITER,
) -> ClusterResult:
    """Refine centroids until assignments stop changing or ``max_iter`` is hit."""
    if max_iter < 1:
        raise ValueError(f"max_iter must be at least 1, got {max_iter}")
    centroids = np.array(centroids, dtype=float, copy=True)
    # -1 marks "no previous assignment", so the first pass always updates.
    labels = np.full(features.shape[0], -1, dtype=np.int64)

    n_iter = 0
    while n_iter < max_iter:
        new_labels = assign(features, centroids)
        n_iter += 1
        if np.array_equal(new_labels, labels):
            break
        labels = new_labels
        centroids = update(features, labels, centroids)

    labels.setflags(write=False)
    return ClusterResult(labels=labels, centroids=centroids, n_iter=n_iter)


def kmeans(
    features: np.ndarray,
    k: int,
    max_iter: int = DEFAULT_MAX_ITER,
    seed: int = SEED,
) -> ClusterResult:
    """Cluster features with k-means++ seeding and Lloyd refinement."""
    initial = kmeans_plus_plus(features, k, seed=seed)
    return lloyd(features, initial, max_iter=max_iter)


def project_2d(features: np.ndarray) -> np.ndarray:
    """Coordinates on the two leading principal axes, zero-padded for 1-D input."""
    coords = np.zeros((features.shape[0], 2))
    if features.shape[0] == 0:
        return coords
    centered = features - features.mean(axis=0)
    _, _, axes = np.linalg.svd(centered, full_matrices=False)
    leading = centered @ axes[:2].T
    coords[:, : leading.shape[1]] = leading
    return coords

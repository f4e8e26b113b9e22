from __future__ import annotations

import numpy as np
import pytest

from kmeans_evaluation.clustering import (
    assign,
    distance,
    kmeans,
    kmeans_plus_plus,
    lloyd,
    project_2d,
    squared_distance,
)
from kmeans_evaluation.errors import DataError


class _ScriptedRng:
    """Generator stand-in returning fixed draws."""

    def __init__(self, first: int, draw: float) -> None:
        self.first = first
        self.draw = draw

    def integers(self, high: int) -> int:
        return self.first

    def random(self) -> float:
        return self.draw


def test_distance_and_squared_distance():
    assert distance([0.0, 0.0], [3.0, 4.0]) == pytest.approx(5.0)
    assert squared_distance([0.0, 0.0], [3.0, 4.0]) == pytest.approx(25.0)
    assert distance([1.0, 2.0], [1.0, 2.0]) == 0.0


def test_distance_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        distance([1.0, 2.0], [1.0, 2.0, 3.0])


@pytest.mark.parametrize("k", [1, 2, 3, 6, 9])
def test_seeder_returns_exactly_k_centroids(two_blobs, k):
    centroids = kmeans_plus_plus(two_blobs, k)
    assert centroids.shape == (k, 2)


def test_seeder_is_deterministic(two_blobs):
    first = kmeans_plus_plus(two_blobs, 3)
    second = kmeans_plus_plus(two_blobs, 3)
    np.testing.assert_array_equal(first, second)


def test_seeder_centroids_are_observations(two_blobs):
    centroids = kmeans_plus_plus(two_blobs, 4)
    for centroid in centroids:
        assert any(np.array_equal(centroid, point) for point in two_blobs)


def test_seeder_falls_back_to_last_observation(two_blobs):
    # A draw above the total weight is never reached by the cumulative sum.
    rng = _ScriptedRng(first=0, draw=2.0)
    centroids = kmeans_plus_plus(two_blobs, 2, rng=rng)
    np.testing.assert_array_equal(centroids[0], two_blobs[0])
    np.testing.assert_array_equal(centroids[1], two_blobs[-1])


def test_seeder_picks_first_index_reaching_draw(two_blobs):
    rng = _ScriptedRng(first=0, draw=0.0)
    centroids = kmeans_plus_plus(two_blobs, 2, rng=rng)
    # Zero draw: the first cumulative weight (0 for the chosen point) reaches it.
    np.testing.assert_array_equal(centroids[1], two_blobs[0])


def test_seeder_does_not_share_memory_with_data(two_blobs):
    centroids = kmeans_plus_plus(two_blobs, 2)
    centroids[0] = [-99.0, -99.0]
    assert not np.any(two_blobs == -99.0)


def test_seeder_rejects_empty_and_bad_k(two_blobs):
    with pytest.raises(DataError):
        kmeans_plus_plus(np.zeros((0, 2)), 2)
    with pytest.raises(ValueError):
        kmeans_plus_plus(two_blobs, 0)


def test_assign_breaks_ties_by_lowest_index():
    features = np.array([[0.0], [5.0]])
    centroids = np.array([[-1.0], [1.0], [-1.0]])
    labels = assign(features, centroids)
    assert labels.tolist() == [0, 1]


def test_lloyd_keeps_empty_cluster_centroid(two_blobs):
    initial = np.array([[0.0, 0.0], [10.0, 10.0], [100.0, -100.0]])
    result = lloyd(two_blobs, initial, max_iter=100)
    assert result.centroids.shape == (3, 2)
    np.testing.assert_array_equal(result.centroids[2], [100.0, -100.0])
    assert 2 not in result.labels.tolist()
    assert not np.isnan(result.centroids).any()


def test_lloyd_converges_to_cluster_means(two_blobs):
    initial = np.array([[0.0, 0.0], [10.0, 10.0]])
    result = lloyd(two_blobs, initial)
    assert result.labels.tolist() == [0, 0, 0, 1, 1, 1]
    np.testing.assert_allclose(result.centroids[0], [1 / 3, 1 / 3])
    np.testing.assert_allclose(result.centroids[1], [31 / 3, 31 / 3])


def test_lloyd_respects_iteration_cap(two_blobs):
    initial = np.array([[0.0, 0.0], [0.0, 1.0]])
    result = lloyd(two_blobs, initial, max_iter=1)
    assert result.n_iter == 1
    assert len(result.labels) == len(two_blobs)
    with pytest.raises(ValueError):
        lloyd(two_blobs, initial, max_iter=0)


def test_lloyd_does_not_modify_initial_centroids(two_blobs):
    initial = np.array([[0.0, 0.0], [0.0, 1.0]])
    lloyd(two_blobs, initial)
    np.testing.assert_array_equal(initial, [[0.0, 0.0], [0.0, 1.0]])


def test_lloyd_labels_are_read_only(two_blobs):
    result = kmeans(two_blobs, 2)
    with pytest.raises(ValueError):
        result.labels[0] = 1


def test_kmeans_separates_two_blobs(two_blobs):
    result = kmeans(two_blobs, 2)
    labels = result.labels.tolist()
    assert len(set(labels[:3])) == 1
    assert len(set(labels[3:])) == 1
    assert labels[0] != labels[3]


def test_kmeans_repeated_point_single_cluster():
    features = np.tile([2.5, -1.0], (5, 1))
    result = kmeans(features, 1)
    assert result.labels.tolist() == [0] * 5
    np.testing.assert_array_equal(result.centroids[0], [2.5, -1.0])


def test_project_2d_shapes(two_blobs):
    assert project_2d(two_blobs).shape == (6, 2)
    assert project_2d(two_blobs[:, :1]).shape == (6, 2)
    assert project_2d(np.zeros((0, 3))).shape == (0, 2)


def test_project_2d_is_centered_and_separates_blobs(two_blobs):
    coords = project_2d(two_blobs)
    np.testing.assert_allclose(coords.mean(axis=0), [0.0, 0.0], atol=1e-9)
    first, second = coords[:3, 0], coords[3:, 0]
    assert np.sign(first).tolist() == [np.sign(first[0])] * 3
    assert np.sign(second).tolist() == [-np.sign(first[0])] * 3
    line = project_2d(two_blobs[:, :1])
    np.testing.assert_array_equal(line[:, 1], np.zeros(6))

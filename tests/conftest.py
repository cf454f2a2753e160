"""Pytest fixtures for kmeans_engine tests."""

import numpy as np
import pytest


class FixedPartition:
    """Partition strategy that always returns the same labels."""

    def __init__(self, labels):
        self.labels = np.asarray(labels, dtype=np.intp)

    def partition(self, points, n_clusters, rng):
        return self.labels.copy()


@pytest.fixture
def simple_2d_clusters():
    """Generate 3 well-separated 2D clusters (60 samples total, in order)."""
    np.random.seed(42)
    cluster1 = np.random.randn(20, 2) + np.array([0, 0])
    cluster2 = np.random.randn(20, 2) + np.array([10, 10])
    cluster3 = np.random.randn(20, 2) + np.array([20, 0])
    return np.vstack([cluster1, cluster2, cluster3])


@pytest.fixture
def simple_5d_clusters():
    """Generate 3 well-separated 5D clusters (60 samples total, in order)."""
    np.random.seed(42)
    cluster1 = np.random.randn(20, 5) + np.array([0, 0, 0, 0, 0])
    cluster2 = np.random.randn(20, 5) + np.array([10, 10, 10, 10, 10])
    cluster3 = np.random.randn(20, 5) + np.array([20, 20, 20, 20, 20])
    return np.vstack([cluster1, cluster2, cluster3])


@pytest.fixture
def true_labels():
    """Ground-truth labels for the 60-sample cluster fixtures."""
    return np.repeat(np.arange(3), 20)


@pytest.fixture
def colinear_points():
    """Four points on a line; a cluster empties after the first round.

    Starting from labels [0, 1, 0, 2], cluster 0 loses both its points in the
    first reassignment.
    """
    return np.array([[0.0], [0.5], [5.0], [5.1]])


@pytest.fixture
def colinear_start():
    """Initial labels that leave cluster 0 empty after one round."""
    return FixedPartition([0, 1, 0, 2])


@pytest.fixture
def identical_points():
    """All identical points (edge case)."""
    return np.ones((20, 5))


@pytest.fixture
def fixed_partition():
    """Factory for partition strategies with predetermined labels."""
    return FixedPartition

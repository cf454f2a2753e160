"""Initial partition strategies."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np
import numpy.typing as npt

from kmeans_engine.exceptions.core import InvalidClusterCountError


def check_cluster_count(n_samples: int, n_clusters: int) -> None:
    """Validate that n_clusters can be partitioned over n_samples points.

    Raises:
        InvalidClusterCountError: If n_clusters < 1 or n_clusters > n_samples
    """
    if n_clusters < 1 or n_clusters > n_samples:
        raise InvalidClusterCountError(
            f"Invalid number of clusters ({n_clusters}) for {n_samples} points. "
            "Must be between 1 and the number of points."
        )


@runtime_checkable
class PartitionStrategy(Protocol):
    """Protocol for producing the initial assignment of points to clusters.

    Clusters may start empty; emptiness is handled by the empty cluster policy.
    """

    def partition(
        self,
        points: npt.NDArray[np.float64],
        n_clusters: int,
        rng: np.random.Generator,
    ) -> npt.NDArray[np.intp]:
        """Assign each point to a cluster in [0, n_clusters).

        Args:
            points: Point matrix of shape (n_samples, n_features)
            n_clusters: Number of clusters
            rng: Random source scoped to the current run

        Returns:
            Labels of shape (n_samples,)
        """
        ...


class RandomPartition:
    """Assign every point to a uniformly random cluster."""

    def partition(
        self,
        points: npt.NDArray[np.float64],
        n_clusters: int,
        rng: np.random.Generator,
    ) -> npt.NDArray[np.intp]:
        n_samples = points.shape[0]
        check_cluster_count(n_samples, n_clusters)
        return rng.integers(0, n_clusters, size=n_samples).astype(np.intp)

    def __repr__(self) -> str:
        return "RandomPartition()"


class SequentialPartition:
    """Split the points, in order, into n_clusters contiguous blocks.

    Every cluster receives at least one point, and the result does not depend
    on the random source.
    """

    def partition(
        self,
        points: npt.NDArray[np.float64],
        n_clusters: int,
        rng: np.random.Generator,
    ) -> npt.NDArray[np.intp]:
        n_samples = points.shape[0]
        check_cluster_count(n_samples, n_clusters)
        return (np.arange(n_samples, dtype=np.intp) * n_clusters) // n_samples

    def __repr__(self) -> str:
        return "SequentialPartition()"

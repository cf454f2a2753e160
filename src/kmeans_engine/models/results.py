"""Result structures returned by the clustering engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np
import numpy.typing as npt


class IterationState(str, Enum):
    """Lifecycle of a Lloyd iteration run."""

    INITIALIZED = "initialized"
    ITERATING = "iterating"
    CONVERGED = "converged"
    MAX_ITERATIONS_REACHED = "max_iterations_reached"


@dataclass(frozen=True)
class ClusteringResult:
    """Outcome of a ClusterEngine run.

    Attributes:
        labels: Cluster index per point, shape (n_samples,)
        centroids: Cluster centroids, shape (n_clusters, n_features)
        n_iter: Reassignment rounds performed by the final Lloyd run (the
            refinement run after merging, when there is one)
        state: Terminal state of the final Lloyd run
        inertia: Sum of distances from each point to its centroid
        overclustered_to: Cluster count used before merging (equals n_clusters
            when no overclustering was done)
        overcluster_n_iter: Reassignment rounds of the Lloyd run at the
            overclustered count (0 when no overclustering was done)
    """

    labels: npt.NDArray[np.intp]
    centroids: npt.NDArray[np.float64]
    n_iter: int
    state: IterationState
    inertia: float
    overclustered_to: int
    overcluster_n_iter: int = 0

    @property
    def n_clusters(self) -> int:
        """Number of centroids in the result."""
        return int(self.centroids.shape[0])

    @property
    def n_clusters_found(self) -> int:
        """Number of distinct non-empty clusters in the labels."""
        return int(np.unique(self.labels).size)

    @property
    def converged(self) -> bool:
        """Whether the final Lloyd run stopped because assignments were stable."""
        return self.state is IterationState.CONVERGED

    def __repr__(self) -> str:
        return (
            f"ClusteringResult(n_clusters={self.n_clusters}, "
            f"n_iter={self.n_iter}, state={self.state.value})"
        )

"""Per-cluster running aggregates."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from kmeans_engine.core.distance import DistanceMetric


@dataclass
class ClusterStats:
    """Member counts and within-cluster sums of distances.

    Attributes:
        counts: Number of points per cluster, shape (n_clusters,)
        sse: Sum of metric distances from members to their centroid,
            shape (n_clusters,)
    """

    counts: npt.NDArray[np.intp]
    sse: npt.NDArray[np.float64]

    @classmethod
    def compute(
        cls,
        points: npt.NDArray[np.float64],
        labels: npt.NDArray[np.intp],
        centroids: npt.NDArray[np.float64],
        metric: DistanceMetric,
    ) -> "ClusterStats":
        """Full scan of the current assignment."""
        n_clusters = centroids.shape[0]
        counts = np.bincount(labels, minlength=n_clusters).astype(np.intp)
        sse = np.zeros(n_clusters, dtype=np.float64)
        for cluster in np.flatnonzero(counts):
            members = points[labels == cluster]
            sse[cluster] = metric.pairwise(members, centroids[cluster : cluster + 1]).sum()
        return cls(counts=counts, sse=sse)

    @property
    def n_clusters(self) -> int:
        return int(self.counts.shape[0])

    @property
    def inertia(self) -> float:
        """Total within-cluster distance."""
        return float(self.sse.sum())

    @property
    def variances(self) -> npt.NDArray[np.float64]:
        """Mean distance to the centroid per cluster (0 for empty clusters)."""
        out = np.zeros_like(self.sse)
        np.divide(self.sse, self.counts, out=out, where=self.counts > 0)
        return out

    def empty_clusters(self) -> npt.NDArray[np.intp]:
        """Indices of clusters with no members."""
        return np.flatnonzero(self.counts == 0)

    def move(self, source: int, target: int, distance_from_source: float) -> None:
        """Record a single point moving from source to target.

        The moved point becomes the target's only member, so the target's sum
        of distances is reset.
        """
        self.counts[source] -= 1
        self.sse[source] = max(self.sse[source] - distance_from_source, 0.0)
        self.counts[target] += 1
        self.sse[target] = 0.0

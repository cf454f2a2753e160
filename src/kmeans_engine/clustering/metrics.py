"""Clustering quality metrics."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from sklearn.metrics import silhouette_score as sk_silhouette_score


@dataclass(frozen=True)
class ClusterMetrics:
    """Overall clustering metrics.

    Attributes:
        silhouette_score: Silhouette score (-1 to 1, higher is better)
        n_clusters: Number of non-empty clusters
        n_samples: Total number of samples
        cluster_sizes: List of cluster sizes
        inertia: Sum of squared distances to closest centroid (if applicable)
    """

    silhouette_score: float
    n_clusters: int
    n_samples: int
    cluster_sizes: list[int]
    inertia: float | None = None

    @property
    def min_cluster_size(self) -> int:
        """Minimum cluster size."""
        return min(self.cluster_sizes) if self.cluster_sizes else 0

    @property
    def max_cluster_size(self) -> int:
        """Maximum cluster size."""
        return max(self.cluster_sizes) if self.cluster_sizes else 0

    @property
    def avg_cluster_size(self) -> float:
        """Average cluster size."""
        if not self.cluster_sizes:
            return 0.0
        return sum(self.cluster_sizes) / len(self.cluster_sizes)

    def __repr__(self) -> str:
        return (
            f"ClusterMetrics(n_clusters={self.n_clusters}, "
            f"silhouette={self.silhouette_score:.3f}, "
            f"sizes={self.min_cluster_size}-{self.max_cluster_size})"
        )


def compute_cluster_metrics(
    points: np.ndarray,
    labels: np.ndarray,
    inertia: float | None = None,
) -> ClusterMetrics:
    """Compute clustering metrics from points and labels.

    Args:
        points: Input points of shape (n_samples, n_features)
        labels: Cluster labels of shape (n_samples,)
        inertia: Optional inertia value from the clustering run

    Returns:
        ClusterMetrics object with computed metrics
    """
    labels = np.asarray(labels)
    unique_labels, cluster_sizes = np.unique(labels, return_counts=True)
    n_clusters = len(unique_labels)

    # Silhouette is only defined for 2 <= n_clusters <= n_samples - 1
    if 2 <= n_clusters < len(labels):
        silhouette = float(sk_silhouette_score(points, labels))
    else:
        silhouette = 0.0

    return ClusterMetrics(
        silhouette_score=silhouette,
        n_clusters=n_clusters,
        n_samples=len(labels),
        cluster_sizes=[int(size) for size in cluster_sizes],
        inertia=inertia,
    )

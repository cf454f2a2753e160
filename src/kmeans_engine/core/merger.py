"""Merge an overclustered result down to the requested cluster count."""

from __future__ import annotations

import logging

import numpy as np
import numpy.typing as npt

from kmeans_engine.core.distance import DistanceMetric, SquaredEuclideanDistance
from kmeans_engine.exceptions.core import InvalidOverclusteringFactorError

logger = logging.getLogger(__name__)


class OverclusterMerger:
    """Repeatedly merge the two closest clusters until n_clusters remain.

    The merged centroid is the member-count weighted mean of the two centroids
    and the merged cluster keeps the lower of the two indices. When several
    pairs are equally close, the pair with the lowest index sum wins, then the
    pair with the lowest first index. Labels are renumbered to [0, n_clusters)
    at the end, keeping the relative order of the surviving clusters.

    Example:
        >>> merger = OverclusterMerger()
        >>> labels, centroids = merger.merge(labels, centroids, n_clusters=3)
    """

    def __init__(self, metric: DistanceMetric | None = None) -> None:
        """Initialize the merger.

        Args:
            metric: Distance between centroids (default: squared Euclidean)
        """
        self.metric = metric if metric is not None else SquaredEuclideanDistance()

    def merge(
        self,
        labels: npt.NDArray[np.intp],
        centroids: npt.NDArray[np.float64],
        n_clusters: int,
    ) -> tuple[npt.NDArray[np.intp], npt.NDArray[np.float64]]:
        """Merge clusters until exactly n_clusters remain.

        Args:
            labels: Labels of shape (n_samples,), values in [0, len(centroids))
            centroids: Centroids of shape (n_current, n_features)
            n_clusters: Number of clusters to keep

        Returns:
            Tuple of (labels in [0, n_clusters), centroids of shape
            (n_clusters, n_features)). Inputs are not modified.

        Raises:
            InvalidOverclusteringFactorError: If n_clusters is below 1 or above
                the current number of clusters
        """
        n_current = centroids.shape[0]
        if n_clusters < 1 or n_clusters > n_current:
            raise InvalidOverclusteringFactorError(
                f"Cannot merge {n_current} clusters down to {n_clusters}."
            )

        labels = np.array(labels, dtype=np.intp, copy=True)
        centroids = np.array(centroids, dtype=np.float64, copy=True)
        counts = np.bincount(labels, minlength=n_current).astype(np.float64)
        active = list(range(n_current))

        while len(active) > n_clusters:
            keep, drop = self._closest_pair(centroids, active)

            total = counts[keep] + counts[drop]
            if total > 0:
                centroids[keep] = (
                    counts[keep] * centroids[keep] + counts[drop] * centroids[drop]
                ) / total
            counts[keep] = total
            counts[drop] = 0
            labels[labels == drop] = keep
            active.remove(drop)

            logger.debug(
                f"Merged cluster {drop} into {keep}; {len(active)} cluster(s) left"
            )

        remap = np.full(n_current, -1, dtype=np.intp)
        remap[active] = np.arange(len(active), dtype=np.intp)
        return remap[labels], centroids[active]

    def _closest_pair(
        self, centroids: npt.NDArray[np.float64], active: list[int]
    ) -> tuple[int, int]:
        """Return (lower, higher) original indices of the closest active pair."""
        index = np.asarray(active, dtype=np.intp)
        distances = self.metric.pairwise(centroids[index], centroids[index])
        rows, cols = np.triu_indices(index.size, k=1)
        pair_distances = distances[rows, cols]

        candidates = np.flatnonzero(pair_distances == pair_distances.min())
        first = index[rows[candidates]]
        second = index[cols[candidates]]
        # lexsort keys: last is primary
        best = np.lexsort((first, first + second))[0]
        return int(first[best]), int(second[best])

    def __repr__(self) -> str:
        return f"OverclusterMerger(metric={self.metric!r})"

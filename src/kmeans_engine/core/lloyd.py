"""Lloyd iteration: the K-Means convergence loop."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from kmeans_engine.core.distance import DistanceMetric, SquaredEuclideanDistance
from kmeans_engine.core.empty_cluster import EmptyClusterPolicy, MaxVarianceRepair
from kmeans_engine.core.stats import ClusterStats
from kmeans_engine.exceptions.core import InvalidArgumentError
from kmeans_engine.models.results import IterationState

logger = logging.getLogger(__name__)


@dataclass
class LloydResult:
    """Final state of a Lloyd run.

    Attributes:
        labels: Cluster index per point, shape (n_samples,)
        centroids: Centroids matching labels, shape (n_clusters, n_features)
        stats: Counts and sums of distances matching labels and centroids
        n_iter: Number of reassignment rounds performed
        state: CONVERGED or MAX_ITERATIONS_REACHED
    """

    labels: npt.NDArray[np.intp]
    centroids: npt.NDArray[np.float64]
    stats: ClusterStats
    n_iter: int
    state: IterationState


class LloydIterator:
    """Alternate centroid updates and point reassignment until stable.

    Each round:
    1. Recompute every centroid as the mean of its members
    2. Hand empty clusters to the empty cluster policy
    3. Move every point to its closest centroid (ties go to the lowest index)
    4. Stop if no point changed cluster, or if reassignment only reverted
       the moves made by the empty cluster policy (the policy's labels are kept)

    At most ``max_iterations`` reassignment rounds are run. Running out of
    rounds is a normal outcome: a last centroid update is applied so the
    returned centroids describe the returned labels.

    Example:
        >>> iterator = LloydIterator(max_iterations=100)
        >>> result = iterator.run(points, initial_labels, n_clusters=3)
        >>> result.state
        <IterationState.CONVERGED: 'converged'>
    """

    def __init__(
        self,
        max_iterations: int = 1000,
        metric: DistanceMetric | None = None,
        empty_cluster_policy: EmptyClusterPolicy | None = None,
    ) -> None:
        """Initialize the iterator.

        Args:
            max_iterations: Maximum number of reassignment rounds (default: 1000)
            metric: Distance metric (default: squared Euclidean)
            empty_cluster_policy: Empty cluster handling (default: MaxVarianceRepair)

        Raises:
            InvalidArgumentError: If max_iterations is negative
        """
        if max_iterations < 0:
            raise InvalidArgumentError(
                f"Invalid value for maximum iterations ({max_iterations}). "
                "Must be greater than or equal to 0."
            )
        self.max_iterations = max_iterations
        self.metric = metric if metric is not None else SquaredEuclideanDistance()
        self.empty_cluster_policy = (
            empty_cluster_policy
            if empty_cluster_policy is not None
            else MaxVarianceRepair()
        )
        self.state = IterationState.INITIALIZED

    def run(
        self,
        points: npt.NDArray[np.float64],
        labels: npt.NDArray[np.intp],
        n_clusters: int,
        centroids: npt.NDArray[np.float64] | None = None,
    ) -> LloydResult:
        """Run the loop from an initial assignment.

        Args:
            points: Point matrix of shape (n_samples, n_features), not modified
            labels: Initial labels of shape (n_samples,), values in [0, n_clusters)
            n_clusters: Number of clusters
            centroids: Optional starting centroids; only used as the value kept
                for clusters that are empty under a policy that allows them

        Returns:
            LloydResult with the final labels and centroids

        Raises:
            InvalidArgumentError: If labels do not match points or n_clusters
            EmptyClusterError: If the policy rejects an empty cluster
            RepairFailedError: If the policy fails to refill a cluster
        """
        labels = np.array(labels, dtype=np.intp, copy=True)
        if labels.shape != (points.shape[0],):
            raise InvalidArgumentError(
                f"Expected {points.shape[0]} labels, got shape {labels.shape}"
            )
        if labels.size and (labels.min() < 0 or labels.max() >= n_clusters):
            raise InvalidArgumentError(
                f"Labels must lie in [0, {n_clusters})"
            )

        if centroids is None:
            centroids = np.zeros((n_clusters, points.shape[1]), dtype=np.float64)
        else:
            centroids = np.array(centroids, dtype=np.float64, copy=True)

        self.state = IterationState.ITERATING
        n_iter = 0
        stats = None

        while n_iter < self.max_iterations:
            round_start = labels.copy()
            centroids, stats = self._update_centroids(points, labels, centroids)

            distances = self.metric.pairwise(points, centroids)
            new_labels = np.argmin(distances, axis=1).astype(np.intp)
            n_changed = int(np.count_nonzero(new_labels != labels))
            n_iter += 1

            logger.debug(f"Round {n_iter}: {n_changed} point(s) changed cluster")

            if n_changed == 0:
                self.state = IterationState.CONVERGED
                break

            # Reassignment undid every move made by the empty cluster policy;
            # the next round would repeat this one exactly. Keep the policy's
            # labels, which match the centroids and have no empty cluster.
            if np.array_equal(new_labels, round_start) and not np.array_equal(
                labels, round_start
            ):
                logger.debug(
                    f"Round {n_iter}: reassignment reverted the empty cluster "
                    "policy, stopping"
                )
                self.state = IterationState.CONVERGED
                break

            labels = new_labels
        else:
            self.state = IterationState.MAX_ITERATIONS_REACHED
            centroids, stats = self._update_centroids(points, labels, centroids)

        logger.debug(
            f"Lloyd run finished after {n_iter} round(s): {self.state.value}"
        )
        return LloydResult(
            labels=labels,
            centroids=centroids,
            stats=stats,
            n_iter=n_iter,
            state=self.state,
        )

    def _update_centroids(
        self,
        points: npt.NDArray[np.float64],
        labels: npt.NDArray[np.intp],
        previous: npt.NDArray[np.float64],
    ) -> tuple[npt.NDArray[np.float64], ClusterStats]:
        """Mean of members per cluster, then the empty cluster policy.

        Labels may be changed in place by the policy.
        """
        n_clusters = previous.shape[0]
        counts = np.bincount(labels, minlength=n_clusters)
        sums = np.zeros_like(previous)
        np.add.at(sums, labels, points)

        centroids = previous.copy()
        non_empty = counts > 0
        centroids[non_empty] = sums[non_empty] / counts[non_empty, np.newaxis]

        stats = ClusterStats.compute(points, labels, centroids, self.metric)
        empty = stats.empty_clusters()
        if empty.size:
            self.empty_cluster_policy.handle(
                points, labels, centroids, stats, empty, self.metric
            )
        return centroids, stats

    def __repr__(self) -> str:
        return (
            f"LloydIterator(max_iterations={self.max_iterations}, "
            f"metric={self.metric!r}, policy={self.empty_cluster_policy!r})"
        )

"""Clustering engine: partition, Lloyd iteration and optional overclustering.

Points are rows: the input is an (n_samples, n_features) matrix and the output
is one cluster index per row.
"""

from __future__ import annotations

import logging
import math

import numpy as np
import numpy.typing as npt
from sklearn.utils.validation import check_array

from kmeans_engine.core.distance import DistanceMetric, SquaredEuclideanDistance
from kmeans_engine.core.empty_cluster import (
    EmptyClusterPolicy,
    make_empty_cluster_policy,
)
from kmeans_engine.core.lloyd import LloydIterator, LloydResult
from kmeans_engine.core.merger import OverclusterMerger
from kmeans_engine.core.partition import (
    PartitionStrategy,
    RandomPartition,
    check_cluster_count,
)
from kmeans_engine.core.stats import ClusterStats
from kmeans_engine.exceptions.core import (
    InvalidArgumentError,
    InvalidOverclusteringFactorError,
)
from kmeans_engine.models.config import EmptyClusterPolicyName, KMeansConfig
from kmeans_engine.models.results import ClusteringResult

logger = logging.getLogger(__name__)


class ClusterEngine:
    """K-Means clustering with pluggable partition, metric and empty cluster policy.

    This class runs the clustering workflow:
    1. Builds an initial partition (random by default)
    2. Runs Lloyd iterations, refilling empty clusters as configured
    3. When overclustering, finds more clusters than requested and merges the
       closest ones until the requested count is left, then refines with a
       few more Lloyd rounds

    A new random source is seeded from ``random_state`` on every run, so the
    same seed gives identical results across runs and across engines. A
    ``np.random.Generator`` passed as ``random_state`` is used as-is and keeps
    advancing between runs.

    Example:
        >>> engine = ClusterEngine(overclustering=2.0, random_state=42)
        >>> labels = engine.cluster(points, n_clusters=3)
    """

    def __init__(
        self,
        max_iterations: int = 1000,
        overclustering: float = 1.0,
        empty_cluster_policy: EmptyClusterPolicyName | EmptyClusterPolicy = "repair",
        metric: DistanceMetric | None = None,
        partition: PartitionStrategy | None = None,
        random_state: int | np.random.Generator | None = None,
        refine_iterations: int = 1,
    ) -> None:
        """Initialize ClusterEngine.

        Arguments are checked when clustering, not here.

        Args:
            max_iterations: Maximum Lloyd reassignment rounds (default: 1000)
            overclustering: Cluster count multiplier before merging (default: 1.0)
            empty_cluster_policy: "repair", "reject", "allow" or a policy instance
                (default: "repair")
            metric: Distance metric (default: squared Euclidean)
            partition: Initial partition strategy (default: random)
            random_state: Seed or generator for the partition (default: None)
            refine_iterations: Lloyd rounds after merging (default: 1)
        """
        self.max_iterations = max_iterations
        self.overclustering = overclustering
        self.empty_cluster_policy = make_empty_cluster_policy(empty_cluster_policy)
        self.metric = metric if metric is not None else SquaredEuclideanDistance()
        self.partition = partition if partition is not None else RandomPartition()
        self.refine_iterations = refine_iterations
        self.random_state = random_state

    @classmethod
    def from_config(
        cls,
        config: KMeansConfig,
        metric: DistanceMetric | None = None,
        partition: PartitionStrategy | None = None,
    ) -> "ClusterEngine":
        """Build an engine from a KMeansConfig."""
        return cls(
            max_iterations=config.max_iterations,
            overclustering=config.overclustering,
            empty_cluster_policy=config.empty_cluster_policy,
            metric=metric,
            partition=partition,
            random_state=config.random_state,
            refine_iterations=config.refine_iterations,
        )

    def cluster(self, points: npt.ArrayLike, n_clusters: int) -> npt.NDArray[np.intp]:
        """Cluster points and return one cluster index per point.

        Args:
            points: Point matrix of shape (n_samples, n_features)
            n_clusters: Number of clusters to find

        Returns:
            Labels of shape (n_samples,) with values in [0, n_clusters)
        """
        return self.run(points, n_clusters).labels

    def run(self, points: npt.ArrayLike, n_clusters: int) -> ClusteringResult:
        """Cluster points and return the full result.

        Args:
            points: Point matrix of shape (n_samples, n_features)
            n_clusters: Number of clusters to find

        Returns:
            ClusteringResult with labels, centroids and run statistics

        Raises:
            InvalidArgumentError: If n_clusters, max_iterations or
                refine_iterations is invalid
            InvalidClusterCountError: If n_clusters exceeds the number of points
            InvalidOverclusteringFactorError: If overclustering < 1.0
            EmptyClusterError: If a cluster empties under the reject policy
            RepairFailedError: If the repair policy breaks down
            ValueError: If points is not a finite, non-empty 2D array
        """
        self._validate(n_clusters)
        data = check_array(points, dtype=np.float64, ensure_min_samples=1, copy=True)
        n_samples = data.shape[0]
        check_cluster_count(n_samples, n_clusters)

        actual_clusters = self.overclustered_count(n_clusters)
        if actual_clusters > n_samples:
            logger.warning(
                f"Overclustering factor {self.overclustering} asks for "
                f"{actual_clusters} clusters but there are only {n_samples} "
                "points. No overclustering will be done."
            )
            actual_clusters = n_clusters

        logger.info(
            f"Clustering {n_samples} points into {n_clusters} clusters"
            + (
                f" (overclustering to {actual_clusters})"
                if actual_clusters > n_clusters
                else ""
            )
        )

        rng = np.random.default_rng(self.random_state)
        labels = self.partition.partition(data, actual_clusters, rng)
        iterator = LloydIterator(
            max_iterations=self.max_iterations,
            metric=self.metric,
            empty_cluster_policy=self.empty_cluster_policy,
        )
        result = iterator.run(data, labels, actual_clusters)

        overcluster_n_iter = 0
        if actual_clusters > n_clusters:
            overcluster_n_iter = result.n_iter
            logger.info(
                f"Overclustered run finished after {overcluster_n_iter} round(s) "
                f"({result.state.value}); merging down to {n_clusters} clusters"
            )
            result = self._merge(data, result, n_clusters)

        logger.info(
            f"Clustering finished after {result.n_iter} round(s) "
            f"({result.state.value}), inertia={result.stats.inertia:.6g}"
        )
        return ClusteringResult(
            labels=result.labels,
            centroids=result.centroids,
            n_iter=result.n_iter,
            state=result.state,
            inertia=result.stats.inertia,
            overclustered_to=actual_clusters,
            overcluster_n_iter=overcluster_n_iter,
        )

    def overclustered_count(self, n_clusters: int) -> int:
        """Cluster count to run Lloyd at before merging.

        round(n_clusters * overclustering), rounding halves up, never below
        n_clusters.
        """
        return max(n_clusters, int(math.floor(n_clusters * self.overclustering + 0.5)))

    def _merge(
        self,
        data: npt.NDArray[np.float64],
        result: LloydResult,
        n_clusters: int,
    ) -> LloydResult:
        merger = OverclusterMerger(metric=self.metric)
        labels, centroids = merger.merge(result.labels, result.centroids, n_clusters)

        if self.refine_iterations == 0:
            return LloydResult(
                labels=labels,
                centroids=centroids,
                stats=ClusterStats.compute(data, labels, centroids, self.metric),
                n_iter=result.n_iter,
                state=result.state,
            )

        refiner = LloydIterator(
            max_iterations=self.refine_iterations,
            metric=self.metric,
            empty_cluster_policy=self.empty_cluster_policy,
        )
        return refiner.run(data, labels, n_clusters, centroids=centroids)

    def _validate(self, n_clusters: int) -> None:
        if n_clusters < 1:
            raise InvalidArgumentError(
                f"Invalid number of clusters requested ({n_clusters}). "
                "Must be greater than or equal to 1."
            )
        if self.max_iterations < 0:
            raise InvalidArgumentError(
                f"Invalid value for maximum iterations ({self.max_iterations}). "
                "Must be greater than or equal to 0."
            )
        if self.overclustering < 1.0:
            raise InvalidOverclusteringFactorError(
                f"Invalid value for overclustering ({self.overclustering}). "
                "Must be greater than or equal to 1."
            )
        if self.refine_iterations < 0:
            raise InvalidArgumentError(
                f"Invalid value for refine iterations ({self.refine_iterations}). "
                "Must be greater than or equal to 0."
            )

    def __repr__(self) -> str:
        return (
            f"ClusterEngine(max_iterations={self.max_iterations}, "
            f"overclustering={self.overclustering}, "
            f"policy={self.empty_cluster_policy!r})"
        )

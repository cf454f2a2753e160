"""K-Means estimator backed by ClusterEngine."""

from __future__ import annotations

import numpy as np
from sklearn.base import BaseEstimator, ClusterMixin
from sklearn.utils.validation import check_array

from kmeans_engine.core.cluster_engine import ClusterEngine
from kmeans_engine.core.distance import SquaredEuclideanDistance
from kmeans_engine.models.config import EmptyClusterPolicyName
from kmeans_engine.models.results import ClusteringResult, IterationState


class KMeansClusterer(BaseEstimator, ClusterMixin):
    """K-Means clustering estimator.

    Scikit-learn style wrapper over ClusterEngine with random initial
    partition, squared Euclidean distance and max-variance empty cluster
    repair.

    Example:
        >>> clusterer = KMeansClusterer(n_clusters=5, overclustering=2.0)
        >>> clusterer.fit(points)
        >>> labels = clusterer.predict(new_points)
    """

    def __init__(
        self,
        n_clusters: int = 8,
        max_iterations: int = 1000,
        overclustering: float = 1.0,
        empty_cluster_policy: EmptyClusterPolicyName = "repair",
        refine_iterations: int = 1,
        random_state: int | None = None,
    ) -> None:
        """Initialize K-Means clusterer.

        Args:
            n_clusters: Number of clusters (default: 8)
            max_iterations: Maximum Lloyd rounds (default: 1000)
            overclustering: Overclustering factor (default: 1.0, disabled)
            empty_cluster_policy: "repair", "reject" or "allow" (default: "repair")
            refine_iterations: Lloyd rounds after merging (default: 1)
            random_state: Random seed for reproducibility (default: None)
        """
        self.n_clusters = n_clusters
        self.max_iterations = max_iterations
        self.overclustering = overclustering
        self.empty_cluster_policy = empty_cluster_policy
        self.refine_iterations = refine_iterations
        self.random_state = random_state

    def _create_engine(self) -> ClusterEngine:
        return ClusterEngine(
            max_iterations=self.max_iterations,
            overclustering=self.overclustering,
            empty_cluster_policy=self.empty_cluster_policy,
            random_state=self.random_state,
            refine_iterations=self.refine_iterations,
        )

    def fit(self, points: np.ndarray, y=None) -> "KMeansClusterer":
        """Fit the clusterer on points.

        Args:
            points: Input points of shape (n_samples, n_features)
            y: Ignored

        Returns:
            Self
        """
        self._result: ClusteringResult = self._create_engine().run(
            points, self.n_clusters
        )
        return self

    def predict(self, points: np.ndarray) -> np.ndarray:
        """Assign points to the nearest fitted centroid.

        Args:
            points: Input points of shape (n_samples, n_features)

        Returns:
            Cluster assignments of shape (n_samples,)
        """
        result = self._fitted_result(
            "Clusterer must be fitted before predict. Call fit() first."
        )
        data = check_array(points, dtype=np.float64)
        distances = SquaredEuclideanDistance().pairwise(data, result.centroids)
        return np.argmin(distances, axis=1).astype(np.intp)

    def fit_predict(self, points: np.ndarray, y=None) -> np.ndarray:
        """Fit the clusterer and return the fitted labels."""
        return self.fit(points).labels_

    def _fitted_result(
        self, message: str = "Clusterer must be fitted first."
    ) -> ClusteringResult:
        result = getattr(self, "_result", None)
        if result is None:
            raise RuntimeError(message)
        return result

    @property
    def cluster_centers_(self) -> np.ndarray:
        """Cluster centers of shape (n_clusters, n_features)."""
        return self._fitted_result().centroids

    @property
    def labels_(self) -> np.ndarray:
        """Labels assigned during fit() of shape (n_samples,)."""
        return self._fitted_result().labels

    @property
    def n_clusters_(self) -> int:
        """Number of clusters requested."""
        return self.n_clusters

    @property
    def inertia_(self) -> float:
        """Sum of squared distances to the assigned centroid."""
        return self._fitted_result().inertia

    @property
    def n_iter_(self) -> int:
        """Number of Lloyd rounds in the final run.

        With overclustering this counts the refinement rounds after merging;
        see ``overcluster_n_iter_`` for the rounds before merging.
        """
        return self._fitted_result().n_iter

    @property
    def overcluster_n_iter_(self) -> int:
        """Number of Lloyd rounds at the overclustered count (0 if none)."""
        return self._fitted_result().overcluster_n_iter

    @property
    def state_(self) -> IterationState:
        """How the final Lloyd run terminated."""
        return self._fitted_result().state

    def __repr__(self) -> str:
        return f"KMeansClusterer(n_clusters={self.n_clusters})"

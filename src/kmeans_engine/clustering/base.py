"""Clusterer protocol for clustering estimators."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class Clusterer(Protocol):
    """Protocol for clustering estimators.

    Implementations should provide sklearn-like fit/predict methods
    and expose cluster centers and labels as properties.
    """

    def fit(self, points: np.ndarray) -> "Clusterer":
        """Fit the clusterer on points of shape (n_samples, n_features)."""
        ...

    def predict(self, points: np.ndarray) -> np.ndarray:
        """Cluster assignments of shape (n_samples,) for points."""
        ...

    @property
    def cluster_centers_(self) -> np.ndarray:
        """Cluster centers of shape (n_clusters, n_features)."""
        ...

    @property
    def labels_(self) -> np.ndarray:
        """Labels assigned during fit() of shape (n_samples,)."""
        ...

    @property
    def n_clusters_(self) -> int:
        """Number of clusters found."""
        ...

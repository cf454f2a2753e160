"""Distance metrics between points and centroids."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np
import numpy.typing as npt


@runtime_checkable
class DistanceMetric(Protocol):
    """Protocol for dissimilarity measures used by the engine.

    Only the argmin over centroids matters to the Lloyd iteration, so a metric
    does not need to satisfy the triangle inequality.
    """

    def __call__(self, a: npt.ArrayLike, b: npt.ArrayLike) -> float:
        """Distance between two vectors of shape (n_features,)."""
        ...

    def pairwise(
        self, x: npt.NDArray[np.float64], y: npt.NDArray[np.float64]
    ) -> npt.NDArray[np.float64]:
        """Distances of shape (len(x), len(y)) between rows of x and rows of y."""
        ...


class SquaredEuclideanDistance:
    """Squared Euclidean distance, the default metric.

    Skips the square root, which does not change which centroid is closest.
    """

    def __call__(self, a: npt.ArrayLike, b: npt.ArrayLike) -> float:
        diff = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
        return float(np.dot(diff, diff))

    def pairwise(
        self, x: npt.NDArray[np.float64], y: npt.NDArray[np.float64]
    ) -> npt.NDArray[np.float64]:
        # Exact differences rather than the |x|^2 - 2xy + |y|^2 expansion so
        # equal distances compare equal for tie-breaking.
        diff = x[:, np.newaxis, :] - y[np.newaxis, :, :]
        return np.einsum("ijk,ijk->ij", diff, diff)

    def __repr__(self) -> str:
        return "SquaredEuclideanDistance()"


class EuclideanDistance(SquaredEuclideanDistance):
    """Plain Euclidean (L2) distance."""

    def __call__(self, a: npt.ArrayLike, b: npt.ArrayLike) -> float:
        return float(np.sqrt(super().__call__(a, b)))

    def pairwise(
        self, x: npt.NDArray[np.float64], y: npt.NDArray[np.float64]
    ) -> npt.NDArray[np.float64]:
        return np.sqrt(super().pairwise(x, y))

    def __repr__(self) -> str:
        return "EuclideanDistance()"

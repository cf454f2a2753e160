"""kmeans_engine - K-Means clustering with overclustering and empty cluster repair.

Usage:
    >>> import numpy as np
    >>> from kmeans_engine import ClusterEngine
    >>>
    >>> points = np.random.default_rng(0).normal(size=(100, 2))
    >>> engine = ClusterEngine(overclustering=2.0, random_state=42)
    >>> labels = engine.cluster(points, n_clusters=3)
"""

from kmeans_engine import clustering
from kmeans_engine.core import (
    AllowEmptyClusters,
    ClusterEngine,
    ClusterStats,
    DistanceMetric,
    EmptyClusterPolicy,
    EuclideanDistance,
    LloydIterator,
    LloydResult,
    MaxVarianceRepair,
    OverclusterMerger,
    PartitionStrategy,
    RandomPartition,
    RejectEmptyClusters,
    SequentialPartition,
    SquaredEuclideanDistance,
)
from kmeans_engine.exceptions import (
    EmptyClusterError,
    InvalidArgumentError,
    InvalidClusterCountError,
    InvalidOverclusteringFactorError,
    KMeansEngineError,
    RepairFailedError,
)
from kmeans_engine.models import ClusteringResult, IterationState, KMeansConfig

__version__ = "0.1.0"

__all__ = [
    # Main API
    "ClusterEngine",
    "KMeansConfig",
    "ClusteringResult",
    "IterationState",
    # Strategies
    "DistanceMetric",
    "SquaredEuclideanDistance",
    "EuclideanDistance",
    "PartitionStrategy",
    "RandomPartition",
    "SequentialPartition",
    "EmptyClusterPolicy",
    "MaxVarianceRepair",
    "RejectEmptyClusters",
    "AllowEmptyClusters",
    # Building blocks
    "LloydIterator",
    "LloydResult",
    "OverclusterMerger",
    "ClusterStats",
    # Errors
    "KMeansEngineError",
    "InvalidArgumentError",
    "InvalidClusterCountError",
    "InvalidOverclusteringFactorError",
    "EmptyClusterError",
    "RepairFailedError",
    # Modules
    "clustering",
]

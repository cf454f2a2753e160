"""Core clustering engine components."""

from kmeans_engine.core.cluster_engine import ClusterEngine
from kmeans_engine.core.distance import (
    DistanceMetric,
    EuclideanDistance,
    SquaredEuclideanDistance,
)
from kmeans_engine.core.empty_cluster import (
    AllowEmptyClusters,
    EmptyClusterPolicy,
    MaxVarianceRepair,
    RejectEmptyClusters,
    make_empty_cluster_policy,
)
from kmeans_engine.core.lloyd import LloydIterator, LloydResult
from kmeans_engine.core.merger import OverclusterMerger
from kmeans_engine.core.partition import (
    PartitionStrategy,
    RandomPartition,
    SequentialPartition,
)
from kmeans_engine.core.stats import ClusterStats

__all__ = [
    "ClusterEngine",
    # Distance
    "DistanceMetric",
    "SquaredEuclideanDistance",
    "EuclideanDistance",
    # Partition
    "PartitionStrategy",
    "RandomPartition",
    "SequentialPartition",
    # Empty clusters
    "EmptyClusterPolicy",
    "MaxVarianceRepair",
    "RejectEmptyClusters",
    "AllowEmptyClusters",
    "make_empty_cluster_policy",
    # Iteration
    "LloydIterator",
    "LloydResult",
    "OverclusterMerger",
    "ClusterStats",
]

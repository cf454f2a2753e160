"""Configuration and result models for kmeans_engine."""

from kmeans_engine.models.config import EmptyClusterPolicyName, KMeansConfig
from kmeans_engine.models.results import ClusteringResult, IterationState

__all__ = [
    "EmptyClusterPolicyName",
    "KMeansConfig",
    "ClusteringResult",
    "IterationState",
]

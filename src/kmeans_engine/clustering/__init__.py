"""Estimator and metrics built on the clustering engine."""

from kmeans_engine.clustering.base import Clusterer
from kmeans_engine.clustering.kmeans import KMeansClusterer
from kmeans_engine.clustering.metrics import ClusterMetrics, compute_cluster_metrics

__all__ = [
    # Protocol
    "Clusterer",
    # Clusterers
    "KMeansClusterer",
    # Metrics
    "ClusterMetrics",
    "compute_cluster_metrics",
]

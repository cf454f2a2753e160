"""K-Means Engine Exceptions Module.

This module contains exception classes used throughout the kmeans_engine library.
"""

from kmeans_engine.exceptions.core import (
    EmptyClusterError,
    InvalidArgumentError,
    InvalidClusterCountError,
    InvalidOverclusteringFactorError,
    KMeansEngineError,
    RepairFailedError,
)

__all__ = [
    "KMeansEngineError",
    "InvalidArgumentError",
    "InvalidClusterCountError",
    "InvalidOverclusteringFactorError",
    "EmptyClusterError",
    "RepairFailedError",
]

"""Custom exceptions for the K-Means engine.

This module defines a hierarchy of exceptions raised by the clustering engine,
so callers can tell caller errors apart from aborted runs and internal faults.
"""

from __future__ import annotations


class KMeansEngineError(Exception):
    """Base exception for all K-Means engine operations.

    This is the root exception that all other engine exceptions inherit from.
    """


class InvalidArgumentError(KMeansEngineError, ValueError):
    """Raised when a clustering run is requested with invalid arguments.

    This exception is raised when:
    - The requested number of clusters is less than 1
    - The iteration cap is negative
    - The overclustering factor is below 1.0
    """


class InvalidClusterCountError(InvalidArgumentError):
    """Raised when a cluster count cannot be partitioned over the points.

    This exception is raised when:
    - n_clusters < 1
    - n_clusters is larger than the number of points
    """


class InvalidOverclusteringFactorError(InvalidArgumentError):
    """Raised when the overclustering factor would shrink the cluster count.

    This exception is raised when:
    - The overclustering factor is below 1.0
    - A merge is requested down to more clusters than currently exist
    """


class EmptyClusterError(KMeansEngineError):
    """Raised when a cluster loses all its points under the reject policy.

    The run is aborted and no assignment is returned.
    """


class RepairFailedError(KMeansEngineError):
    """Raised when the repair policy leaves a cluster empty.

    This signals a broken invariant inside the engine, not a caller error.
    """

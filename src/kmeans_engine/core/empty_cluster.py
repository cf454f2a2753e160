"""Policies for clusters that lose all their points."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

import numpy as np
import numpy.typing as npt

from kmeans_engine.core.distance import DistanceMetric
from kmeans_engine.core.stats import ClusterStats
from kmeans_engine.exceptions.core import (
    EmptyClusterError,
    InvalidArgumentError,
    RepairFailedError,
)
from kmeans_engine.models.config import EmptyClusterPolicyName

logger = logging.getLogger(__name__)


@runtime_checkable
class EmptyClusterPolicy(Protocol):
    """Protocol for handling empty clusters after a centroid update.

    Implementations mutate labels, centroids and stats in place.
    """

    def handle(
        self,
        points: npt.NDArray[np.float64],
        labels: npt.NDArray[np.intp],
        centroids: npt.NDArray[np.float64],
        stats: ClusterStats,
        empty: npt.NDArray[np.intp],
        metric: DistanceMetric,
    ) -> None:
        """Deal with the clusters listed in ``empty``.

        Args:
            points: Point matrix of shape (n_samples, n_features)
            labels: Current labels of shape (n_samples,)
            centroids: Current centroids of shape (n_clusters, n_features)
            stats: Aggregates matching labels and centroids
            empty: Indices of clusters with no members
            metric: Distance metric of the run
        """
        ...


class RejectEmptyClusters:
    """Fail the run as soon as any cluster is empty."""

    def handle(
        self,
        points: npt.NDArray[np.float64],
        labels: npt.NDArray[np.intp],
        centroids: npt.NDArray[np.float64],
        stats: ClusterStats,
        empty: npt.NDArray[np.intp],
        metric: DistanceMetric,
    ) -> None:
        if empty.size:
            raise EmptyClusterError(
                f"Cluster(s) {empty.tolist()} became empty and empty clusters "
                "are rejected."
            )

    def __repr__(self) -> str:
        return "RejectEmptyClusters()"


class AllowEmptyClusters:
    """Leave empty clusters alone.

    The centroid of an empty cluster is not recomputed, so it keeps the value
    from the previous round.
    """

    def handle(
        self,
        points: npt.NDArray[np.float64],
        labels: npt.NDArray[np.intp],
        centroids: npt.NDArray[np.float64],
        stats: ClusterStats,
        empty: npt.NDArray[np.intp],
        metric: DistanceMetric,
    ) -> None:
        if empty.size:
            logger.debug(f"Keeping {empty.size} empty cluster(s): {empty.tolist()}")

    def __repr__(self) -> str:
        return "AllowEmptyClusters()"


class MaxVarianceRepair:
    """Refill empty clusters from the cluster with the largest spread.

    For each empty cluster, the point furthest from its centroid is taken from
    the cluster with the largest sum of distances to its centroid and becomes
    the sole member (and centroid) of the empty cluster. Only clusters with at
    least two members can give a point away. Ties go to the lowest cluster
    index and the lowest point index.
    """

    def handle(
        self,
        points: npt.NDArray[np.float64],
        labels: npt.NDArray[np.intp],
        centroids: npt.NDArray[np.float64],
        stats: ClusterStats,
        empty: npt.NDArray[np.intp],
        metric: DistanceMetric,
    ) -> None:
        for target in empty:
            target = int(target)
            if stats.counts[target] > 0:
                continue

            donors = np.flatnonzero(stats.counts >= 2)
            if donors.size == 0:
                raise RepairFailedError(
                    f"No cluster can give up a point to refill cluster {target}."
                )
            donor = int(donors[np.argmax(stats.sse[donors])])

            members = np.flatnonzero(labels == donor)
            distances = metric.pairwise(points[members], centroids[donor : donor + 1])[:, 0]
            furthest = int(np.argmax(distances))
            point_index = int(members[furthest])

            labels[point_index] = target
            centroids[target] = points[point_index]
            stats.move(donor, target, float(distances[furthest]))

            logger.debug(
                f"Moved point {point_index} from cluster {donor} "
                f"to empty cluster {target}"
            )

        still_empty = stats.empty_clusters()
        if still_empty.size:
            raise RepairFailedError(
                f"Cluster(s) {still_empty.tolist()} are still empty after repair."
            )

    def __repr__(self) -> str:
        return "MaxVarianceRepair()"


_POLICIES = {
    "repair": MaxVarianceRepair,
    "reject": RejectEmptyClusters,
    "allow": AllowEmptyClusters,
}


def make_empty_cluster_policy(
    policy: EmptyClusterPolicyName | EmptyClusterPolicy,
) -> EmptyClusterPolicy:
    """Resolve a policy name ("repair", "reject" or "allow") to an instance.

    Policy instances are returned unchanged.

    Raises:
        InvalidArgumentError: If the name is unknown
    """
    if isinstance(policy, str):
        try:
            return _POLICIES[policy]()
        except KeyError:
            raise InvalidArgumentError(
                f"Unknown empty cluster policy '{policy}'. "
                f"Expected one of {sorted(_POLICIES)}."
            ) from None
    return policy

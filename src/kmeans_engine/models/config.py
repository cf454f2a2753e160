"""Configuration model for the clustering engine."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

EmptyClusterPolicyName = Literal["repair", "reject", "allow"]


class KMeansConfig(BaseModel):
    """Configuration for a K-Means clustering run.

    Attributes:
        max_iterations: Maximum number of reassignment rounds
        overclustering: Factor applied to the requested cluster count before merging
        empty_cluster_policy: What to do when a cluster loses all its points
        random_state: Seed for the initial random partition
        refine_iterations: Lloyd rounds run after merging overclustered results
    """

    max_iterations: int = Field(
        default=1000, ge=0, description="Maximum reassignment rounds"
    )
    overclustering: float = Field(
        default=1.0, ge=1.0, description="Overclustering factor"
    )
    empty_cluster_policy: EmptyClusterPolicyName = Field(
        default="repair", description="Empty cluster handling"
    )
    random_state: Optional[int] = Field(
        default=None, description="Random seed for the initial partition"
    )
    refine_iterations: int = Field(
        default=1, ge=0, description="Lloyd rounds after overcluster merging"
    )


__all__ = [
    "EmptyClusterPolicyName",
    "KMeansConfig",
]

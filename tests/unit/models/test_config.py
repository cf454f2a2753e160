"""Unit tests for configuration and result models."""

import numpy as np
import pytest
from pydantic import ValidationError

from kmeans_engine.models import ClusteringResult, IterationState, KMeansConfig


class TestKMeansConfig:
    """Tests for KMeansConfig."""

    def test_defaults(self):
        """Test default values."""
        config = KMeansConfig()
        assert config.max_iterations == 1000
        assert config.overclustering == 1.0
        assert config.empty_cluster_policy == "repair"
        assert config.random_state is None
        assert config.refine_iterations == 1

    def test_negative_max_iterations_rejected(self):
        """Test that a negative iteration cap fails validation."""
        with pytest.raises(ValidationError):
            KMeansConfig(max_iterations=-1)

    def test_overclustering_below_one_rejected(self):
        """Test that a factor below 1 fails validation."""
        with pytest.raises(ValidationError):
            KMeansConfig(overclustering=0.5)

    def test_unknown_policy_rejected(self):
        """Test that only known policy names are accepted."""
        with pytest.raises(ValidationError):
            KMeansConfig(empty_cluster_policy="ignore")

    def test_round_trip(self):
        """Test dumping and reloading a config."""
        config = KMeansConfig(overclustering=2.0, random_state=3)
        assert KMeansConfig.model_validate(config.model_dump()) == config


class TestClusteringResult:
    """Tests for ClusteringResult."""

    def _result(self, state=IterationState.CONVERGED):
        return ClusteringResult(
            labels=np.array([0, 0, 2, 2]),
            centroids=np.zeros((3, 2)),
            n_iter=4,
            state=state,
            inertia=1.5,
            overclustered_to=6,
        )

    def test_counts(self):
        """Test cluster count properties."""
        result = self._result()
        assert result.n_clusters == 3
        assert result.n_clusters_found == 2

    def test_converged(self):
        """Test converged flag."""
        assert self._result().converged
        assert not self._result(IterationState.MAX_ITERATIONS_REACHED).converged

    def test_repr(self):
        """Test __repr__ format."""
        repr_str = repr(self._result())
        assert "n_clusters=3" in repr_str
        assert "converged" in repr_str

"""Unit tests for LloydIterator."""

import numpy as np
import pytest

from kmeans_engine.core.empty_cluster import (
    AllowEmptyClusters,
    MaxVarianceRepair,
    RejectEmptyClusters,
)
from kmeans_engine.core.lloyd import LloydIterator
from kmeans_engine.exceptions import EmptyClusterError, InvalidArgumentError
from kmeans_engine.models import IterationState


class TestLloydInitialization:
    """Tests for LloydIterator initialization."""

    def test_defaults(self):
        """Test default iteration cap, metric and policy."""
        iterator = LloydIterator()
        assert iterator.max_iterations == 1000
        assert isinstance(iterator.empty_cluster_policy, MaxVarianceRepair)
        assert iterator.state is IterationState.INITIALIZED

    def test_negative_max_iterations_raises(self):
        """Test that a negative iteration cap is rejected."""
        with pytest.raises(InvalidArgumentError, match="maximum iterations"):
            LloydIterator(max_iterations=-1)

    def test_repr(self):
        """Test __repr__ format."""
        assert "max_iterations=5" in repr(LloydIterator(max_iterations=5))


class TestLloydConvergence:
    """Tests for the convergence loop."""

    def test_single_cluster_converges_in_one_round(self, simple_2d_clusters):
        """Test that K=1 converges right after the first centroid update."""
        result = LloydIterator().run(
            simple_2d_clusters, np.zeros(60, dtype=np.intp), n_clusters=1
        )

        assert result.state is IterationState.CONVERGED
        assert result.n_iter == 1
        assert np.all(result.labels == 0)
        np.testing.assert_allclose(
            result.centroids[0], simple_2d_clusters.mean(axis=0)
        )

    def test_correct_start_is_stable(self, simple_2d_clusters, true_labels):
        """Test that starting from the true clusters converges immediately."""
        result = LloydIterator().run(simple_2d_clusters, true_labels, n_clusters=3)

        assert result.state is IterationState.CONVERGED
        assert result.n_iter == 1
        np.testing.assert_array_equal(result.labels, true_labels)

    def test_recovers_clusters_from_mixed_start(self, simple_2d_clusters, true_labels):
        """Test convergence from a start where each cluster holds a few strays."""
        start = true_labels.copy()
        start[[0, 21, 42]] = [1, 2, 0]

        result = LloydIterator().run(simple_2d_clusters, start, n_clusters=3)

        assert result.state is IterationState.CONVERGED
        np.testing.assert_array_equal(result.labels, true_labels)

    def test_result_matches_centroids(self, simple_5d_clusters, true_labels):
        """Test that returned centroids are the means of returned labels."""
        start = true_labels.copy()
        start[[5, 25, 45]] = [2, 0, 1]
        result = LloydIterator().run(simple_5d_clusters, start, n_clusters=3)

        for cluster in range(3):
            members = simple_5d_clusters[result.labels == cluster]
            np.testing.assert_allclose(result.centroids[cluster], members.mean(axis=0))
        assert result.stats.inertia == pytest.approx(
            sum(
                np.sum((simple_5d_clusters[result.labels == c] - result.centroids[c]) ** 2)
                for c in range(3)
            )
        )

    def test_does_not_modify_inputs(self, simple_2d_clusters, true_labels):
        """Test that points and initial labels are left untouched."""
        points = simple_2d_clusters.copy()
        start = true_labels.copy()
        start[0] = 2

        LloydIterator().run(points, start, n_clusters=3)

        np.testing.assert_array_equal(points, simple_2d_clusters)
        assert start[0] == 2


class TestLloydIterationBudget:
    """Tests for the iteration cap."""

    def test_zero_iterations(self, simple_2d_clusters, true_labels):
        """Test that no reassignment happens with a zero budget."""
        start = true_labels.copy()
        start[0] = 2

        result = LloydIterator(max_iterations=0).run(
            simple_2d_clusters, start, n_clusters=3
        )

        assert result.n_iter == 0
        assert result.state is IterationState.MAX_ITERATIONS_REACHED
        np.testing.assert_array_equal(result.labels, start)

    @pytest.mark.parametrize("max_iterations", [1, 2, 3])
    def test_rounds_never_exceed_budget(self, simple_5d_clusters, max_iterations):
        """Test that the loop stops at the cap."""
        start = np.random.default_rng(11).integers(0, 6, size=60)
        result = LloydIterator(max_iterations=max_iterations).run(
            simple_5d_clusters, start, n_clusters=6
        )

        assert result.n_iter <= max_iterations
        assert result.state in (
            IterationState.CONVERGED,
            IterationState.MAX_ITERATIONS_REACHED,
        )

    def test_budget_exhausted_still_repairs(self, colinear_points):
        """Test that the returned labels have no empty cluster when the cap hits."""
        result = LloydIterator(max_iterations=1).run(
            colinear_points, np.array([0, 1, 0, 2]), n_clusters=3
        )

        assert result.state is IterationState.MAX_ITERATIONS_REACHED
        assert result.n_iter == 1
        np.testing.assert_array_equal(result.labels, [0, 1, 2, 2])


class TestLloydEmptyClusters:
    """Tests for empty cluster handling inside the loop."""

    def test_repair_refills_cluster(self, colinear_points):
        """Test that a cluster emptied by reassignment is refilled."""
        result = LloydIterator(empty_cluster_policy=MaxVarianceRepair()).run(
            colinear_points, np.array([0, 1, 0, 2]), n_clusters=3
        )

        assert result.state is IterationState.CONVERGED
        assert result.n_iter == 2
        np.testing.assert_array_equal(result.labels, [0, 1, 2, 2])
        assert np.all(result.stats.counts > 0)

    def test_repair_from_all_in_one_cluster(self):
        """Test starting with every point in a single cluster."""
        points = np.array([[0.0], [1.0], [2.0], [10.0]])
        result = LloydIterator().run(points, np.zeros(4, dtype=np.intp), n_clusters=3)

        assert result.state is IterationState.CONVERGED
        np.testing.assert_array_equal(result.labels, [2, 2, 0, 1])
        np.testing.assert_array_equal(result.centroids, [[2.0], [10.0], [0.5]])

    def test_duplicate_points_stop_after_one_round(self):
        """Test that a refill undone by distance ties does not loop until the cap."""
        points = np.array([[0.0], [0.0], [0.0], [5.0]])

        result = LloydIterator().run(points, np.array([0, 0, 0, 1]), n_clusters=3)

        assert result.state is IterationState.CONVERGED
        assert result.n_iter == 1
        np.testing.assert_array_equal(result.labels, [2, 0, 0, 1])
        np.testing.assert_array_equal(result.centroids, [[0.0], [5.0], [0.0]])
        assert np.all(result.stats.counts > 0)

    def test_reject_raises(self, colinear_points):
        """Test that the reject policy aborts the run."""
        iterator = LloydIterator(empty_cluster_policy=RejectEmptyClusters())
        with pytest.raises(EmptyClusterError):
            iterator.run(colinear_points, np.array([0, 1, 0, 2]), n_clusters=3)

    def test_reject_one_point_per_cluster(self):
        """Test that K=N with a non-empty start never triggers the reject policy."""
        points = np.random.default_rng(5).normal(size=(6, 2))
        iterator = LloydIterator(empty_cluster_policy=RejectEmptyClusters())

        result = iterator.run(points, np.arange(6), n_clusters=6)

        assert result.state is IterationState.CONVERGED
        np.testing.assert_array_equal(result.labels, np.arange(6))

    def test_allow_keeps_previous_centroid(self, colinear_points):
        """Test that an empty cluster keeps its last centroid."""
        result = LloydIterator(empty_cluster_policy=AllowEmptyClusters()).run(
            colinear_points, np.array([0, 1, 0, 2]), n_clusters=3
        )

        np.testing.assert_array_equal(result.labels, [1, 1, 2, 2])
        np.testing.assert_array_equal(result.centroids[0], [2.5])
        assert result.stats.counts[0] == 0


class TestLloydInputValidation:
    """Tests for label validation."""

    def test_label_out_of_range_raises(self, colinear_points):
        """Test that labels must lie in [0, K)."""
        with pytest.raises(InvalidArgumentError, match="Labels must lie"):
            LloydIterator().run(colinear_points, np.array([0, 1, 2, 3]), n_clusters=3)

    def test_label_count_mismatch_raises(self, colinear_points):
        """Test that there must be one label per point."""
        with pytest.raises(InvalidArgumentError, match="Expected 4 labels"):
            LloydIterator().run(colinear_points, np.array([0, 1]), n_clusters=2)

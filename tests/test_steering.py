"""Tests for the neighbor query and the three steering forces."""

import math

import numpy as np
import pytest

from boids import Flock
from boids.steering import normalize


RATE = 0.05
SQRT_HALF = math.sqrt(0.5)


class TestNormalize:

    def test_unit_vector(self):
        assert normalize(3.0, 4.0) == pytest.approx((0.6, 0.8))

    def test_zero_vector_is_zero(self):
        x, y = normalize(0.0, 0.0)
        assert (x, y) == (0.0, 0.0)
        assert not math.isnan(x) and not math.isnan(y)


class TestNeighbors:

    @pytest.fixture
    def flock(self, make_flock):
        positions = [(0.0, 0.0), (10.0, 0.0), (20.0, 0.0), (3.0, 4.0)]
        return make_flock(positions, np.zeros((4, 2)), bounds=(100.0, 100.0))

    def test_inclusive_boundary_in_index_order(self, flock):
        assert flock.neighbors((0.0, 0.0), 10.0).tolist() == [0, 1, 3]

    def test_includes_self_at_zero_radius(self, flock):
        assert flock.neighbors(flock.positions[2], 0.0).tolist() == [2]

    def test_arbitrary_center(self, flock):
        assert flock.neighbors((15.0, 0.0), 5.0).tolist() == [1, 2]
        assert flock.neighbors((50.0, 50.0), 1.0).tolist() == []

    def test_negative_radius_rejected(self, flock):
        with pytest.raises(ValueError):
            flock.neighbors((0.0, 0.0), -1.0)


class TestSeparation:

    def _cluster(self, make_flock, offsets):
        positions = [(150.0 + dx, 150.0 + dy) for dx, dy in offsets]
        # One far-away boid that must not join the cluster
        positions.append((20.0, 20.0))
        headings = np.tile([1.0, 0.0], (len(positions), 1))
        return make_flock(positions, headings, params={"separation_rate": RATE})

    def test_dense_cluster_pushes_away_from_centroid(self, make_flock):
        offsets = [(0, 0), (2, 0), (0, 2), (-2, 0), (0, -2), (1, 1), (-1, 1)]
        flock = self._cluster(make_flock, offsets)
        positions = flock.positions.copy()
        old = flock.headings.copy()

        flock.separate()

        centroid = positions[:7].mean(axis=0)
        for i in range(7):
            away = centroid - positions[i]
            away /= np.linalg.norm(away)
            np.testing.assert_allclose(flock.headings[i], old[i] - away * RATE)

        # Lone boid sits below the density threshold
        np.testing.assert_array_equal(flock.headings[7], old[7])

    def test_boid_on_centroid_gets_no_push(self, make_flock):
        offsets = [(0, 0), (3, 0), (-3, 0), (0, 3), (0, -3), (2, 2), (-2, -2)]
        flock = self._cluster(make_flock, offsets)

        flock.separate()

        np.testing.assert_array_equal(flock.headings[0], [1.0, 0.0])
        assert np.all(np.isfinite(flock.headings))

    @pytest.mark.parametrize("offsets, pushed", [
        ([(0, 0), (2, 0), (0, 2), (-2, 0), (0, -2)], False),
        ([(0, 0), (2, 0), (0, 2), (-2, 0), (0, -2), (1, 1)], True),
    ])
    def test_density_threshold_is_strict(self, make_flock, offsets, pushed):
        # Five boids per disc sits exactly on the configured maximum
        flock = self._cluster(make_flock, offsets)
        old = flock.headings.copy()

        flock.separate()

        change = np.abs(flock.headings - old).max()
        if pushed:
            assert change == pytest.approx(RATE, rel=0.05)
        else:
            assert change == 0.0

    def test_sparse_group_unchanged(self, make_flock):
        flock = self._cluster(make_flock, [(0, 0), (5, 0), (0, 5)])
        old = flock.headings.copy()

        flock.separate()

        np.testing.assert_array_equal(flock.headings, old)

    def test_positions_untouched(self, make_flock):
        flock = self._cluster(make_flock, [(0, 0), (2, 0), (0, 2), (-2, 0), (0, -2), (1, 1)])
        positions = flock.positions.copy()

        flock.separate()

        np.testing.assert_array_equal(flock.positions, positions)


class TestCohesion:

    def test_two_boids_pull_toward_midpoint(self, make_flock):
        flock = make_flock(
            [(0.0, 0.0), (10.0, 0.0)],
            [(1.0, 0.0), (1.0, 0.0)],
            bounds=(100.0, 100.0),
            params={"cohesion_range": 100.0, "cohesion_rate": 0.005},
        )

        flock.cohere()

        np.testing.assert_allclose(flock.headings[0], [1.005, 0.0])
        np.testing.assert_allclose(flock.headings[1], [0.995, 0.0])

    def test_reads_snapshot_not_own_output(self, make_flock):
        flock = make_flock([(0.0, 0.0), (10.0, 0.0)], [(1.0, 0.0), (1.0, 0.0)])
        front = flock.headings
        snapshot = front.copy()

        flock.cohere()

        np.testing.assert_array_equal(front, snapshot)
        assert flock.headings is not front


class TestAlignment:

    def test_both_boids_use_pre_stage_headings(self, make_flock):
        flock = make_flock(
            [(0.0, 0.0), (10.0, 0.0)],
            [(1.0, 0.0), (0.0, 1.0)],
            params={"alignment_range": 25.0, "alignment_rate": 0.1},
        )

        flock.align()

        np.testing.assert_allclose(
            flock.headings[0], [1.0 + (SQRT_HALF - 1.0) * 0.1, SQRT_HALF * 0.1]
        )
        np.testing.assert_allclose(
            flock.headings[1], [SQRT_HALF * 0.1, 1.0 + (SQRT_HALF - 1.0) * 0.1]
        )

    def test_opposite_headings_cancel(self, make_flock):
        flock = make_flock([(0.0, 0.0), (10.0, 0.0)], [(1.0, 0.0), (-1.0, 0.0)])

        flock.align()

        # Mean heading is zero, so each boid is pulled toward zero
        np.testing.assert_allclose(flock.headings[0], [0.9, 0.0])
        np.testing.assert_allclose(flock.headings[1], [-0.9, 0.0])
        assert np.all(np.isfinite(flock.headings))


class TestIsolatedBoid:
    """A boid alone in every disc gets no steering at all."""

    @pytest.fixture
    def flock(self, make_flock):
        positions = [(10.0, 10.0), (250.0, 10.0), (10.0, 250.0), (250.0, 250.0)]
        headings = [(1.0, 0.0), (0.0, -1.0), (-1.0, 0.0), (0.0, 1.0)]
        return make_flock(positions, headings, params={"max_density": 0.0})

    @pytest.mark.parametrize("stage", ["separate", "align", "cohere"])
    def test_no_delta(self, flock, stage):
        old = flock.headings.copy()

        getattr(flock, stage)()

        np.testing.assert_allclose(flock.headings, old)
        assert np.all(np.isfinite(flock.headings))


class TestTickOrder:

    def test_update_runs_stages_in_sequence(self):
        stepped = Flock(num_boids=60, bounds=(200.0, 150.0), rng=3)
        manual = Flock(num_boids=60, bounds=(200.0, 150.0), rng=3)

        stepped.update()
        manual.separate()
        manual.align()
        manual.cohere()
        manual.simulate()

        np.testing.assert_array_equal(stepped.positions, manual.positions)
        np.testing.assert_array_equal(stepped.headings, manual.headings)
        assert stepped.tick == 1

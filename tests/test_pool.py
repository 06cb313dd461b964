"""
Tests for AttractorPool and Attractor construction.
"""

import numpy as np
import pytest

from sca.attractor import Attractor, ConnectAction
from sca.pool import AttractorPool
from sca.vector import SqDist


def make_attractor(x, **kwargs):
    return Attractor.create((x, 0.0), attract_distance=0.5, connect_distance=0.1, **kwargs)


class TestAttractor:
    def test_connect_beyond_attract_rejected(self):
        with pytest.raises(ValueError):
            Attractor.create((0.0, 0.0), attract_distance=0.1, connect_distance=0.2)

    def test_equal_distances_allowed(self):
        a = Attractor.create((0.0, 0.0), attract_distance=0.1, connect_distance=0.1)
        assert a.connect_dist == a.attract_dist

    def test_defaults(self):
        a = make_attractor(0.0)
        assert a.strength == 1.0
        assert a.information is None
        assert a.connect_action.kills
        assert a.active_from_iteration == 0

    def test_is_active(self):
        a = make_attractor(0.0, active_from_iteration=3)
        assert not a.is_active(2)
        assert a.is_active(3)
        assert a.is_active(4)


class TestConnectAction:
    def test_kill(self):
        assert ConnectAction.kill().kills
        assert repr(ConnectAction.kill()) == "KillAttractor"

    def test_disable_for(self):
        action = ConnectAction.disable_for(7)
        assert not action.kills
        assert action.disable_iterations == 7
        assert repr(action) == "DisableFor(7)"

    def test_disable_for_zero_rejected(self):
        with pytest.raises(ValueError):
            ConnectAction.disable_for(0)


class TestSqDist:
    def test_from_dist(self):
        assert SqDist.from_dist(0.5).value == pytest.approx(0.25)
        assert SqDist.from_dist(0.5).dist == pytest.approx(0.5)

    def test_ordering(self):
        assert SqDist.from_dist(0.1) < SqDist.from_dist(0.2)

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            SqDist(-1.0)


class TestAttractorPool:
    def test_remove_unordered_swaps_last_in(self):
        pool = AttractorPool()
        attractors = [make_attractor(float(i)) for i in range(4)]
        for a in attractors:
            pool.insert(a)

        removed = pool.remove_unordered(1)

        assert removed is attractors[1]
        assert len(pool) == 3
        assert pool[1] is attractors[3]
        assert list(pool) == [attractors[0], attractors[3], attractors[2]]

    def test_remove_last(self):
        pool = AttractorPool()
        a, b = make_attractor(0.0), make_attractor(1.0)
        pool.insert(a)
        pool.insert(b)
        pool.remove_unordered(1)
        assert list(pool) == [a]

    def test_remove_out_of_range(self):
        pool = AttractorPool()
        pool.insert(make_attractor(0.0))
        with pytest.raises(IndexError):
            pool.remove_unordered(1)

    @pytest.mark.parametrize("index", [-1, 1])
    def test_bad_index_rejected(self, index):
        pool = AttractorPool()
        pool.insert(make_attractor(0.0))
        with pytest.raises(IndexError):
            pool.disable_until(index, 5)
        with pytest.raises(IndexError):
            pool[index]
        with pytest.raises(IndexError):
            pool.remove_unordered(index)
        assert pool[0].active_from_iteration == 0

    def test_disable_until(self):
        pool = AttractorPool()
        pool.insert(make_attractor(0.0))
        pool.disable_until(0, 12)
        assert pool[0].active_from_iteration == 12
        assert len(pool) == 1

    def test_iter_positions(self):
        pool = AttractorPool()
        pool.insert(make_attractor(0.25))
        positions = list(pool.iter_positions())
        assert len(positions) == 1
        assert np.allclose(positions[0], (0.25, 0.0))

import numpy as np
import pytest

from map_rng import MapRNG


def test_same_seed_same_sequence():
    a = MapRNG(seed=123)
    b = MapRNG(seed=123)
    assert [a.get_int(0, 100) for _ in range(10)] == [b.get_int(0, 100) for _ in range(10)]


def test_get_int_is_inclusive():
    rng = MapRNG(seed=5)
    values = {rng.get_int(1, 3) for _ in range(200)}
    assert values == {1, 2, 3}
    with pytest.raises(ValueError):
        rng.get_int(3, 1)


def test_negative_seed_rejected():
    with pytest.raises(ValueError):
        MapRNG(seed=-1)


def test_get_float_grid_layout():
    grid = MapRNG(seed=2).get_float_grid(7, 3)
    assert grid.shape == (3, 7)
    assert ((grid >= 0.0) & (grid < 1.0)).all()


def test_get_point_stays_in_bounds():
    rng = MapRNG(seed=9)
    for _ in range(100):
        x, y = rng.get_point(4, 2)
        assert 0 <= x < 4 and 0 <= y < 2


def test_sample_without_replacement_keeps_tuples():
    items = [(0, 1), (2, 3), (4, 5), (6, 7)]
    picked = MapRNG(seed=1).sample(items, 3)
    assert len(set(picked)) == 3
    assert all(isinstance(p, tuple) and p in items for p in picked)
    assert MapRNG(seed=1).sample(items, 0) == []
    with pytest.raises(ValueError):
        MapRNG(seed=1).sample(items, 5)


def test_seed_is_required_integer():
    with pytest.raises(TypeError):
        MapRNG()
    with pytest.raises(TypeError):
        MapRNG(seed=None)
    with pytest.raises(TypeError):
        MapRNG(seed=1.5)
    assert MapRNG(seed=np.int64(3)).initial_seed == 3

import numpy as np

from fishery.ecosystem.perception import find_move, neighborhood_window
from fishery.ecosystem.tests.fixtures.scenario_fixture import FixedRandom, make_registry


def _fill_except(registry, free=()):
    grid = registry.grid
    for x in range(grid.size_x):
        for y in range(grid.size_y):
            if (x, y) not in free and grid.is_vacant(x, y):
                registry.add(x, y)


def test_window_is_clipped_to_grid():
    xs, ys = neighborhood_window(0, 4, 1, 3, 5)
    assert (xs.start, xs.stop, ys.start, ys.stop) == (0, 2, 3, 5)


def test_surrounded_returns_none_regardless_of_vegetation():
    registry = make_registry(np.full((3, 3), 5))
    _fill_except(registry)
    rng = np.random.default_rng(0)
    assert find_move((1, 1), 1, registry.grid, rng) is None


def test_only_vacant_neighbor_is_chosen():
    registry = make_registry(np.zeros((3, 3)))
    _fill_except(registry, free=[(2, 2)])
    rng = np.random.default_rng(0)
    for _ in range(5):
        assert find_move((1, 1), 1, registry.grid, rng) == (2, 2)


def test_vegetated_vacant_tiles_are_preferred():
    veg = np.zeros((3, 3))
    veg[0, 2] = 2
    veg[2, 0] = 1   # level 1 does not count as vegetated
    registry = make_registry(veg)
    rng = np.random.default_rng(3)
    for _ in range(10):
        assert find_move((1, 1), 1, registry.grid, rng) == (0, 2)


def test_pick_follows_storage_order():
    registry = make_registry(np.zeros((3, 3)))
    assert find_move((1, 1), 1, registry.grid, FixedRandom(pick=0)) == (0, 0)
    assert find_move((1, 1), 1, registry.grid, FixedRandom(pick=7)) == (2, 2)
    # centre excluded: candidate 4 is (1, 2)
    assert find_move((1, 1), 1, registry.grid, FixedRandom(pick=4)) == (1, 2)


def test_out_of_bounds_and_lone_tile():
    registry = make_registry(np.zeros((1, 1)))
    rng = np.random.default_rng(0)
    assert find_move((0, 0), 1, registry.grid, rng) is None
    assert find_move((5, 0), 1, registry.grid, rng) is None
    assert find_move((0, 0), -1, registry.grid, rng) is None


def test_larger_radius_reaches_further():
    registry = make_registry(np.zeros((5, 1)))
    _fill_except(registry, free=[(4, 0)])
    rng = np.random.default_rng(0)
    assert find_move((1, 0), 1, registry.grid, rng) is None
    assert find_move((1, 0), 3, registry.grid, rng) == (4, 0)

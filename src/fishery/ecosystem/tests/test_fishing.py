import numpy as np

from fishery.ecosystem.fishing import fishing_event
from fishery.ecosystem.config import VACANT
from fishery.ecosystem.tests.fixtures.scenario_fixture import FixedRandom, make_registry, make_settings


def test_certain_catch_removes_one_level():
    reg = make_registry(np.zeros((10, 10)), pools=[(4, 4, 3, 0)])
    caught = fishing_event(reg, make_settings(fishing_chance=1.0), np.random.default_rng(0))
    assert caught == 1
    assert reg.get(0).pop_level == 2


def test_fished_out_pools_are_removed():
    reg = make_registry(np.zeros((3, 1)), pools=[(x, 0, 1, 0) for x in range(3)])
    caught = fishing_event(reg, make_settings(fishing_chance=1.0), np.random.default_rng(0))
    assert caught == 3
    assert len(reg) == 0
    assert (reg.grid.occupant == VACANT).all()


def test_zero_chance_catches_nothing():
    reg = make_registry(np.zeros((2, 2)), pools=[(0, 0, 2, 0), (1, 1, 1, 0)])
    assert fishing_event(reg, make_settings(fishing_chance=0.0), np.random.default_rng(0)) == 0
    assert reg.total_population() == 3


def test_each_pool_draws_independently():
    reg = make_registry(np.zeros((3, 1)), pools=[(0, 0, 2, 0), (1, 0, 2, 0), (2, 0, 1, 0)])
    caught = fishing_event(reg, make_settings(fishing_chance=0.5), FixedRandom(draws=[0.1, 0.9, 0.1]))
    assert caught == 2
    assert [p.pop_level for p in reg] == [1, 2]
    assert reg.is_consistent()

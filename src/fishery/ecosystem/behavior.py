"""Per-step fish pool behaviour: foraging, growth, splitting, starvation, spawning.

`update_fish_population` walks the pools alive at the start of the step.
Pools created during the step (splits, the random spawn) are registered right
away so the grid stays consistent, but they are outside the walked snapshot
and first act on the following step.
"""
import logging
from typing import Dict, Optional

import numpy as np

from fishery.ecosystem.agents import FishPool, FishPoolRegistry
from fishery.ecosystem.geometry import position_from_internal
from fishery.ecosystem.perception import find_move

logger = logging.getLogger(__name__)

# movement and splitting both look one tile away
MOVE_RADIUS = 1
SPLIT_RADIUS = 1


def food_target(pool: FishPool, settings) -> int:
    """Food level at which a pool stops foraging."""
    return settings.fish_consumption[pool.pop_level] * 2 + settings.fish_growth_req


def forage(pool: FishPool, registry: FishPoolRegistry, settings, rng: np.random.Generator) -> int:
    """Move and eat until fed, out of moves, or stuck. Returns the number of moves made."""
    grid = registry.grid
    moves = 0
    for _ in range(settings.fish_moves_turn):
        if pool.food_level >= food_target(pool, settings):
            break
        if grid.vegetation[pool.x, pool.y] == 0:
            dest = find_move(pool.position, MOVE_RADIUS, grid, rng)
            if dest is None:
                break
            registry.move(pool.handle, *dest)
            moves += 1
        available = int(grid.vegetation[pool.x, pool.y])
        if available > 0:
            appetite = food_target(pool, settings) - pool.food_level
            consumed = min(appetite, available)
            pool.food_level += consumed
            grid.vegetation[pool.x, pool.y] -= consumed
    return moves


def settle_pool(pool: FishPool, registry: FishPoolRegistry, settings, rng: np.random.Generator) -> str:
    """Apply the end-of-turn growth, split or upkeep rule to one pool.

    Returns one of ``'grew'``, ``'split'``, ``'fed'``, ``'starved'`` or
    ``'died'``. A pool that dies is removed from the registry here.
    """
    consumption = settings.fish_consumption
    growth_req = settings.fish_growth_req

    if pool.food_level >= growth_req + consumption[pool.pop_level]:
        if pool.pop_level < settings.fish_level_max:
            while (pool.food_level >= growth_req + consumption[pool.pop_level]
                   and pool.pop_level < settings.fish_level_max):
                pool.pop_level += 1
                pool.food_level -= growth_req + consumption[pool.pop_level]
            return 'grew'
        dest = find_move(pool.position, SPLIT_RADIUS, registry.grid, rng)
        if dest is not None and settings.split_enabled:
            pool.food_level -= growth_req + consumption[pool.pop_level]
            registry.add(*dest)
            return 'split'
        pool.food_level -= consumption[pool.pop_level]
        return 'fed'

    pool.food_level -= consumption[pool.pop_level]
    if pool.food_level >= 0:
        return 'fed'
    pool.pop_level -= 1
    pool.food_level = 0
    if pool.pop_level <= 0:
        registry.remove(pool.handle)
        return 'died'
    return 'starved'


def spawn_random_pool(registry: FishPoolRegistry, settings, rng: np.random.Generator) -> Optional[FishPool]:
    """With probability ``random_fishes_interval / 100`` add a level-1 pool on a random vacant tile."""
    if not settings.random_fishes_interval:
        return None
    if rng.random() >= settings.spawn_probability:
        return None
    vacant = registry.grid.vacant_indices()
    if vacant.size == 0:
        return None
    index = int(vacant[rng.integers(vacant.size)])
    x, y = position_from_internal(index, registry.grid.size_y)
    return registry.add(x, y)


def update_fish_population(registry: FishPoolRegistry, settings, rng: np.random.Generator) -> Dict[str, int]:
    """Run one fish step over every pool alive at the start of the call.

    Returns counts of moves and of each settle outcome, plus ``'spawned'``.
    """
    counts = {'moves': 0, 'grew': 0, 'split': 0, 'fed': 0, 'starved': 0, 'died': 0, 'spawned': 0}
    for handle in registry.handles():
        if handle not in registry:
            continue
        pool = registry.get(handle)
        counts['moves'] += forage(pool, registry, settings, rng)
        counts[settle_pool(pool, registry, settings, rng)] += 1
    if spawn_random_pool(registry, settings, rng) is not None:
        counts['spawned'] = 1
    logger.debug('fish step: %s, %d pools alive', counts, len(registry))
    return counts

"""Harvest pass: each pool independently loses one population level with probability ``fishing_chance``."""
import logging

import numpy as np

from fishery.ecosystem.agents import FishPoolRegistry

logger = logging.getLogger(__name__)


def fishing_event(registry: FishPoolRegistry, settings, rng: np.random.Generator) -> int:
    """Fish every pool alive when the pass starts and return the step's yield.

    Pools whose level reaches zero are removed from the registry and grid.
    """
    chance = settings.fishing_chance
    caught = 0
    for handle in registry.handles():
        if rng.random() >= chance:
            continue
        pool = registry.get(handle)
        pool.pop_level -= 1
        caught += 1
        if pool.pop_level <= 0:
            registry.remove(handle)
    logger.debug('fishing: yield %d, %d pools left', caught, len(registry))
    return caught

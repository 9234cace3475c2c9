"""Tile grid and the per-step vegetation/soil rule.

The grid is three dense ``(size_x, size_y)`` integer layers: vegetation level,
soil energy and occupant handle (``config.VACANT`` when empty). The occupant
layer is a back-reference into `FishPoolRegistry`; only the registry writes it.
"""
import logging

import numpy as np
from scipy.ndimage import binary_dilation

from fishery.ecosystem.config import VACANT
from fishery.ecosystem.geometry import in_bounds, to_external_order

logger = logging.getLogger(__name__)

# 8-connected neighbourhood plus the centre tile
_SPREAD_FOOTPRINT = np.ones((3, 3), dtype=bool)


class TileGrid:
    """Dense grid of tiles indexed ``[x, y]``."""

    def __init__(self, size_x: int, size_y: int, soil_energy: int = 0):
        shape = (int(size_x), int(size_y))
        self.vegetation = np.zeros(shape, dtype=np.int64)
        self.soil = np.full(shape, int(soil_energy), dtype=np.int64)
        self.occupant = np.full(shape, VACANT, dtype=np.int64)

    @classmethod
    def from_settings(cls, settings) -> 'TileGrid':
        # every tile starts with one turn's worth of soil energy
        return cls(settings.size_x, settings.size_y, settings.soil_energy_increase_turn)

    @property
    def size_x(self) -> int:
        return self.vegetation.shape[0]

    @property
    def size_y(self) -> int:
        return self.vegetation.shape[1]

    @property
    def area(self) -> int:
        return self.vegetation.size

    def in_bounds(self, x, y) -> bool:
        return in_bounds(x, y, self.size_x, self.size_y)

    def is_vacant(self, x, y) -> bool:
        return self.occupant[x, y] == VACANT

    def vacant_indices(self) -> np.ndarray:
        """Internal flat indices of all unoccupied tiles, in storage order."""
        return np.flatnonzero(self.occupant.ravel() == VACANT)

    def seed_vegetation(self, rng: np.random.Generator, count: int) -> np.ndarray:
        """Set ``count`` distinct random tiles to vegetation level 1.

        Returns the internal indices that were seeded.
        """
        picks = rng.choice(self.area, size=int(count), replace=False)
        self.vegetation.ravel()[picks] = 1
        return picks

    def total_vegetation(self) -> int:
        return int(self.vegetation.sum())

    def vegetation_snapshot(self) -> list:
        """Vegetation levels as a flat list in external (row-major) order."""
        return to_external_order(self.vegetation).tolist()


def update_vegetation(grid: TileGrid, settings) -> np.ndarray:
    """Advance vegetation and soil one step.

    Every decision reads the levels as they were at the start of the call, so
    growth on one tile never feeds spread on another in the same step.
    Returns the applied delta layer.
    """
    level = grid.vegetation.copy()
    soil = grid.soil
    delta = np.zeros_like(level)

    vegetated = level > 0
    growth_cost = level + settings.vegetation_level_growth_req
    grows = vegetated & (growth_cost <= soil)
    delta[grows] = 1
    soil[grows] -= growth_cost[grows]

    upkeep = vegetated & ~grows
    table = np.asarray(settings.vegetation_consumption, dtype=np.int64)
    soil[upkeep] -= table[level[upkeep]]
    delta[upkeep & (soil < 0)] = -1

    spreaders = level >= settings.vegetation_level_spread_at
    if spreaders.any():
        # tiles outside the grid count as non-spreaders (border_value=0)
        seeded = binary_dilation(spreaders, structure=_SPREAD_FOOTPRINT) & (level == 0)
        delta[seeded] = 1

    np.clip(level + delta, 0, settings.vegetation_level_max, out=grid.vegetation)
    np.clip(soil + settings.soil_energy_increase_turn, 0, settings.soil_energy_max, out=grid.soil)
    logger.debug('vegetation step: %d grew, %d decayed, total %d',
                 int((delta > 0).sum()), int((delta < 0).sum()), grid.total_vegetation())
    return delta

"""Fish pools and the registry that owns them.

A pool is the whole fish population resident on one tile. The registry is the
only owner; the grid's occupant layer stores pool handles as back-references.
Handles are issued from a counter and never reused, so a stale handle can be
detected instead of silently pointing at a newer pool.

Every mutating method leaves the occupancy invariant intact: each occupied
tile names exactly one live pool at that position, and each live pool's tile
names it back.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple

from fishery.ecosystem.config import VACANT

logger = logging.getLogger(__name__)


@dataclass
class FishPool:
    handle: int
    x: int
    y: int
    pop_level: int = 1
    food_level: int = 0

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y


class FishPoolRegistry:
    """Insertion-ordered collection of live pools bound to a `TileGrid`."""

    def __init__(self, grid):
        self.grid = grid
        self._pools: Dict[int, FishPool] = {}
        self._next_handle = 0

    def __len__(self) -> int:
        return len(self._pools)

    def __iter__(self) -> Iterator[FishPool]:
        return iter(list(self._pools.values()))

    def __contains__(self, handle) -> bool:
        return handle in self._pools

    def get(self, handle: int) -> FishPool:
        return self._pools[handle]

    def handles(self) -> List[int]:
        """Snapshot of live handles in registry order."""
        return list(self._pools)

    def total_population(self) -> int:
        return sum(p.pop_level for p in self._pools.values())

    def pool_at(self, x, y):
        handle = int(self.grid.occupant[x, y])
        if handle == VACANT:
            return None
        return self._pools[handle]

    def add(self, x: int, y: int, pop_level: int = 1, food_level: int = 0) -> FishPool:
        """Create a pool on a vacant in-bounds tile and mark the tile."""
        if not self.grid.in_bounds(x, y):
            raise IndexError(f'position ({x}, {y}) outside grid')
        if not self.grid.is_vacant(x, y):
            raise ValueError(f'tile ({x}, {y}) already holds pool {int(self.grid.occupant[x, y])}')
        pool = FishPool(self._next_handle, int(x), int(y), int(pop_level), int(food_level))
        self._next_handle += 1
        self._pools[pool.handle] = pool
        self.grid.occupant[pool.x, pool.y] = pool.handle
        return pool

    def remove(self, handle: int) -> FishPool:
        """Drop a pool and clear its tile. Unknown handles raise ``KeyError``."""
        pool = self._pools.pop(handle)
        self.grid.occupant[pool.x, pool.y] = VACANT
        return pool

    def move(self, handle: int, x: int, y: int) -> FishPool:
        """Relocate a pool to a vacant tile, updating both tiles."""
        pool = self._pools[handle]
        if not self.grid.in_bounds(x, y):
            raise IndexError(f'position ({x}, {y}) outside grid')
        if not self.grid.is_vacant(x, y):
            raise ValueError(f'tile ({x}, {y}) already holds pool {int(self.grid.occupant[x, y])}')
        self.grid.occupant[pool.x, pool.y] = VACANT
        pool.x, pool.y = int(x), int(y)
        self.grid.occupant[pool.x, pool.y] = handle
        return pool

    def find_inconsistencies(self) -> List[str]:
        """Describe every place where grid occupancy and registry disagree."""
        problems = []
        for pool in self._pools.values():
            if not self.grid.in_bounds(pool.x, pool.y):
                problems.append(f'pool {pool.handle} outside grid at {pool.position}')
                continue
            at_tile = int(self.grid.occupant[pool.x, pool.y])
            if at_tile != pool.handle:
                problems.append(f'pool {pool.handle} at {pool.position} but tile holds {at_tile}')
        occupied = self.grid.occupant != VACANT
        n_occupied = int(occupied.sum())
        if n_occupied != len(self._pools):
            problems.append(f'{n_occupied} occupied tiles for {len(self._pools)} pools')
        for x, y in zip(*occupied.nonzero()):
            handle = int(self.grid.occupant[x, y])
            pool = self._pools.get(handle)
            if pool is None or pool.position != (x, y):
                problems.append(f'tile ({x}, {y}) names stale pool {handle}')
        return problems

    def is_consistent(self) -> bool:
        problems = self.find_inconsistencies()
        for msg in problems:
            logger.warning('Fish memory doesn\'t match: %s', msg)
        return not problems

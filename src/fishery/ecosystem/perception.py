"""Neighbour search used for pool movement and splitting.

`find_move` is the only way the engine discovers a legal destination tile.
"""
from typing import Optional, Tuple
import numpy as np

from fishery.ecosystem.config import VACANT

# a vacant tile "has food worth moving to" above this level
_VEGETATED_ABOVE = 1


def neighborhood_window(x: int, y: int, radius: int, size_x: int, size_y: int) -> Tuple[slice, slice]:
    """Return ``(xs, ys)`` slices of the square window clipped to the grid."""
    x0 = max(0, x - radius)
    y0 = max(0, y - radius)
    x1 = min(size_x - 1, x + radius)
    y1 = min(size_y - 1, y + radius)
    return slice(x0, x1 + 1), slice(y0, y1 + 1)


def find_move(position, radius: int, grid, rng: np.random.Generator) -> Optional[Tuple[int, int]]:
    """Pick a vacant tile within ``radius`` of ``position`` (Chebyshev distance).

    Vacant tiles with vegetation level above 1 are preferred; otherwise any
    vacant tile is taken. The pick is uniform within the chosen class, with
    candidates enumerated in storage order. Returns ``None`` when the position
    is outside the grid or no vacant tile exists in the window.
    """
    x, y = int(position[0]), int(position[1])
    if radius < 0 or not grid.in_bounds(x, y):
        return None
    xs, ys = neighborhood_window(x, y, radius, grid.size_x, grid.size_y)

    vacant = grid.occupant[xs, ys] == VACANT
    vacant[x - xs.start, y - ys.start] = False
    if not vacant.any():
        return None
    vegetated = vacant & (grid.vegetation[xs, ys] > _VEGETATED_ABOVE)

    candidates = np.flatnonzero(vegetated) if vegetated.any() else np.flatnonzero(vacant)
    pick = int(candidates[rng.integers(candidates.size)])
    dx, dy = np.unravel_index(pick, vacant.shape)
    return xs.start + int(dx), ys.start + int(dy)

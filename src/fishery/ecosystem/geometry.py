"""
geometry.py

Grid index helpers. The engine stores tiles column-major: arrays are shaped
``(size_x, size_y)`` so the flat internal index of ``(x, y)`` is
``y + x*size_y``. Callers outside the engine use row-major indices
``x + y*size_x``. All translation between the two goes through
`internal_to_external` / `external_to_internal`.

Public functions:
- `in_bounds(x, y, size_x, size_y)` -> bool
- `internal_index(x, y, size_y)` / `position_from_internal(index, size_y)`
- `internal_to_external(index, size_x, size_y)` -> index
- `external_to_internal(index, size_x, size_y)` -> index
- `to_external_order(layer)` -> flat array in external order

"""
from typing import Tuple
import numpy as np


def in_bounds(x, y, size_x: int, size_y: int) -> bool:
    return 0 <= x < size_x and 0 <= y < size_y


def internal_index(x, y, size_y: int):
    """Flat column-major index of ``(x, y)``. Works on scalars or arrays."""
    return y + x * size_y


def position_from_internal(index, size_y: int) -> Tuple:
    """Inverse of `internal_index`: returns ``(x, y)``."""
    return index // size_y, index % size_y


def internal_to_external(index, size_x: int, size_y: int):
    """Map an internal (``y + x*size_y``) index to the external (``x + y*size_x``) one.

    Accepts scalars or integer arrays; returns the same kind.
    """
    x, y = position_from_internal(index, size_y)
    return x + y * size_x


def external_to_internal(index, size_x: int, size_y: int):
    """Map an external (``x + y*size_x``) index back to the internal one."""
    x = index % size_x
    y = index // size_x
    return internal_index(x, y, size_y)


def to_external_order(layer: np.ndarray) -> np.ndarray:
    """Flatten a ``(size_x, size_y)`` layer into external index order."""
    layer = np.asarray(layer)
    if layer.ndim != 2:
        raise ValueError('layer must be a 2-D (size_x, size_y) array')
    size_x, size_y = layer.shape
    flat = layer.ravel()   # C order == internal order
    out = np.empty_like(flat)
    out[internal_to_external(np.arange(flat.size), size_x, size_y)] = flat
    return out

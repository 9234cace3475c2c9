import numpy as np
import pytest

from fishery.ecosystem.geometry import (external_to_internal, in_bounds, internal_index,
                                        internal_to_external, position_from_internal, to_external_order)


def test_internal_index_is_column_major():
    assert internal_index(2, 1, size_y=3) == 7
    assert position_from_internal(7, size_y=3) == (2, 1)


def test_internal_to_external():
    # (x=2, y=1) on a 4x3 grid
    assert internal_to_external(7, size_x=4, size_y=3) == 6
    assert external_to_internal(6, size_x=4, size_y=3) == 7


def test_conversion_is_a_bijection():
    size_x, size_y = 5, 3
    idx = np.arange(size_x * size_y)
    ext = internal_to_external(idx, size_x, size_y)
    assert sorted(ext.tolist()) == idx.tolist()
    assert np.array_equal(external_to_internal(ext, size_x, size_y), idx)


def test_to_external_order_is_row_major():
    layer = np.array([[0, 1], [10, 11], [20, 21]])   # size_x=3, size_y=2
    assert to_external_order(layer).tolist() == [0, 10, 20, 1, 11, 21]
    with pytest.raises(ValueError):
        to_external_order(np.arange(4))


def test_in_bounds():
    assert in_bounds(0, 0, 2, 2)
    assert not in_bounds(2, 0, 2, 2)
    assert not in_bounds(0, -1, 2, 2)

# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import itertools

import pytest

from stridetensor import Tensor
from stridetensor.indexing import (
    compute_strides,
    dim_index,
    dim_offset,
    index_of,
    indices_of,
)


@pytest.mark.parametrize(
    "shape, strides, size",
    [
        ((5,), (1,), 5),
        ((2, 3), (3, 1), 6),
        ((2, 3, 4), (12, 4, 1), 24),
        ((1, 1, 1), (1, 1, 1), 1),
        ((3, 0), (0, 1), 0),
    ],
)
def test_compute_strides(shape, strides, size):
    assert compute_strides(shape) == (strides, size)


def test_indices_of_and_index_of():
    assert indices_of(5, (3, 1)) == (1, 2)
    assert index_of((1, 2), (3, 1)) == 5
    assert indices_of(23, (12, 4, 1)) == (1, 2, 3)
    assert index_of((1, 2, 3), (12, 4, 1)) == 23


@pytest.mark.parametrize("shape", [(4,), (2, 3), (2, 3, 4), (1, 5, 1), (3, 1, 2, 2)])
def test_round_trip(shape):
    strides, size = compute_strides(shape)
    for linear in range(size):
        assert index_of(indices_of(linear, strides), strides) == linear
    for coords in itertools.product(*(range(extent) for extent in shape)):
        assert indices_of(index_of(coords, strides), strides) == coords


def test_single_element_dimensions():
    strides, size = compute_strides((1, 1, 1))
    assert size == 1
    assert indices_of(0, strides) == (0, 0, 0)
    assert index_of((0, 0, 0), strides) == 0


def test_zero_stride_does_not_divide():
    assert indices_of(0, (0, 1)) == (0, 0)


def test_dim_offset():
    # shape (2, 3): slices along dim 0 start at the column, along dim 1 at each row
    assert [dim_offset(n, 2, 3, 6) for n in range(3)] == [0, 1, 2]
    assert [dim_offset(n, 3, 1, 6) for n in range(2)] == [0, 3]
    # shape (2, 3, 2) along dim 1
    assert [dim_offset(n, 3, 2, 12) for n in range(4)] == [0, 1, 6, 7]


def test_dim_offset_wraps_into_native_buffer():
    # logical (4, 3) over a native buffer of 3 values
    assert [dim_offset(n, 3, 1, 3) for n in range(4)] == [0, 0, 0, 0]
    assert [dim_offset(n, 4, 3, 3) for n in range(3)] == [0, 1, 2]


def test_dim_index():
    # shape (2, 3) along dim 1: every element of row r belongs to slice r
    assert [dim_index(i, 3, 1, 6) for i in range(6)] == [0, 0, 0, 1, 1, 1]
    # along dim 0: element (r, c) belongs to slice c
    assert [dim_index(i, 2, 3, 6) for i in range(6)] == [0, 1, 2, 0, 1, 2]
    # indices past the logical size wrap first
    assert dim_index(7, 3, 1, 6) == dim_index(1, 3, 1, 6)


def test_tensor_index_helpers_use_current_strides():
    t = Tensor([1, 3], [1.0, 2.0, 3.0])
    assert t.get_indices(2) == (0, 2)
    assert t.get_index((0, 2)) == 2

    t.expand(4, 3)
    assert t.get_indices(7) == (2, 1)
    assert t.get_index((2, 1)) == 7
    assert t.dim_offset(1, 0) == 1
    assert t.dim_offset(2, 1) == 0
    assert t.dim_index(7, 1) == 2

    t.unexpand()
    assert t.get_indices(2) == (0, 2)

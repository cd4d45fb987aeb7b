# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np

from stridetensor import Tensor


def test_nested_arrays_2d():
    t = Tensor([2, 3], [1, 2, 3, 4, 5, 6])
    assert t.to_nested_arrays() == [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]


def test_nested_arrays_1d():
    assert Tensor([3], [1, 2, 3]).to_nested_arrays() == [1.0, 2.0, 3.0]


def test_nested_arrays_3d_matches_numpy():
    arr = np.arange(12, dtype=np.float64).reshape(2, 1, 3, 2)[:, 0]
    t = Tensor(arr.shape, arr)
    assert t.to_nested_arrays() == arr.tolist()


def test_nested_arrays_unit_dimensions():
    assert Tensor([1, 1], [7]).to_nested_arrays() == [[7.0]]


def test_nested_arrays_follow_broadcast_view():
    t = Tensor([1, 3], [1, 2, 3])
    t.expand(2, 3)
    assert t.to_nested_arrays() == [[1.0, 2.0, 3.0], [1.0, 2.0, 3.0]]
    assert t.tolist() == t.to_nested_arrays()

    t.unexpand()
    assert t.to_nested_arrays() == [[1.0, 2.0, 3.0]]


def test_nested_arrays_empty():
    assert Tensor([0], []).to_nested_arrays() == []


def test_repr_of_broadcast_view():
    t = Tensor([1, 2], [1, 2])
    t.expand(2, 2)
    assert repr(t) == (
        "Tensor([[1.0, 2.0], [1.0, 2.0]], shape=(2, 2), dtype='float32', "
        "expanded_from=(1, 2))"
    )

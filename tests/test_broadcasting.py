# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest

from stridetensor import Tensor


@pytest.mark.parametrize(
    "native, target",
    [
        ((1, 3), (4, 3)),
        ((3,), (2, 3)),
        ((1,), (5,)),
        ((1, 1), (2, 2)),
        ((2, 3), (4, 2, 3)),
        ((1, 2, 2), (3, 2, 2)),
    ],
)
def test_repeat_broadcast_matches_numpy(native, target):
    arr = np.arange(1, int(np.prod(native)) + 1, dtype=np.float32).reshape(native)
    t = Tensor(native, arr)
    t.expand(target)
    expected = np.broadcast_to(arr, target)
    np.testing.assert_array_equal(t.numpy(), expected)
    assert t.to_nested_arrays() == expected.tolist()
    assert t.sum().item() == pytest.approx(float(expected.sum()))


def test_broadcast_rows_repeat_identically():
    t = Tensor([1, 3], [1, 2, 3])
    t.expand(4, 3)
    rows = {}
    t.for_each_dim(1, lambda value, index, row, n: rows.setdefault(row, []).append(float(value)))
    assert list(rows.values()) == [[1.0, 2.0, 3.0]] * 4


def test_broadcast_dim_reductions_match_numpy():
    arr = np.array([[1.0, 2.0, 3.0]], dtype=np.float64)
    t = Tensor(arr.shape, arr)
    t.expand(5, 3)
    expected = np.broadcast_to(arr, (5, 3))
    for dim in (0, 1):
        np.testing.assert_allclose(t.sum(dim=dim).numpy(), expected.sum(axis=dim))
        np.testing.assert_allclose(
            t.mean(dim=dim, keepdim=True).numpy(), expected.mean(axis=dim, keepdims=True)
        )


def test_broadcast_numpy_result_is_independent_copy():
    t = Tensor([1, 2], [1, 2])
    t.expand(3, 2)
    out = t.numpy()
    out[0, 0] = 99.0
    assert t.tolist() == [[1.0, 2.0]] * 3

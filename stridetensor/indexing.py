# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Index arithmetic shared by tensor layouts.

Strides are row-major: the last dimension has stride 1 and each outer
dimension skips over a full block of the dimensions inside it. Every helper
works on plain Python integers with floor division and modulo, so results are
exact for any extent.
"""

from __future__ import annotations

from typing import Sequence, Tuple


def compute_strides(shape: Sequence[int]) -> Tuple[Tuple[int, ...], int]:
    """Return the row-major strides of ``shape`` and its element count."""

    strides = [0] * len(shape)
    stride = 1
    for i in range(len(shape) - 1, -1, -1):
        strides[i] = stride
        stride *= shape[i]
    return tuple(strides), stride


def indices_of(index: int, strides: Sequence[int]) -> Tuple[int, ...]:
    """Decompose a linear ``index`` into one coordinate per dimension.

    Dimensions are visited outermost first; each takes as many whole strides
    as fit in what remains of the index. Inverse of :func:`index_of` for
    in-range coordinates.
    """

    ticks = []
    remaining = index
    for stride in strides:
        tick = remaining // stride if stride else 0
        remaining -= tick * stride
        ticks.append(tick)
    return tuple(ticks)


def index_of(indices: Sequence[int], strides: Sequence[int]) -> int:
    """Collapse per-dimension coordinates into a linear index."""

    index = 0
    for i in range(len(strides) - 1, -1, -1):
        index += indices[i] * strides[i]
    return index


def dim_offset(n: int, extent: int, stride: int, native_size: int) -> int:
    """Storage offset of the first element of the ``n``-th slice along a dimension.

    ``n`` enumerates every combination of the other coordinates. The inner
    coordinates contribute ``n % stride``; the outer ones skip whole blocks of
    ``extent * stride``. Offsets past the native buffer wrap around, which is
    how broadcast views repeat their storage.
    """

    return (extent * stride * (n // stride) + n % stride) % native_size


def dim_index(i: int, extent: int, stride: int, size: int) -> int:
    """Map a logical flat index to its slice number along a dimension."""

    i %= size
    return stride * (i // (extent * stride)) + i % stride


__all__ = [
    "compute_strides",
    "indices_of",
    "index_of",
    "dim_offset",
    "dim_index",
]

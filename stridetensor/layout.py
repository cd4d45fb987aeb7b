# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Layouts describe how a flat buffer is addressed.

A tensor is always in exactly one of two states:

* :class:`PlainLayout` - the buffer read under the shape it was built with.
* :class:`BroadcastLayout` - the same buffer read under a larger logical shape,
  repeating size-1 dimensions without copying.

Both are frozen, so switching between them is a single reference swap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

from .errors import IncompatibleExpand, InvalidExpandSize, InvalidShape
from .indexing import compute_strides


@dataclass(frozen=True)
class Layout:
    shape: Tuple[int, ...]
    strides: Tuple[int, ...]
    size: int

    @classmethod
    def contiguous(cls, shape: Sequence[int]) -> "Layout":
        """Build a row-major layout for ``shape``."""
        shape = tuple(int(extent) for extent in shape)
        strides, size = compute_strides(shape)
        return cls(shape, strides, size)

    @property
    def ndim(self) -> int:
        return len(self.shape)


@dataclass(frozen=True)
class PlainLayout:
    native: Layout


@dataclass(frozen=True)
class BroadcastLayout:
    native: Layout
    view: Layout


TensorLayout = Union[PlainLayout, BroadcastLayout]


def logical(layout: TensorLayout) -> Layout:
    """Return the layout callers observe: the view when broadcasting."""

    match layout:
        case BroadcastLayout(view=view):
            return view
        case PlainLayout(native=native):
            return native
    raise TypeError(f"Unknown layout {layout!r}")


def broadcast(native: Layout, target: Sequence[int]) -> BroadcastLayout:
    """Validate ``target`` against ``native`` and build the broadcast layout.

    Shapes are aligned on their trailing dimensions. A native extent of 1 (or a
    dimension missing from the native shape) may stretch to any positive size;
    every other extent must match exactly.
    """

    target = tuple(int(extent) for extent in target)
    if not target:
        raise InvalidShape(target, "a tensor needs at least one dimension")
    target_ndim = len(target)
    native_ndim = native.ndim

    for i in range(1, target_ndim + 1):
        dim = target_ndim - i
        old_size = native.shape[native_ndim - i] if i <= native_ndim else 1
        new_size = target[dim]
        if old_size != 1 and new_size != old_size:
            raise IncompatibleExpand(old_size, new_size, dim)
        if new_size < 1:
            raise InvalidExpandSize(new_size, dim)

    # Leading native dimensions the target leaves out must be size 1.
    for dim in range(native_ndim - target_ndim):
        if native.shape[dim] != 1:
            raise IncompatibleExpand(native.shape[dim], 1, dim)

    return BroadcastLayout(native, Layout.contiguous(target))


__all__ = [
    "Layout",
    "PlainLayout",
    "BroadcastLayout",
    "TensorLayout",
    "logical",
    "broadcast",
]

# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Exception types raised by stridetensor."""

from __future__ import annotations

from typing import Sequence, Tuple


def _format_shape(shape: Sequence[int]) -> str:
    return "x".join(str(extent) for extent in shape)


class TensorError(Exception):
    """Base class for stridetensor-specific exceptions."""


class ShapeError(TensorError, ValueError):
    """A caller-supplied shape is unusable."""


class ShapeMismatch(ShapeError):
    def __init__(self, shape: Sequence[int], length: int):
        self.shape: Tuple[int, ...] = tuple(shape)
        self.length = length
        super().__init__(
            f"Cannot make Tensor of {_format_shape(self.shape)} "
            f"with data of length {length}"
        )


class InvalidShape(ShapeError):
    def __init__(self, shape: Sequence, reason: str):
        self.shape = tuple(shape)
        super().__init__(f"Invalid shape {self.shape}: {reason}")


class IncompatibleExpand(ShapeError):
    def __init__(self, native: int, target: int, dim: int):
        self.native = native
        self.target = target
        self.dim = dim
        super().__init__(
            f"Cannot expand dimension {dim} of size {native} to size {target}; "
            "only dimensions of size 1 can be expanded"
        )


class InvalidExpandSize(ShapeError):
    def __init__(self, target: int, dim: int):
        self.target = target
        self.dim = dim
        super().__init__(
            f"Cannot expand dimension {dim} to size {target}; sizes must be at least 1"
        )


class DimensionError(TensorError, IndexError):
    """A dimension index does not name a dimension of the tensor."""

    def __init__(self, dim: int, ndim: int, message: str):
        self.dim = dim
        self.ndim = ndim
        super().__init__(message)


class InvalidDimension(DimensionError):
    def __init__(self, dim: int, ndim: int):
        super().__init__(dim, ndim, f"Cannot use negative dimension {dim}")


class DimensionOutOfRange(DimensionError):
    def __init__(self, dim: int, ndim: int):
        super().__init__(
            dim, ndim, f"Cannot use dimension {dim} when only {ndim} dimensions"
        )


class EmptyReduction(TensorError, ValueError):
    """Reduction over zero elements; there is no value to seed from."""


__all__ = [
    "TensorError",
    "ShapeError",
    "ShapeMismatch",
    "InvalidShape",
    "IncompatibleExpand",
    "InvalidExpandSize",
    "DimensionError",
    "InvalidDimension",
    "DimensionOutOfRange",
    "EmptyReduction",
]

# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Functional forms of the tensor reductions."""

from __future__ import annotations

from typing import Optional

from .tensor import CombineFunc, FinalizeFunc, Tensor


def reduce(
    input: Tensor, combine: CombineFunc, finalize: Optional[FinalizeFunc] = None
) -> Tensor:
    return input.reduce(combine, finalize)


def reduce_dim(
    input: Tensor,
    dim: int,
    keepdim: bool,
    combine: CombineFunc,
    finalize: Optional[FinalizeFunc] = None,
) -> Tensor:
    return input.reduce_dim(dim, keepdim, combine, finalize)


def sum(input: Tensor, dim: Optional[int] = None, keepdim: bool = False) -> Tensor:
    return input.sum(dim, keepdim)


def prod(input: Tensor, dim: Optional[int] = None, keepdim: bool = False) -> Tensor:
    return input.prod(dim, keepdim)


def mean(input: Tensor, dim: Optional[int] = None, keepdim: bool = False) -> Tensor:
    return input.mean(dim, keepdim)


def max(input: Tensor, dim: Optional[int] = None, keepdim: bool = False) -> Tensor:
    return input.max(dim, keepdim)


def min(input: Tensor, dim: Optional[int] = None, keepdim: bool = False) -> Tensor:
    return input.min(dim, keepdim)


def expand(input: Tensor, *shape) -> Tensor:
    """Install a broadcast view on ``input`` and return it."""
    return input.expand(*shape)


__all__ = [
    "reduce",
    "reduce_dim",
    "sum",
    "prod",
    "mean",
    "max",
    "min",
    "expand",
]

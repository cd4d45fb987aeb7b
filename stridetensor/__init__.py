# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

import logging
from typing import Iterable

from . import functional, indexing
from ._config import default_dtype, get_default_dtype, set_default_dtype
from ._version import __version__, __version_tuple__
from .errors import (
    DimensionError,
    DimensionOutOfRange,
    EmptyReduction,
    IncompatibleExpand,
    InvalidDimension,
    InvalidExpandSize,
    InvalidShape,
    ShapeError,
    ShapeMismatch,
    TensorError,
)
from .tensor import Tensor, from_numpy, full, ones, tensor, zeros

logging.getLogger(__name__).addHandler(logging.NullHandler())

functional = functional
indexing = indexing

_FUNCTIONAL_FORWARDERS: Iterable[str] = (
    "sum",
    "prod",
    "mean",
    "max",
    "min",
)

for _name in _FUNCTIONAL_FORWARDERS:
    globals()[_name] = getattr(functional, _name)


__all__ = [
    "Tensor",
    "tensor",
    "functional",
    "indexing",
    "zeros",
    "ones",
    "full",
    "from_numpy",
    "sum",
    "prod",
    "mean",
    "max",
    "min",
    "set_default_dtype",
    "get_default_dtype",
    "default_dtype",
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
    "__version__",
]

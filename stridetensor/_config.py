# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

from contextlib import contextmanager
from threading import RLock
from typing import Any, Dict, Iterator, Optional

import numpy as np

# Tensor dtype names mapped to the NumPy dtypes backing their storage.
_TENSOR_TO_NP_DTYPE: Dict[str, np.dtype] = {
    "float32": np.dtype(np.float32),
    "float64": np.dtype(np.float64),
}
_NP_TO_TENSOR_DTYPE: Dict[np.dtype, str] = {v: k for k, v in _TENSOR_TO_NP_DTYPE.items()}

_SUPPORTED_DTYPES = frozenset(_TENSOR_TO_NP_DTYPE)

_DTYPE_LOCK = RLock()
_DEFAULT_DTYPE = "float32"


def _validate_dtype(dtype: str) -> str:
    if dtype not in _SUPPORTED_DTYPES:
        supported = ", ".join(sorted(_SUPPORTED_DTYPES))
        raise ValueError(f"Unsupported dtype '{dtype}' (expected one of: {supported})")
    return dtype


def set_default_dtype(dtype: str) -> None:
    """Set the global default data type for new tensors."""

    global _DEFAULT_DTYPE

    _validate_dtype(dtype)
    with _DTYPE_LOCK:
        _DEFAULT_DTYPE = dtype


def get_default_dtype() -> str:
    """Get the current global default data type."""

    with _DTYPE_LOCK:
        return _DEFAULT_DTYPE


@contextmanager
def default_dtype(dtype: str) -> Iterator[str]:
    """Temporarily change the default dtype, restoring it on exit."""

    _validate_dtype(dtype)
    with _DTYPE_LOCK:
        previous = get_default_dtype()
        set_default_dtype(dtype)
    try:
        yield dtype
    finally:
        set_default_dtype(previous)


def resolve_dtype(dtype: Optional[str], data: Any = None) -> str:
    """Pick the dtype name for a new tensor.

    An explicit ``dtype`` wins. Otherwise a float32/float64 array keeps its own
    width and everything else falls back to the global default.
    """

    if dtype is not None:
        return _validate_dtype(dtype)
    if isinstance(data, np.ndarray):
        mapped = _NP_TO_TENSOR_DTYPE.get(data.dtype)
        if mapped is not None:
            return mapped
    return get_default_dtype()


def numpy_dtype(dtype: str) -> np.dtype:
    """Return the NumPy dtype backing the tensor dtype ``dtype``."""

    return _TENSOR_TO_NP_DTYPE[_validate_dtype(dtype)]


__all__ = [
    "set_default_dtype",
    "get_default_dtype",
    "default_dtype",
    "resolve_dtype",
    "numpy_dtype",
]

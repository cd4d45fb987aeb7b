# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Tensor class: an immutable flat buffer addressed through a shape/stride layout.
"""

from __future__ import annotations

import logging
import operator
from numbers import Integral
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

import numpy as np

from ._config import numpy_dtype, resolve_dtype
from .errors import (
    DimensionOutOfRange,
    EmptyReduction,
    InvalidDimension,
    InvalidShape,
    ShapeMismatch,
)
from .indexing import dim_index, dim_offset, index_of, indices_of
from .layout import BroadcastLayout, Layout, PlainLayout, broadcast, logical

logger = logging.getLogger(__name__)

# iterator(value, storage index, slice index, slice length)
IteratorFunc = Callable[[float, int, int, int], None]
CombineFunc = Callable[[float, float], float]
# finalize(accumulator, number of elements folded)
FinalizeFunc = Callable[[float, int], float]


def _identity(acc: float, count: int) -> float:
    return acc


def _mean(acc: float, count: int) -> float:
    return acc / count


def _unpack_shape(shape: Tuple[Any, ...]) -> Sequence[Any]:
    """Accept ``f(2, 3)`` as well as ``f([2, 3])``."""
    if len(shape) == 1 and isinstance(shape[0], (list, tuple)):
        return shape[0]
    return shape


def _validate_shape(shape: Union[int, Sequence[int]]) -> Tuple[int, ...]:
    if isinstance(shape, Integral):
        shape = (shape,)
    try:
        extents = tuple(shape)
    except TypeError:
        raise InvalidShape((shape,), "shape must be a sequence of integers") from None

    if not extents:
        raise InvalidShape(extents, "a tensor needs at least one dimension")
    for extent in extents:
        if isinstance(extent, bool) or not isinstance(extent, Integral):
            raise InvalidShape(extents, f"extent {extent!r} is not an integer")
        if extent < 0:
            raise InvalidShape(extents, f"extent {extent} is negative")
    return tuple(int(extent) for extent in extents)


class Tensor:
    """
    An N-dimensional array of float32 or float64 values.

    The buffer is copied on construction and never written to afterwards.
    :meth:`expand` reinterprets it under a larger logical shape without
    copying; every read resolves logical positions back into the buffer
    modulo its length, so size-1 dimensions repeat.

    Examples:
        >>> t = Tensor([2, 2], [1, 2, 3, 4])
        >>> t.reduce_dim(0, False, lambda a, b: a + b).tolist()
        [4.0, 6.0]
    """

    def __init__(
        self,
        shape: Union[int, Sequence[int]],
        data: Any,
        dtype: Optional[str] = None,
    ):
        """
        Initialize a tensor.

        Args:
            shape: Extent of each dimension; at least one dimension.
            data: Flat buffer (list, tuple or NumPy array) holding
                ``prod(shape)`` values in row-major order.
            dtype: ``'float32'`` or ``'float64'``; defaults to the dtype of a
                float NumPy buffer, else the global default dtype.

        Raises:
            ShapeMismatch: ``len(data)`` differs from the product of ``shape``.
            InvalidShape: ``shape`` is empty or holds a negative extent.
        """
        shape = _validate_shape(shape)
        dtype_name = resolve_dtype(dtype, data)

        buffer = np.array(data, dtype=numpy_dtype(dtype_name)).reshape(-1)
        native = Layout.contiguous(shape)
        if buffer.size != native.size:
            raise ShapeMismatch(shape, buffer.size)
        buffer.flags.writeable = False

        self._data = buffer
        self._dtype = dtype_name
        self._layout: Union[PlainLayout, BroadcastLayout] = PlainLayout(native)

    @staticmethod
    def _check_dim(dim: int, ndim: int) -> None:
        if dim < 0:
            raise InvalidDimension(dim, ndim)
        if dim >= ndim:
            raise DimensionOutOfRange(dim, ndim)

    # Storage
    @property
    def data(self) -> np.ndarray:
        """Read-only flat buffer."""
        return self._data

    @property
    def dtype(self) -> str:
        return self._dtype

    @property
    def native_shape(self) -> Tuple[int, ...]:
        return self._layout.native.shape

    @property
    def native_strides(self) -> Tuple[int, ...]:
        return self._layout.native.strides

    @property
    def native_size(self) -> int:
        return self._layout.native.size

    # Logical (view-aware) properties
    @property
    def shape(self) -> Tuple[int, ...]:
        """Get tensor shape as tuple."""
        return logical(self._layout).shape

    @property
    def strides(self) -> Tuple[int, ...]:
        return logical(self._layout).strides

    @property
    def size(self) -> int:
        """Total number of logical elements."""
        return logical(self._layout).size

    @property
    def ndim(self) -> int:
        return logical(self._layout).ndim

    @property
    def is_expanded(self) -> bool:
        return isinstance(self._layout, BroadcastLayout)

    def dim(self) -> int:
        """Get number of dimensions."""
        return self.ndim

    def numel(self) -> int:
        return self.size

    # Index model
    def get_indices(self, index: int) -> Tuple[int, ...]:
        """Coordinates of the logical linear ``index``."""
        return indices_of(index, self.strides)

    def get_index(self, indices: Sequence[int]) -> int:
        """Logical linear index of ``indices``."""
        return index_of(indices, self.strides)

    def dim_offset(self, n: int, dim: int) -> int:
        """Storage offset of the first element of slice ``n`` along ``dim``."""
        layout = self._layout
        view = logical(layout)
        return dim_offset(n, view.shape[dim], view.strides[dim], layout.native.size)

    def dim_index(self, i: int, dim: int) -> int:
        view = logical(self._layout)
        return dim_index(i, view.shape[dim], view.strides[dim], view.size)

    # Broadcast views
    def expand(self, *shape: Union[int, Sequence[int]]) -> "Tensor":
        """Read this tensor under a larger shape without allocating new memory.

        Shapes align on their trailing dimensions; only size-1 (or missing
        leading) dimensions can grow. The view replaces any earlier one and is
        always validated against the native shape. Returns ``self``.

        Raises:
            IncompatibleExpand: a non-1 native extent differs from the target.
            InvalidExpandSize: a target extent is smaller than 1.
        """
        target = _unpack_shape(shape)
        layout = broadcast(self._layout.native, target)
        self._layout = layout
        logger.debug(
            "Expanded tensor of shape %s to %s", layout.native.shape, layout.view.shape
        )
        return self

    def unexpand(self) -> "Tensor":
        """Drop the broadcast view, reverting to the native shape."""
        layout = self._layout
        if isinstance(layout, BroadcastLayout):
            logger.debug(
                "Removed broadcast view %s from tensor of shape %s",
                layout.view.shape,
                layout.native.shape,
            )
            self._layout = PlainLayout(layout.native)
        return self

    # Iteration
    def for_each(self, iterator: IteratorFunc) -> None:
        """Call ``iterator(value, index, -1, size)`` for every logical element."""
        layout = self._layout
        size = logical(layout).size
        native_size = layout.native.size
        data = self._data

        for i in range(size):
            index = i % native_size
            iterator(data[index], index, -1, size)

    def for_each_dim(self, dim: int, iterator: IteratorFunc) -> None:
        """Visit every slice along ``dim``, one run of ``shape[dim]`` values each.

        Slices are visited in ascending order and positions within a slice in
        ascending order; ``iterator`` receives ``(value, index, slice, extent)``.
        """
        layout = self._layout
        view = logical(layout)
        self._check_dim(dim, view.ndim)

        extent = view.shape[dim]
        if extent == 0:
            return
        stride = view.strides[dim]
        native_size = layout.native.size
        data = self._data

        for i in range(view.size // extent):
            offset = dim_offset(i, extent, stride, native_size)
            for v in range(extent):
                index = (offset + v * stride) % native_size
                iterator(data[index], index, i, extent)

    # Reduction
    def reduce(
        self, combine: CombineFunc, finalize: Optional[FinalizeFunc] = None
    ) -> "Tensor":
        """Fold every logical element into a single-value tensor of shape ``(1,)``.

        ``finalize(acc, size)`` post-processes the folded value; it defaults to
        the identity.
        """
        if finalize is None:
            finalize = _identity

        layout = self._layout
        size = logical(layout).size
        if size == 0:
            raise EmptyReduction("Cannot reduce a tensor with no elements")
        native_size = layout.native.size
        data = self._data

        acc = data[0]
        for i in range(1, size):
            acc = combine(acc, data[i % native_size])

        return Tensor((1,), [finalize(acc, size)], dtype=self._dtype)

    def reduce_dim(
        self,
        dim: int,
        keepdim: bool,
        combine: CombineFunc,
        finalize: Optional[FinalizeFunc] = None,
    ) -> "Tensor":
        """Fold the values along ``dim`` into a new tensor.

        The reduced dimension is kept with extent 1 when ``keepdim`` is true and
        removed otherwise. ``finalize(acc, shape[dim])`` post-processes each
        folded value. The result always owns fresh storage.
        """
        if finalize is None:
            finalize = _identity

        layout = self._layout
        view = logical(layout)
        self._check_dim(dim, view.ndim)

        shape = view.shape
        extent = shape[dim]
        if keepdim:
            out_shape = shape[:dim] + (1,) + shape[dim + 1 :]
        else:
            # Rank never drops below 1.
            out_shape = shape[:dim] + shape[dim + 1 :] or (1,)

        if extent == 0:
            raise EmptyReduction(f"Cannot reduce dimension {dim} of size 0")

        stride = view.strides[dim]
        native_size = layout.native.size
        data = self._data
        out_size = view.size // extent
        output = np.empty(out_size, dtype=data.dtype)

        for i in range(out_size):
            offset = dim_offset(i, extent, stride, native_size)
            acc = data[offset]
            for v in range(1, extent):
                acc = combine(acc, data[(offset + v * stride) % native_size])
            output[i] = finalize(acc, extent)

        logger.debug(
            "Reduced dimension %d of shape %s (keepdim=%s) to %s",
            dim,
            shape,
            keepdim,
            out_shape,
        )
        return Tensor(out_shape, output, dtype=self._dtype)

    def _reduce_over(
        self,
        dim: Optional[int],
        keepdim: bool,
        combine: CombineFunc,
        finalize: Optional[FinalizeFunc] = None,
    ) -> "Tensor":
        if dim is None:
            return self.reduce(combine, finalize)
        return self.reduce_dim(dim, keepdim, combine, finalize)

    # Reduction operations
    def sum(self, dim: Optional[int] = None, keepdim: bool = False) -> "Tensor":
        """Sum along ``dim``, or over every element when ``dim`` is None."""
        return self._reduce_over(dim, keepdim, operator.add)

    def prod(self, dim: Optional[int] = None, keepdim: bool = False) -> "Tensor":
        """Product along specified dimension."""
        return self._reduce_over(dim, keepdim, operator.mul)

    def mean(self, dim: Optional[int] = None, keepdim: bool = False) -> "Tensor":
        """Mean along specified dimension."""
        return self._reduce_over(dim, keepdim, operator.add, _mean)

    def max(self, dim: Optional[int] = None, keepdim: bool = False) -> "Tensor":
        """Maximum values; NaN propagates."""
        return self._reduce_over(dim, keepdim, np.maximum)

    def min(self, dim: Optional[int] = None, keepdim: bool = False) -> "Tensor":
        """Minimum values; NaN propagates."""
        return self._reduce_over(dim, keepdim, np.minimum)

    # Materialization
    def to_nested_arrays(self) -> List[Any]:
        """Nested Python lists mirroring the logical shape, for inspection."""
        layout = self._layout
        view = logical(layout)
        native_size = layout.native.size
        data = self._data

        nested: List[Any] = []
        for i in range(view.size):
            indices = indices_of(i, view.strides)
            container = nested
            for index in indices[:-1]:
                while len(container) <= index:
                    container.append([])
                container = container[index]

            leaf = indices[-1]
            while len(container) <= leaf:
                container.append(None)
            container[leaf] = float(data[i % native_size])
        return nested

    def tolist(self) -> List[Any]:
        """Convert to Python list."""
        return self.to_nested_arrays()

    def numpy(self) -> np.ndarray:
        """Materialize the logical contents as a new NumPy array."""
        layout = self._layout
        view = logical(layout)
        if view.size == 0:
            return np.empty(view.shape, dtype=self._data.dtype)
        positions = np.arange(view.size) % layout.native.size
        return self._data[positions].reshape(view.shape)

    def __array__(
        self, dtype: Optional[np.dtype] = None, copy: Optional[bool] = None
    ) -> np.ndarray:
        """Support NumPy's array protocol for seamless interoperability."""
        array = self.numpy()
        if dtype is not None:
            return array.astype(dtype, copy=False)
        return array

    def item(self) -> float:
        """Return the Python scalar value for a single-element tensor."""
        if self.size != 1:
            raise ValueError(
                f"only one element tensors can be converted to Python scalars, got {self.size}"
            )
        return float(self._data[0])

    # String representations
    def __repr__(self) -> str:
        text = f"Tensor({self.to_nested_arrays()}, shape={self.shape}, dtype='{self._dtype}'"
        if self.is_expanded:
            text += f", expanded_from={self.native_shape}"
        return text + ")"

    def __len__(self) -> int:
        return self.shape[0]

    # Static tensor creation methods
    @staticmethod
    def full(
        shape: Union[int, Sequence[int]], fill_value: float, dtype: Optional[str] = None
    ) -> "Tensor":
        """Create a tensor filled with a specific value."""
        shape = _validate_shape(shape)
        count = Layout.contiguous(shape).size
        return Tensor(shape, np.full(count, fill_value), dtype=resolve_dtype(dtype))

    @staticmethod
    def zeros(*shape: Union[int, Sequence[int]], dtype: Optional[str] = None) -> "Tensor":
        """Create a tensor filled with zeros."""
        return Tensor.full(_unpack_shape(shape), 0.0, dtype=dtype)

    @staticmethod
    def ones(*shape: Union[int, Sequence[int]], dtype: Optional[str] = None) -> "Tensor":
        """Create a tensor filled with ones."""
        return Tensor.full(_unpack_shape(shape), 1.0, dtype=dtype)

    @staticmethod
    def from_numpy(array: np.ndarray, dtype: Optional[str] = None) -> "Tensor":
        """Create a tensor with the shape and contents of a NumPy array.

        A zero-dimensional array becomes a tensor of shape ``(1,)``.
        """
        array = np.asarray(array)
        return Tensor(array.shape or (1,), array, dtype=dtype)


# Convenience functions for tensor creation (NumPy-style)
def tensor(data: Any, dtype: Optional[str] = None) -> Tensor:
    """Create a tensor from (possibly nested) data, inferring its shape."""
    array = np.asarray(data)
    if not np.issubdtype(array.dtype, np.number) and array.dtype != np.bool_:
        raise InvalidShape(array.shape, "data must be rectangular and numeric")
    return Tensor.from_numpy(array, dtype=dtype)


def zeros(*shape: Union[int, Sequence[int]], dtype: Optional[str] = None) -> Tensor:
    """Create a tensor filled with zeros."""
    return Tensor.zeros(*shape, dtype=dtype)


def ones(*shape: Union[int, Sequence[int]], dtype: Optional[str] = None) -> Tensor:
    """Create a tensor filled with ones."""
    return Tensor.ones(*shape, dtype=dtype)


def full(
    shape: Union[int, Sequence[int]], fill_value: float, dtype: Optional[str] = None
) -> Tensor:
    """Create a tensor filled with a specific value."""
    return Tensor.full(shape, fill_value, dtype=dtype)


def from_numpy(array: np.ndarray, dtype: Optional[str] = None) -> Tensor:
    """Create a tensor from a NumPy array."""
    return Tensor.from_numpy(array, dtype=dtype)


# Export all public symbols
__all__ = [
    "Tensor",
    "tensor",
    "zeros",
    "ones",
    "full",
    "from_numpy",
    "IteratorFunc",
    "CombineFunc",
    "FinalizeFunc",
]

"""
Concrete strided array (NumPy-buffer backend).

`NDArray` is a window onto a shared flat buffer: a storage reference, a
fixed-rank descriptor (``RANK_CAP`` shape and stride slots, right-aligned)
and an offset. Reductions and transforms are attached through the
reduction and transform mixins, whose kernels are registered per dtype.

Design notes
------------
- Element strides are signed, which lets `flip` express reversal as a view.
- Every instance increments its storage's reference count and registers a
  `weakref.finalize` callback that releases it, so a buffer outlives every
  array that references it, and no longer.
- Construction from host data goes through `from_numpy`, which accepts
  anything `numpy.asarray` understands (nested lists, tuples, ranges,
  NumPy arrays).
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Union
import weakref

import numpy as np

from ...domain._array import IArray, Number
from ...domain._dtype import DType
from .._config import RANK_CAP
from ._allocator import allocate_dense, allocate_storage
from ._buffer_storage import _BufferStorage
from ._descriptor import Descriptor
from ._numpy_dtypes import from_numpy_dtype, numpy_dtype, typecode
from ._traversal import walk

from .mixins.reduction import ArrayMixinReduction
from .mixins.transform import ArrayMixinTransform


class NDArray(ArrayMixinReduction, ArrayMixinTransform, IArray):
    """
    Fixed-rank, strided, typed array.

    Parameters
    ----------
    shape : Sequence[int]
        Logical extents, ``1 <= len(shape) <= RANK_CAP``.
    dtype : DType, optional
        Element kind. ``DType.BOOL`` creates a logical array stored as
        ``UINT8``. Defaults to ``DType.FLOAT``.

    Notes
    -----
    - The constructor allocates a dense, zero-filled buffer. Views and
      kernel outputs are built through `_from_storage`.
    - `shape` / `strides` report logical axes; `descriptor` holds the
      padded slots used by traversal.
    """

    def __init__(self, shape: Sequence[int], dtype: DType = DType.FLOAT) -> None:
        """
        Construct a dense zero-filled array.

        Raises
        ------
        AllocationError
            If the buffer cannot be obtained.
        ValueError
            If the rank is outside ``[1, RANK_CAP]``.
        """
        dtype = DType.parse(dtype)
        boolean = dtype is DType.BOOL
        if boolean:
            dtype = DType.UINT8
        ndim = len(shape)
        descriptor = Descriptor.dense(ndim, shape)
        self._attach(
            allocate_storage(descriptor.numel, dtype),
            dtype=dtype,
            ndim=ndim,
            descriptor=descriptor,
            offset=0,
            boolean=boolean,
        )

    def _attach(
        self,
        storage: _BufferStorage,
        *,
        dtype: DType,
        ndim: int,
        descriptor: Descriptor,
        offset: int,
        boolean: bool,
    ) -> None:
        """
        Bind this instance to a storage window and take a reference on it.

        Raises
        ------
        ValueError
            If the window reaches outside the buffer.
        """
        if descriptor.numel > 0:
            low, high = descriptor.span(offset)
            if low < 0 or high >= len(storage):
                raise ValueError(
                    f"view [{low}, {high}] outside buffer of {len(storage)} elements"
                )
        self._storage = storage
        self._dtype = dtype
        self._ndim = ndim
        self._descriptor = descriptor
        self._offset = offset
        self._boolean = bool(boolean)
        storage.incref()
        self._finalizer = weakref.finalize(self, storage.decref)

    @classmethod
    def _from_storage(
        cls,
        storage: _BufferStorage,
        *,
        dtype: DType,
        ndim: int,
        descriptor: Descriptor,
        offset: int,
        boolean: bool = False,
    ) -> "NDArray":
        """
        Construct an array over an existing storage (bypasses `__init__`).

        Parameters
        ----------
        storage : _BufferStorage
            Buffer to reference. Its reference count is incremented.
        dtype : DType
            Storage dtype of the buffer.
        ndim : int
            Logical rank.
        descriptor : Descriptor
            Padded shape/stride slots.
        offset : int
            Buffer position of the first element.
        boolean : bool, optional
            Whether the array holds logical values.
        """
        obj = cls.__new__(cls)
        obj._attach(
            storage,
            dtype=dtype,
            ndim=ndim,
            descriptor=descriptor,
            offset=offset,
            boolean=boolean,
        )
        return obj

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    @classmethod
    def from_numpy(cls, obj: Any, dtype: Optional[Any] = None) -> "NDArray":
        """
        Build a dense array from host data.

        Parameters
        ----------
        obj : Any
            Nested sequences or a NumPy array.
        dtype : Optional[Any]
            Target dtype (anything `DType.parse` accepts). Defaults to
            ``BOOL`` for boolean input, the matching narrow integer for
            ``uint8``/``int8``/``uint16``/``int16`` input and ``FLOAT``
            otherwise.

        Returns
        -------
        NDArray
            A dense copy of the data.

        Raises
        ------
        ValueError
            If the data has rank 0 or more than ``RANK_CAP`` axes.
        """
        src = np.asarray(obj)
        if not 1 <= src.ndim <= RANK_CAP:
            raise ValueError(
                f"arrays must have between 1 and {RANK_CAP} dimensions, got {src.ndim}"
            )
        target = DType.parse(dtype) if dtype is not None else from_numpy_dtype(src.dtype)
        out = allocate_dense(src.ndim, src.shape, target)
        if target is DType.BOOL:
            flat = src.astype(bool).astype(np.uint8)
        else:
            flat = src.astype(numpy_dtype(target))
        out._storage.data[:] = flat.reshape(-1)
        return out

    @classmethod
    def zeros(cls, shape: Sequence[int], dtype: Any = DType.FLOAT) -> "NDArray":
        """Zero-filled dense array; `dtype` accepts anything `DType.parse` does."""
        return cls(shape, dtype)

    # ------------------------------------------------------------------
    # Descriptor
    # ------------------------------------------------------------------
    @property
    def dtype(self) -> DType:
        return self._dtype

    @property
    def boolean(self) -> bool:
        return self._boolean

    @property
    def typecode(self) -> str:
        """``'?'`` for logical arrays, else the storage typecode."""
        return DType.BOOL.value if self._boolean else typecode(self._dtype)

    @property
    def itemsize(self) -> int:
        return int(numpy_dtype(self._dtype).itemsize)

    @property
    def ndim(self) -> int:
        return self._ndim

    @property
    def descriptor(self) -> Descriptor:
        """Padded shape/stride slots driving traversal."""
        return self._descriptor

    @property
    def shape(self) -> tuple[int, ...]:
        return self._descriptor.logical_shape(self._ndim)

    @property
    def strides(self) -> tuple[int, ...]:
        """Logical strides in elements (multiply by `itemsize` for bytes)."""
        return self._descriptor.logical_strides(self._ndim)

    @property
    def size(self) -> int:
        return self._descriptor.numel

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def dense(self) -> bool:
        return self._descriptor.is_dense(self._ndim)

    @property
    def storage(self) -> _BufferStorage:
        return self._storage

    def __len__(self) -> int:
        return self.shape[0]

    def __repr__(self) -> str:
        return (
            f"NDArray(shape={self.shape}, dtype={self.typecode!r}, "
            f"strides={self.strides}, offset={self._offset}, data={self.tolist()!r})"
        )

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------
    def _scalar(self, value: Number) -> Number:
        """Convert a stored element into the scalar handed to callers."""
        return bool(value) if self._boolean else value

    def _values(self):
        """Stored element values, in traversal order."""
        read = self._storage.read
        d = self._descriptor
        for (pos,) in walk(d.shape, (d.strides, self._offset)):
            yield read(pos)

    def index_from_flat(self, flat_index: int) -> int:
        """
        Buffer position of the `flat_index`-th element in traversal order.

        Raises
        ------
        IndexError
            If `flat_index` is outside ``[0, size)``.
        """
        if not 0 <= flat_index < self.size:
            raise IndexError(f"flat index {flat_index} out of range")
        pos = self._offset
        remainder = flat_index
        block = self.size
        for extent, stride in zip(self._descriptor.shape, self._descriptor.strides):
            block //= extent
            q, remainder = divmod(remainder, block)
            pos += q * stride
        return pos

    def get_float_value(self, pos: int) -> float:
        """Element at buffer position `pos`, converted to float."""
        return float(self._storage.read(pos))

    def item(self, *index: int) -> Number:
        """
        Return one element as a Python scalar.

        Parameters
        ----------
        *index : int
            One index per logical axis (negative indices count from the end).
            A single-element array accepts an empty index.

        Raises
        ------
        IndexError
            If the index has the wrong length or is out of range.
        """
        if not index:
            if self.size != 1:
                raise IndexError("item() without an index needs a single-element array")
            return self._scalar(self._storage.read(self.index_from_flat(0)))
        if len(index) != self._ndim:
            raise IndexError(f"expected {self._ndim} indices, got {len(index)}")
        pos = self._offset
        for i, extent, stride in zip(index, self.shape, self.strides):
            if not -extent <= i < extent:
                raise IndexError(f"index {i} out of range for extent {extent}")
            pos += (i % extent) * stride
        return self._scalar(self._storage.read(pos))

    # ------------------------------------------------------------------
    # Copies and host interop
    # ------------------------------------------------------------------
    def copy(self) -> "NDArray":
        """Dense copy with the same shape, dtype and boolean flag."""
        out = allocate_dense(
            self._ndim, self._descriptor.shape, self._dtype, boolean=self._boolean
        )
        self._copy_into(out)
        return out

    def flatten(self) -> "NDArray":
        """Dense rank-1 copy of the elements in traversal order."""
        out = allocate_dense(1, (self.size,), self._dtype, boolean=self._boolean)
        self._copy_into(out)
        return out

    def _copy_into(self, out: "NDArray") -> None:
        # `out` is dense, so its buffer positions are 0, 1, 2, ...
        write = out._storage.write
        for i, value in enumerate(self._values()):
            write(i, value)

    def tolist(self) -> List[Any]:
        return _nest([self._scalar(v) for v in self._values()], self.shape)

    def to_numpy(self) -> np.ndarray:
        arr = np.array(list(self._values()), dtype=numpy_dtype(self._dtype))
        if self._boolean:
            arr = arr.astype(bool)
        return arr.reshape(self.shape)

    @staticmethod
    def unwrap(result: "NDArray") -> Union["NDArray", Number]:
        """Return `result`'s only element as a scalar, or `result` itself."""
        if result.size == 1:
            return result.item()
        return result


def _nest(flat: List[Any], shape: Sequence[int]) -> List[Any]:
    """Split a row-major element list into nested lists of `shape`."""
    if len(shape) == 1:
        return flat
    step = len(flat) // shape[0] if shape[0] else 0
    return [_nest(flat[i * step : (i + 1) * step], shape[1:]) for i in range(shape[0])]

"""
Dense array allocation and view construction.

Every reduction and transform produces its output through
:func:`allocate_dense`; zero-copy transforms build their result with
:func:`new_view`. Keeping both in one place means the storage reference
counting and the descriptor invariants are enforced on a single path.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import numpy as np

from ...domain._dtype import DType
from ...domain._errors import AllocationError
from ._buffer_storage import _BufferStorage
from ._descriptor import Descriptor
from ._numpy_dtypes import numpy_dtype

if TYPE_CHECKING:
    from ._ndarray import NDArray


def allocate_storage(count: int, dtype: DType) -> _BufferStorage:
    """
    Obtain a zero-filled flat buffer of `count` elements.

    Raises
    ------
    AllocationError
        If NumPy cannot provide the buffer.
    TypeError
        If `dtype` is not a storage dtype.
    """
    np_dtype = numpy_dtype(dtype)
    try:
        data = np.zeros(count, dtype=np_dtype)
    except (MemoryError, ValueError) as exc:
        raise AllocationError(count, dtype.name) from exc
    return _BufferStorage(data)


def allocate_dense(
    ndim: int,
    shape: Sequence[int],
    dtype: DType,
    *,
    boolean: bool = False,
) -> "NDArray":
    """
    Allocate a zero-offset, row-major array.

    Parameters
    ----------
    ndim : int
        Logical rank, ``1 <= ndim <= RANK_CAP``.
    shape : Sequence[int]
        ``ndim`` extents, or ``RANK_CAP`` padded extents of which only the
        trailing ``ndim`` are used (the leading slots are treated as 1).
    dtype : DType
        Storage dtype. ``DType.BOOL`` is accepted and stored as ``UINT8``
        with the boolean flag set.
    boolean : bool, optional
        Mark the result as a logical array. Defaults to False.

    Returns
    -------
    NDArray
        A dense, zero-filled array that owns a fresh buffer.

    Raises
    ------
    AllocationError
        If the buffer cannot be obtained.
    ValueError
        If `ndim` or `shape` is invalid.
    """
    from ._ndarray import NDArray

    if dtype is DType.BOOL:
        dtype, boolean = DType.UINT8, True
    descriptor = Descriptor.dense(ndim, shape)
    storage = allocate_storage(descriptor.numel, dtype)
    return NDArray._from_storage(
        storage,
        dtype=dtype,
        ndim=ndim,
        descriptor=descriptor,
        offset=0,
        boolean=boolean,
    )


def new_view(source: "NDArray", descriptor: Descriptor, offset: int) -> "NDArray":
    """
    Build an array that shares `source`'s buffer.

    Parameters
    ----------
    source : NDArray
        Array whose storage the view references.
    descriptor : Descriptor
        Shape/stride slots of the view.
    offset : int
        Buffer position of the view's first element.

    Returns
    -------
    NDArray
        The view. It keeps the storage alive for as long as it exists.
    """
    return type(source)._from_storage(
        source.storage,
        dtype=source.dtype,
        ndim=source.ndim,
        descriptor=descriptor,
        offset=offset,
        boolean=source.boolean,
    )

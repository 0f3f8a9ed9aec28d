"""
Axis-fold driver shared by the reduction kernels.

A reduction kernel only decides how one lane of values collapses into one
output element (its *fold*). This module supplies the rest: axis
validation, planning of the kept-axis descriptor, allocation of the dense
output, and the lock-step walk that pairs each kept index of the source
with its output slot.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Union

from .....domain._array import IArray, Number
from .....domain._dtype import DType
from ..._allocator import allocate_dense
from ..._planner import check_axis_argument, normalize_axis, reduce_axis, reduced_ndim
from ..._traversal import lane, walk

AXIS_TYPE_MESSAGE = "axis must be None, or an integer"

Fold = Callable[[Iterator[Any]], Number]


def validate_axis(axis: Any) -> None:
    check_axis_argument(axis, AXIS_TYPE_MESSAGE)


def fold_all(array: IArray, fold: Fold) -> Number:
    """Fold every element of `array`, in traversal order, into one scalar."""
    return fold(array._values())


def fold_axis(
    array: IArray,
    axis: int,
    fold: Fold,
    *,
    out_dtype: DType,
    boolean: bool = False,
) -> Union[IArray, Number]:
    """
    Fold `array` along one axis.

    Parameters
    ----------
    array : IArray
        Source array.
    axis : int
        Signed logical axis; validated here.
    fold : Callable[[Iterator[Any]], Number]
        Collapses the values of one lane into one element representable in
        `out_dtype`.
    out_dtype : DType
        Storage dtype of the result.
    boolean : bool, optional
        Mark the result as a logical array.

    Returns
    -------
    IArray or scalar
        Result with ``max(1, ndim - 1)`` dims, or its only element.

    Raises
    ------
    AxisError
        If `axis` is out of range.
    """
    slot = normalize_axis(axis, array.ndim)
    source = array.descriptor
    kept = reduce_axis(source, array.ndim, slot)
    out = allocate_dense(reduced_ndim(array.ndim), kept.shape, out_dtype, boolean=boolean)

    extent = source.shape[slot]
    stride = source.strides[slot]
    read = array.storage.read
    write = out.storage.write
    for src_pos, dst_pos in walk(
        kept.shape,
        (kept.strides, array.offset),
        (out.descriptor.strides, 0),
    ):
        write(dst_pos, fold(read(p) for p in lane(src_pos, stride, extent)))

    return type(array).unwrap(out)

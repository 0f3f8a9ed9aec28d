"""
Implementation of NDArray.roll using control-path dispatch.

The result is a fresh dense array. Source elements are read in traversal
order and written through a circular destination cursor: the cursor starts
``distance`` positions in (modulo the length) and wraps to the start of the
lane when it runs off the end.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Union

from ..._allocator import allocate_dense
from ..._array_builder import array_control_path_manager, dtype_trap
from ..._numpy_dtypes import STORAGE_DTYPES
from ..._planner import check_axis_argument, is_integer_argument, normalize_axis, reduce_axis
from ..._traversal import lane, walk

from .....domain._array import IArray
from ._base import ArrayMixinTransform as AMT


def _start(distance: int, length: int) -> int:
    shift = abs(distance) % length
    return shift if distance >= 0 else (length - shift) % length


def _scatter(
    values: Iterable[Union[int, float]],
    write: Callable[[int, Union[int, float]], None],
    base: int,
    stride: int,
    length: int,
    start: int,
) -> None:
    cursor = start
    for value in values:
        write(base + cursor * stride, value)
        cursor += 1
        if cursor == length:
            cursor = 0


def array_roll(self: IArray, distance: int, axis: Optional[int] = None) -> IArray:
    """Circular shift of the flattened array or of one axis, for every storage dtype."""
    if not is_integer_argument(distance):
        raise TypeError("distance must be an integer")
    check_axis_argument(axis, "wrong axis index")

    distance = int(distance)
    slot = None if axis is None else normalize_axis(axis, self.ndim)
    source = self.descriptor
    out = allocate_dense(self.ndim, source.shape, self.dtype, boolean=self.boolean)
    if self.size == 0:
        return out

    write = out.storage.write
    if slot is None:
        length = self.size
        _scatter(self._values(), write, 0, 1, length, _start(distance, length))
        return out

    extent = source.shape[slot]
    start = _start(distance, extent)
    src_stride = source.strides[slot]
    dst_stride = out.descriptor.strides[slot]
    kept = reduce_axis(source, self.ndim, slot)
    kept_out = reduce_axis(out.descriptor, self.ndim, slot)
    read = self.storage.read
    for src_pos, dst_pos in walk(
        kept.shape,
        (kept.strides, self.offset),
        (kept_out.strides, 0),
    ):
        values = (read(p) for p in lane(src_pos, src_stride, extent))
        _scatter(values, write, dst_pos, dst_stride, extent, start)
    return out


for _dtype in STORAGE_DTYPES:
    array_control_path_manager(AMT, AMT.roll, _dtype, dtype_trap)(array_roll)

"""
Implementation of NDArray.flip using control-path dispatch.

Flipping along an axis never copies: the result is a view whose stride on
that axis is negated and whose offset points at the last element along it.
Flipping the flattened array first makes a dense rank-1 copy, then returns
the reversed view of that copy.
"""

from __future__ import annotations

from typing import Optional

from ..._allocator import new_view
from ..._array_builder import array_control_path_manager, dtype_trap
from ..._numpy_dtypes import STORAGE_DTYPES
from ..._planner import check_axis_argument, normalize_axis
from ...._config import RANK_CAP

from .....domain._array import IArray
from ._base import ArrayMixinTransform as AMT


def _reversed_view(array: IArray, slot: int) -> IArray:
    descriptor = array.descriptor
    extent = descriptor.shape[slot]
    stride = descriptor.strides[slot]
    offset = array.offset
    if extent > 0:
        offset += (extent - 1) * stride
    return new_view(array, descriptor.with_slot(slot, extent, -stride), offset)


def array_flip(self: IArray, axis: Optional[int] = None) -> IArray:
    """Reverse along `axis`, or reverse the flattened array, for every storage dtype."""
    check_axis_argument(axis, "wrong axis index")
    if axis is None:
        return _reversed_view(self.flatten(), RANK_CAP - 1)
    return _reversed_view(self, normalize_axis(axis, self.ndim))


for _dtype in STORAGE_DTYPES:
    array_control_path_manager(AMT, AMT.flip, _dtype, dtype_trap)(array_flip)

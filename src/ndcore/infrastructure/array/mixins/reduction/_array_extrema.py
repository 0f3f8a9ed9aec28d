"""
Implementations of NDArray.min/max/argmin/argmax using control-path dispatch.

All four share one linear scan (`extreme`) that keeps the first position
achieving the extreme value. `min`/`max` store the value in the source
dtype (boolean arrays stay boolean); `argmin`/`argmax` store positions
along the reduced axis as ``DType.UINT16``, or return the flat traversal
index when the whole array is scanned.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from ..._array_builder import array_control_path_manager, dtype_trap
from ..._folds import extreme
from ..._numpy_dtypes import STORAGE_DTYPES
from ..._planner import normalize_axis

from .....domain._array import IArray
from .....domain._dtype import DType
from ._base import ArrayMixinReduction as AMR
from ._folding import fold_all, fold_axis, validate_axis

# Largest axis whose positions fit the UINT16 result dtype.
MAX_ARG_EXTENT = 65535


def _check_not_empty(array: IArray, message: str) -> None:
    if array.size == 0:
        raise ValueError(message)


def _extreme_value(self: IArray, axis: Optional[int], largest: bool):
    validate_axis(axis)
    _check_not_empty(self, "attempt to get min/max of empty sequence")

    def fold(values: Iterator[Any]):
        return extreme(values, largest)[1]

    if axis is None:
        return self._scalar(fold_all(self, fold))
    return fold_axis(self, axis, fold, out_dtype=self.dtype, boolean=self.boolean)


def _extreme_index(self: IArray, axis: Optional[int], largest: bool):
    validate_axis(axis)
    _check_not_empty(self, "attempt to get argmin/argmax of an empty sequence")

    def fold(values: Iterator[Any]) -> int:
        return extreme(values, largest)[0]

    if axis is None:
        return fold_all(self, fold)
    extent = self.descriptor.shape[normalize_axis(axis, self.ndim)]
    if extent > MAX_ARG_EXTENT:
        raise ValueError(
            f"argmin/argmax axis can't be longer than {MAX_ARG_EXTENT}"
        )
    return fold_axis(self, axis, fold, out_dtype=DType.UINT16)


def array_min(self: IArray, axis: Optional[int] = None):
    """Smallest element, for every storage dtype."""
    return _extreme_value(self, axis, largest=False)


def array_max(self: IArray, axis: Optional[int] = None):
    """Largest element, for every storage dtype."""
    return _extreme_value(self, axis, largest=True)


def array_argmin(self: IArray, axis: Optional[int] = None):
    """Position of the first smallest element, for every storage dtype."""
    return _extreme_index(self, axis, largest=False)


def array_argmax(self: IArray, axis: Optional[int] = None):
    """Position of the first largest element, for every storage dtype."""
    return _extreme_index(self, axis, largest=True)


for _dtype in STORAGE_DTYPES:
    array_control_path_manager(AMR, AMR.min, _dtype, dtype_trap)(array_min)
    array_control_path_manager(AMR, AMR.max, _dtype, dtype_trap)(array_max)
    array_control_path_manager(AMR, AMR.argmin, _dtype, dtype_trap)(array_argmin)
    array_control_path_manager(AMR, AMR.argmax, _dtype, dtype_trap)(array_argmax)

"""
Implementations of NDArray.mean and NDArray.std using control-path dispatch.

Both statistics are computed in one pass with Welford's streaming update,
which avoids the cancellation error of the textbook ``E[x^2] - E[x]^2``
formula. The same kernel is registered for every storage dtype; results
are always ``DType.FLOAT``.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from ..._array_builder import array_control_path_manager, dtype_trap
from ..._folds import standard_deviation, welford
from ..._numpy_dtypes import STORAGE_DTYPES, store_value
from ..._planner import is_integer_argument

from .....domain._array import IArray
from .....domain._dtype import DType
from ._base import ArrayMixinReduction as AMR
from ._folding import fold_all, fold_axis, validate_axis


def array_mean(self: IArray, axis: Optional[int] = None):
    """
    Streaming mean, for every storage dtype.

    The mean of an empty lane is 0.0.
    """
    validate_axis(axis)

    def fold(values: Iterator[Any]) -> float:
        return store_value(welford(values).mean, DType.FLOAT)

    if axis is None:
        return fold_all(self, fold)
    return fold_axis(self, axis, fold, out_dtype=DType.FLOAT)


def array_std(self: IArray, axis: Optional[int] = None, ddof: int = 0):
    """
    Streaming standard deviation, for every storage dtype.

    Raises
    ------
    TypeError
        If `ddof` is not an integer.
    ValueError
        If `ddof` is negative.
    """
    validate_axis(axis)
    if not is_integer_argument(ddof):
        raise TypeError("ddof must be a non-negative integer")
    if ddof < 0:
        raise ValueError("ddof must be a non-negative integer")

    def fold(values: Iterator[Any]) -> float:
        return store_value(standard_deviation(welford(values), ddof), DType.FLOAT)

    if axis is None:
        return fold_all(self, fold)
    return fold_axis(self, axis, fold, out_dtype=DType.FLOAT)


for _dtype in STORAGE_DTYPES:
    array_control_path_manager(AMR, AMR.mean, _dtype, dtype_trap)(array_mean)
    array_control_path_manager(AMR, AMR.std, _dtype, dtype_trap)(array_std)

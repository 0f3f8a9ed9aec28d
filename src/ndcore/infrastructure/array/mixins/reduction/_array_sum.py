"""
Dtype-specific implementations of NDArray.sum using control-path dispatch.

Integer dtypes keep the narrow accumulator: the result is stored in the
source dtype and wraps around its range, exactly as a running sum held in
that dtype would. No promotion to a wider integer type takes place. When a
wrap happens and overflow warnings are enabled, a ``RuntimeWarning`` is
emitted.

The float dtype accumulates in Python floats and stores the result at the
configured float width.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional
import warnings

from ..._array_builder import array_control_path_manager, dtype_trap
from ..._numpy_dtypes import store_value, wrap_integer
from ...._config import settings

from .....domain._array import IArray
from .....domain._dtype import DType
from ._base import ArrayMixinReduction as AMR
from ._folding import fold_all, fold_axis, validate_axis


def _warn_wrapped(exact: int, stored: int, dtype: DType) -> None:
    if settings.warn_overflow and exact != stored:
        warnings.warn(
            f"integer sum {exact} does not fit {dtype.name.lower()}; "
            f"wrapped to {stored}",
            RuntimeWarning,
            # _warn_wrapped, fold, fold driver, kernel, dispatch wrapper.
            stacklevel=6,
        )


@array_control_path_manager(AMR, AMR.sum, DType.UINT8, dtype_trap)
@array_control_path_manager(AMR, AMR.sum, DType.INT8, dtype_trap)
@array_control_path_manager(AMR, AMR.sum, DType.UINT16, dtype_trap)
@array_control_path_manager(AMR, AMR.sum, DType.INT16, dtype_trap)
def array_sum_integer(self: IArray, axis: Optional[int] = None):
    """
    Integer implementation of NDArray.sum.

    Sums each lane exactly, then wraps the total into the source dtype
    (modular arithmetic makes this identical to accumulating in the dtype).
    Boolean arrays are summed through their ``UINT8`` storage.
    """
    validate_axis(axis)
    dtype = self.dtype

    def fold(values: Iterator[Any]) -> int:
        exact = 0
        for value in values:
            exact += value
        stored = wrap_integer(exact, dtype)
        _warn_wrapped(exact, stored, dtype)
        return stored

    if axis is None:
        return fold_all(self, fold)
    return fold_axis(self, axis, fold, out_dtype=dtype)


@array_control_path_manager(AMR, AMR.sum, DType.FLOAT, dtype_trap)
def array_sum_float(self: IArray, axis: Optional[int] = None):
    """
    Float implementation of NDArray.sum.
    """
    validate_axis(axis)

    def fold(values: Iterator[Any]) -> float:
        total = 0.0
        for value in values:
            total += value
        return store_value(total, DType.FLOAT)

    if axis is None:
        return fold_all(self, fold)
    return fold_axis(self, axis, fold, out_dtype=DType.FLOAT)

"""
Functional entry points of the ndcore engine.

These functions are the surface a host binds to. Each validates its
arguments in a fixed order (axis category first, then input category) and
then either dispatches to the NDArray method, which selects the dtype
kernel, or, for the reduction family, scans a plain tuple/list/range
linearly.

The sequence path is deliberately thin: ``axis`` is validated but has no
effect, `sum` and `mean` return floats, and `min`/`max` return the original
item rather than a converted value.
"""

from __future__ import annotations

import builtins
from typing import Any, Optional, Sequence, Union

from ..domain._array import Number
from ..domain._dtype import DType
from .array._folds import extreme, standard_deviation, welford
from .array._ndarray import NDArray
from .array._planner import check_axis_argument, is_integer_argument

AXIS_TYPE_MESSAGE = "axis must be None, or an integer"
INPUT_TYPE_MESSAGE = "input must be tuple, list, range, or ndarray"

Result = Union[NDArray, Number]


def _is_sequence(obj: Any) -> bool:
    return isinstance(obj, (tuple, list, range))


def _check_reduction_input(obj: Any, axis: Any) -> None:
    check_axis_argument(axis, AXIS_TYPE_MESSAGE)
    if not isinstance(obj, NDArray) and not _is_sequence(obj):
        raise TypeError(INPUT_TYPE_MESSAGE)


def _require_ndarray(obj: Any, op: str) -> None:
    if not isinstance(obj, NDArray):
        raise TypeError(f"{op} argument must be an ndarray")


# ----------------------------------------------------------------------
# Reductions
# ----------------------------------------------------------------------
def sum(obj: Any, axis: Optional[int] = None) -> Result:
    """
    Sum of the elements, over everything or along one axis.

    Parameters
    ----------
    obj : NDArray | tuple | list | range
        Input values.
    axis : Optional[int], optional
        Axis to reduce, or None for the whole array.

    Returns
    -------
    NDArray or scalar
        For integer arrays the result keeps the source dtype and wraps
        around its range. Sequences always produce a float.
    """
    _check_reduction_input(obj, axis)
    if isinstance(obj, NDArray):
        return obj.sum(axis)
    return builtins.sum((float(v) for v in obj), 0.0)


def mean(obj: Any, axis: Optional[int] = None) -> Result:
    """Arithmetic mean; 0.0 for an empty input."""
    _check_reduction_input(obj, axis)
    if isinstance(obj, NDArray):
        return obj.mean(axis)
    return welford(obj).mean


def std(obj: Any, axis: Optional[int] = None, ddof: int = 0) -> Result:
    """
    Standard deviation with `ddof` delta degrees of freedom.

    Returns 0.0 wherever the element count does not exceed `ddof`.

    Raises
    ------
    TypeError
        If `ddof` is not an integer.
    ValueError
        If `ddof` is negative.
    """
    _check_reduction_input(obj, axis)
    if isinstance(obj, NDArray):
        return obj.std(axis, ddof)
    if not is_integer_argument(ddof):
        raise TypeError("ddof must be a non-negative integer")
    if ddof < 0:
        raise ValueError("ddof must be a non-negative integer")
    return standard_deviation(welford(obj), int(ddof))


def _sequence_extreme(obj: Sequence[Any], largest: bool, want_index: bool):
    if len(obj) == 0:
        if want_index:
            raise ValueError("attempt to get argmin/argmax of an empty sequence")
        raise ValueError("attempt to get min/max of empty sequence")
    index, value = extreme(obj, largest, key=float)
    return index if want_index else value


def min(obj: Any, axis: Optional[int] = None) -> Result:
    """Smallest element (first occurrence on ties)."""
    _check_reduction_input(obj, axis)
    if isinstance(obj, NDArray):
        return obj.min(axis)
    return _sequence_extreme(obj, largest=False, want_index=False)


def max(obj: Any, axis: Optional[int] = None) -> Result:
    """Largest element (first occurrence on ties)."""
    _check_reduction_input(obj, axis)
    if isinstance(obj, NDArray):
        return obj.max(axis)
    return _sequence_extreme(obj, largest=True, want_index=False)


def argmin(obj: Any, axis: Optional[int] = None) -> Result:
    """Index of the first smallest element; a UINT16 array along an axis."""
    _check_reduction_input(obj, axis)
    if isinstance(obj, NDArray):
        return obj.argmin(axis)
    return _sequence_extreme(obj, largest=False, want_index=True)


def argmax(obj: Any, axis: Optional[int] = None) -> Result:
    """Index of the first largest element; a UINT16 array along an axis."""
    _check_reduction_input(obj, axis)
    if isinstance(obj, NDArray):
        return obj.argmax(axis)
    return _sequence_extreme(obj, largest=True, want_index=True)


# ----------------------------------------------------------------------
# Shape transforms
# ----------------------------------------------------------------------
def diff(obj: Any, n: int = 1, axis: int = -1) -> NDArray:
    """
    n-th order finite difference along `axis`.

    Raises
    ------
    TypeError
        If `obj` is not an NDArray, or `n`/`axis` is not an integer.
    ValueError
        If ``n`` is outside ``[0, 9]`` or not smaller than the axis extent.
    """
    if not is_integer_argument(axis):
        raise TypeError("wrong axis index")
    _require_ndarray(obj, "diff")
    return obj.diff(n, axis)


def flip(obj: Any, axis: Optional[int] = None) -> NDArray:
    """Reverse element order, as a view along `axis` or a copy when flattened."""
    check_axis_argument(axis, "wrong axis index")
    _require_ndarray(obj, "flip")
    return obj.flip(axis)


def roll(obj: Any, distance: int, axis: Optional[int] = None) -> NDArray:
    """Circularly shift by `distance` positions into a new dense array."""
    check_axis_argument(axis, "wrong axis index")
    _require_ndarray(obj, "roll")
    return obj.roll(distance, axis)


# ----------------------------------------------------------------------
# Boundary helpers
# ----------------------------------------------------------------------
def array(obj: Any, dtype: Optional[Any] = None) -> NDArray:
    """
    Build a dense NDArray from nested sequences or a NumPy array.

    Parameters
    ----------
    obj : Any
        Anything ``numpy.asarray`` accepts, with rank in ``[1, RANK_CAP]``.
    dtype : optional
        A ``DType``, typecode or NumPy dtype name. Inferred when omitted:
        boolean input becomes ``BOOL``, everything else ``FLOAT`` unless it
        already has one of the narrow integer dtypes.
    """
    return NDArray.from_numpy(obj, dtype)


def zeros(shape: Sequence[int], dtype: Any = DType.FLOAT) -> NDArray:
    """Zero-filled dense array of `shape`."""
    return NDArray.zeros(tuple(shape), dtype)

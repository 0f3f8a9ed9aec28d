"""
NumPy bindings for ndcore dtypes.

Maps each storage :class:`DType` onto the NumPy scalar type used for its
backing buffer, and provides the integer wrap-around used by kernels that
keep results in the source dtype (narrow accumulators).
"""

from __future__ import annotations

from typing import Union

import numpy as np

from ...domain._dtype import DType
from .._config import settings

FLOAT_NP = np.float64 if settings.float_typecode == "d" else np.float32

NUMPY_DTYPES = {
    DType.UINT8: np.dtype(np.uint8),
    DType.INT8: np.dtype(np.int8),
    DType.UINT16: np.dtype(np.uint16),
    DType.INT16: np.dtype(np.int16),
    DType.FLOAT: np.dtype(FLOAT_NP),
}

STORAGE_DTYPES = tuple(NUMPY_DTYPES)


def numpy_dtype(dtype: DType) -> np.dtype:
    """
    Return the NumPy dtype backing a storage dtype.

    Raises
    ------
    TypeError
        If `dtype` is not a storage dtype (``DType.BOOL``).
    """
    try:
        return NUMPY_DTYPES[dtype]
    except KeyError:
        raise TypeError(f"{dtype} is not a storage dtype") from None


def typecode(dtype: DType) -> str:
    """Return the typecode of `dtype`, honoring the configured float width."""
    if dtype is DType.FLOAT:
        return settings.float_typecode
    return dtype.typecode


def from_numpy_dtype(np_dtype: np.dtype) -> DType:
    """
    Map a NumPy dtype onto the closest ndcore dtype.

    Booleans map to ``DType.BOOL``; supported narrow integers map onto
    themselves; every other numeric kind maps to ``DType.FLOAT``.
    """
    np_dtype = np.dtype(np_dtype)
    if np_dtype == np.bool_:
        return DType.BOOL
    for dtype, candidate in NUMPY_DTYPES.items():
        if dtype.is_integer() and candidate == np_dtype:
            return dtype
    return DType.FLOAT


def wrap_integer(value: int, dtype: DType) -> int:
    """
    Wrap an exact integer into the range of an integer dtype.

    The result equals what an accumulator of that dtype would hold after
    the same sequence of additions (two's-complement modular arithmetic).
    """
    info = np.iinfo(numpy_dtype(dtype))
    span = int(info.max) - int(info.min) + 1
    return (value - int(info.min)) % span + int(info.min)


def store_value(value: Union[int, float], dtype: DType) -> Union[int, float]:
    """
    Coerce a kernel result into a value representable in `dtype`.

    Returns
    -------
    int or float
        The wrapped integer for integer dtypes, the value rounded to the
        configured float width for ``DType.FLOAT``.
    """
    if dtype.is_integer():
        return wrap_integer(int(value), dtype)
    return float(FLOAT_NP(value))

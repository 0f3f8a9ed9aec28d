"""
Implementation of NDArray.diff using control-path dispatch.

The n-th difference is evaluated directly with the binomial stencil rather
than by applying the first difference n times, so every output element is
computed from the source in a single pass. Integer results wrap around the
source dtype, the same as subtracting in that dtype would.
"""

from __future__ import annotations

from typing import List

from ..._allocator import allocate_dense
from ..._array_builder import array_control_path_manager, dtype_trap
from ..._numpy_dtypes import STORAGE_DTYPES, store_value
from ..._planner import is_integer_argument, normalize_axis
from ..._traversal import walk

from .....domain._array import IArray
from .....domain._dtype import DType
from .....domain._errors import DTypeNotSupportedError
from ._base import ArrayMixinTransform as AMT

MAX_DIFF_ORDER = 9


def binomial_stencil(n: int) -> List[int]:
    """Signed binomial coefficients ``[1, -n, ..., (-1)**n]``."""
    stencil = [1]
    for i in range(1, n + 1):
        # Exact: C(n, i-1) * (n - i + 1) is divisible by i.
        stencil.append(-(stencil[i - 1] * (n - i + 1) // i))
    return stencil


def array_diff(self: IArray, n: int = 1, axis: int = -1) -> IArray:
    """
    n-th order difference, for every storage dtype.

    Boolean arrays are rejected: differences of logical values have no
    logical meaning.
    """
    if not is_integer_argument(n):
        raise TypeError("differentiation order must be an integer")
    if not is_integer_argument(axis):
        raise TypeError("wrong axis index")
    if self.boolean:
        raise DTypeNotSupportedError("diff", DType.BOOL.name)

    n = int(n)
    slot = normalize_axis(axis, self.ndim)
    source = self.descriptor
    extent = source.shape[slot]
    if not 0 <= n <= MAX_DIFF_ORDER or n >= extent:
        raise ValueError("differentiation order out of range")

    out = allocate_dense(self.ndim, source.with_slot(slot, extent - n, 0).shape, self.dtype)
    if n == 0:
        self._copy_into(out)
        return out

    stencil = binomial_stencil(n)
    dtype = self.dtype
    stride = source.strides[slot]
    read = self.storage.read
    write = out.storage.write
    for src_pos, dst_pos in walk(
        out.descriptor.shape,
        (source.strides, self.offset),
        (out.descriptor.strides, 0),
    ):
        total = 0
        for i, weight in enumerate(stencil):
            total += weight * read(src_pos + (n - i) * stride)
        write(dst_pos, store_value(total, dtype))
    return out


for _dtype in STORAGE_DTYPES:
    array_control_path_manager(AMT, AMT.diff, _dtype, dtype_trap)(array_diff)

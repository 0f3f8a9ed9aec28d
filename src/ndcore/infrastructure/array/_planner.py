"""
Axis validation and axis-reduction planning.

Reductions and transforms that operate along one axis share two steps:

1. validate and normalize the caller's axis into a physical descriptor slot;
2. derive the descriptor of the *kept* axes (the source descriptor with the
   chosen slot removed), which drives the outer traversal while the kernel
   scans the chosen axis itself.

Both steps live here so every operation applies the same rules.
"""

from __future__ import annotations

from typing import Any

from ...domain._errors import AxisError
from .._config import RANK_CAP
from ._descriptor import Descriptor


def is_integer_argument(value: Any) -> bool:
    """Return True for ints (and int-like NumPy scalars), excluding bools."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return hasattr(value, "__index__") and not hasattr(value, "__len__")


def check_axis_argument(axis: Any, message: str) -> None:
    """
    Validate the category of an axis argument.

    Parameters
    ----------
    axis : Any
        The caller-supplied axis.
    message : str
        Text of the ``TypeError`` raised for a bad category; call sites use
        different wording.

    Raises
    ------
    TypeError
        If `axis` is neither ``None`` nor an integer. Booleans are rejected.
    """
    if axis is not None and not is_integer_argument(axis):
        raise TypeError(message)


def normalize_axis(axis: int, ndim: int) -> int:
    """
    Map a signed logical axis onto its right-aligned descriptor slot.

    Parameters
    ----------
    axis : int
        Axis in ``[-ndim, ndim)``.
    ndim : int
        Logical rank of the array.

    Returns
    -------
    int
        ``RANK_CAP - ndim + (axis mod ndim)``.

    Raises
    ------
    AxisError
        If `axis` is outside ``[-ndim, ndim)``.
    """
    axis = int(axis)
    if not -ndim <= axis < ndim:
        raise AxisError(axis, ndim)
    return RANK_CAP - ndim + (axis % ndim)


def reduce_axis(descriptor: Descriptor, ndim: int, slot: int) -> Descriptor:
    """
    Remove one slot from a descriptor.

    Slots to the right of `slot` are kept in place; slots to its left move
    one position right. Slot 0, now unused, gets extent 1 and stride 0.

    Parameters
    ----------
    descriptor : Descriptor
        Source descriptor.
    ndim : int
        Logical rank of the source.
    slot : int
        Physical slot to remove (see :func:`normalize_axis`).

    Returns
    -------
    Descriptor
        Descriptor of the kept axes. For a rank-1 source the result is the
        all-ones descriptor: the reduction collapses to a single element.
    """
    if ndim == 1:
        return Descriptor((1,) * RANK_CAP, (0,) * RANK_CAP)

    shape = [1] * RANK_CAP
    strides = [0] * RANK_CAP
    for i in range(RANK_CAP - 1, 0, -1):
        src = i if i > slot else i - 1
        shape[i] = descriptor.shape[src]
        strides[i] = descriptor.strides[src]
    return Descriptor(tuple(shape), tuple(strides))


def reduced_ndim(ndim: int) -> int:
    """Rank of an axis-reduction result (never below 1)."""
    return max(1, ndim - 1)

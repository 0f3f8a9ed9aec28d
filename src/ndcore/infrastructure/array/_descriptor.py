"""
Fixed-rank shape/stride descriptors.

A :class:`Descriptor` holds exactly ``RANK_CAP`` shape slots and
``RANK_CAP`` stride slots. Logical axes are right-aligned: an array of rank
``ndim`` uses the trailing ``ndim`` slots, and the leading slots are fixed
at extent 1 so that they contribute single-iteration loops to every
traversal. Strides are counted in elements and may be negative.

Descriptors are immutable; every operation that changes shape or strides
returns a new descriptor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .._config import RANK_CAP


def pad_shape(ndim: int, shape: Sequence[int]) -> Tuple[int, ...]:
    """
    Right-align a shape into ``RANK_CAP`` slots.

    Parameters
    ----------
    ndim : int
        Logical rank, ``1 <= ndim <= RANK_CAP``.
    shape : Sequence[int]
        Either ``ndim`` extents, or ``RANK_CAP`` already padded extents (in
        which case only the trailing ``ndim`` slots are kept).

    Returns
    -------
    tuple[int, ...]
        ``RANK_CAP`` extents with the leading ``RANK_CAP - ndim`` slots set to 1.

    Raises
    ------
    ValueError
        If `ndim` is out of range, the number of extents matches neither
        form, or an extent is negative.
    """
    if not 1 <= ndim <= RANK_CAP:
        raise ValueError(f"ndim must be in [1, {RANK_CAP}], got {ndim}")
    shape = tuple(int(s) for s in shape)
    if len(shape) == RANK_CAP:
        logical = shape[RANK_CAP - ndim :]
    elif len(shape) == ndim:
        logical = shape
    else:
        raise ValueError(
            f"expected {ndim} or {RANK_CAP} extents, got {len(shape)}: {shape}"
        )
    if any(s < 0 for s in logical):
        raise ValueError(f"negative extent in shape {logical}")
    return (1,) * (RANK_CAP - ndim) + logical


def dense_strides(ndim: int, padded_shape: Sequence[int]) -> Tuple[int, ...]:
    """
    Row-major element strides for a padded shape.

    The rightmost slot has stride 1 and each slot to its left has the stride
    of its right neighbour times that neighbour's extent. Slots outside the
    logical rank get stride 0.
    """
    strides = [0] * RANK_CAP
    step = 1
    for slot in range(RANK_CAP - 1, RANK_CAP - ndim - 1, -1):
        strides[slot] = step
        step *= padded_shape[slot]
    return tuple(strides)


@dataclass(frozen=True)
class Descriptor:
    """
    Shape and stride slots of an array, exactly ``RANK_CAP`` each.

    Attributes
    ----------
    shape : tuple[int, ...]
        Per-slot extents, right-aligned.
    strides : tuple[int, ...]
        Per-slot element steps, right-aligned.
    """

    shape: Tuple[int, ...]
    strides: Tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.shape) != RANK_CAP or len(self.strides) != RANK_CAP:
            raise ValueError(
                f"descriptor needs {RANK_CAP} shape and stride slots, got "
                f"{len(self.shape)} and {len(self.strides)}"
            )
        if any(s < 0 for s in self.shape):
            raise ValueError(f"negative extent in shape {self.shape}")

    @classmethod
    def dense(cls, ndim: int, shape: Sequence[int]) -> "Descriptor":
        """
        Build the row-major descriptor of a shape.

        Parameters
        ----------
        ndim : int
            Logical rank.
        shape : Sequence[int]
            ``ndim`` or ``RANK_CAP`` extents (see :func:`pad_shape`).
        """
        padded = pad_shape(ndim, shape)
        return cls(padded, dense_strides(ndim, padded))

    @property
    def numel(self) -> int:
        """Total element count, the product of every slot."""
        n = 1
        for s in self.shape:
            n *= s
        return n

    def logical_shape(self, ndim: int) -> Tuple[int, ...]:
        return self.shape[RANK_CAP - ndim :]

    def logical_strides(self, ndim: int) -> Tuple[int, ...]:
        return self.strides[RANK_CAP - ndim :]

    def is_dense(self, ndim: int) -> bool:
        """
        Return True if the logical strides are the row-major strides.

        Axes of extent 1 never move the traversal, so their stride is not
        compared.
        """
        expected = dense_strides(ndim, self.shape)
        for slot in range(RANK_CAP - ndim, RANK_CAP):
            if self.shape[slot] > 1 and self.strides[slot] != expected[slot]:
                return False
        return True

    def with_slot(self, slot: int, extent: int, stride: int) -> "Descriptor":
        """Return a copy with one slot's extent and stride replaced."""
        shape = list(self.shape)
        strides = list(self.strides)
        shape[slot] = extent
        strides[slot] = stride
        return Descriptor(tuple(shape), tuple(strides))

    def span(self, offset: int) -> Tuple[int, int]:
        """
        Lowest and highest buffer positions reachable from `offset`.

        Only meaningful for a non-empty descriptor.
        """
        low = high = offset
        for extent, stride in zip(self.shape, self.strides):
            reach = (extent - 1) * stride
            if reach < 0:
                low += reach
            else:
                high += reach
        return low, high

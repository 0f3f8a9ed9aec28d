"""
Array interface definitions.

This module defines the domain-level interface for strided, typed,
fixed-rank arrays using structural typing. The interface captures the
descriptor-level properties every kernel relies on (dtype, rank, shape,
strides, offset) and the public reduction / transform surface, without
depending on a concrete storage backend.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Union, runtime_checkable

from ._dtype import DType

Number = Union[int, float, bool]


@runtime_checkable
class IArray(Protocol):
    """
    Array interface.

    An `IArray` is a view over a flat element buffer described by a fixed
    number of right-aligned shape/stride slots plus a starting offset.
    Several arrays may describe the same buffer (views).

    Notes
    -----
    - Strides are expressed in elements, not bytes, and may be negative.
    - ``shape`` and ``strides`` report the *logical* axes only; the padded
      per-slot form is available through the concrete implementation's
      descriptor.
    """

    # ---------------------------------------------------------------------
    # Descriptor
    # ---------------------------------------------------------------------
    @property
    def dtype(self) -> DType:
        """
        Return the storage element kind of the array.

        Returns
        -------
        DType
            A storage dtype (never ``DType.BOOL``).
        """
        ...

    @property
    def boolean(self) -> bool:
        """
        Return True if the array holds logical (True/False) values.
        """
        ...

    @property
    def itemsize(self) -> int:
        """
        Return the byte width of one element.
        """
        ...

    @property
    def ndim(self) -> int:
        """
        Return the logical rank of the array.
        """
        ...

    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the logical per-axis extents.
        """
        ...

    @property
    def strides(self) -> tuple[int, ...]:
        """
        Return the logical per-axis element steps.
        """
        ...

    @property
    def size(self) -> int:
        """
        Return the total number of elements.
        """
        ...

    @property
    def offset(self) -> int:
        """
        Return the buffer position of the first element.
        """
        ...

    @property
    def dense(self) -> bool:
        """
        Return True if the strides are the row-major strides of the shape.
        """
        ...

    # ---------------------------------------------------------------------
    # Host interop
    # ---------------------------------------------------------------------
    def tolist(self) -> Any:
        """
        Return the elements as nested Python lists of scalars.
        """
        ...

    def to_numpy(self) -> Any:
        """
        Return a dense backend-native copy of the array.
        """
        ...

    def copy(self) -> "IArray":
        """
        Return a dense copy with the same shape and dtype.
        """
        ...

    # ---------------------------------------------------------------------
    # Reductions
    # ---------------------------------------------------------------------
    def sum(self, axis: Optional[int] = None) -> Union["IArray", Number]:
        """
        Sum elements over the flattened array or along one axis.
        """
        ...

    def mean(self, axis: Optional[int] = None) -> Union["IArray", float]:
        """
        Arithmetic mean over the flattened array or along one axis.
        """
        ...

    def std(
        self, axis: Optional[int] = None, ddof: int = 0
    ) -> Union["IArray", float]:
        """
        Standard deviation over the flattened array or along one axis.
        """
        ...

    def min(self, axis: Optional[int] = None) -> Union["IArray", Number]:
        """
        Smallest element over the flattened array or along one axis.
        """
        ...

    def max(self, axis: Optional[int] = None) -> Union["IArray", Number]:
        """
        Largest element over the flattened array or along one axis.
        """
        ...

    def argmin(self, axis: Optional[int] = None) -> Union["IArray", int]:
        """
        Position of the first smallest element.
        """
        ...

    def argmax(self, axis: Optional[int] = None) -> Union["IArray", int]:
        """
        Position of the first largest element.
        """
        ...

    # ---------------------------------------------------------------------
    # Shape transforms
    # ---------------------------------------------------------------------
    def diff(self, n: int = 1, axis: int = -1) -> "IArray":
        """
        n-th order finite difference along one axis.
        """
        ...

    def flip(self, axis: Optional[int] = None) -> "IArray":
        """
        Reverse element order along one axis, or over the flattened array.
        """
        ...

    def roll(self, distance: int, axis: Optional[int] = None) -> "IArray":
        """
        Circularly shift elements along one axis, or over the flattened array.
        """
        ...

"""
Reduction mixin defining the public NDArray reduction API.

This module declares :class:`ArrayMixinReduction`, an abstract mixin that
specifies the *interface and semantics* of the axis reductions (`sum`,
`mean`, `std`, `min`, `max`, `argmin`, `argmax`).

The mixin itself does not implement any numerical logic. Concrete kernels
are registered per storage dtype via the control-path dispatch mechanism,
so the NDArray class exposes a single, stable API while the element-type
specific behavior (e.g., integer wrap-around in `sum`) lives with each
kernel.
"""

from typing import Optional, Union
from abc import ABC

from .....domain._array import IArray, Number


class ArrayMixinReduction(ABC):
    """
    Abstract mixin defining reduction operations for arrays.

    Shared semantics
    ----------------
    - ``axis=None`` folds over every element in traversal order and returns
      a bare scalar.
    - An integer axis in ``[-ndim, ndim)`` folds along that axis. The result
      has ``max(1, ndim - 1)`` dimensions; a result with exactly one element
      is returned as a bare scalar instead.
    - A non-integer axis raises ``TypeError``; an out-of-range axis raises
      ``AxisError`` (a ``ValueError``).

    Notes
    -----
    Methods defined here are *pure interface declarations*; they are
    replaced by dtype-dispatching wrappers when the kernels register.
    """

    def sum(self: IArray, axis: Optional[int] = None) -> Union[IArray, Number]:
        """
        Sum of the elements.

        Parameters
        ----------
        axis : Optional[int], optional
            Axis to reduce, or None for the flattened array.

        Returns
        -------
        IArray or scalar
            Sums in the source dtype. Integer sums wrap around the dtype's
            range, exactly as an accumulator of that dtype would.
        """

    def mean(self: IArray, axis: Optional[int] = None) -> Union[IArray, float]:
        """
        Arithmetic mean, computed with a streaming (Welford) update.

        Returns
        -------
        IArray or float
            Means as ``DType.FLOAT``. The mean of zero elements is 0.0.
        """

    def std(
        self: IArray, axis: Optional[int] = None, ddof: int = 0
    ) -> Union[IArray, float]:
        """
        Standard deviation, computed with a streaming (Welford) update.

        Parameters
        ----------
        axis : Optional[int], optional
            Axis to reduce, or None for the flattened array.
        ddof : int, optional
            Delta degrees of freedom subtracted from the element count in the
            variance denominator. Must be a non-negative integer.

        Returns
        -------
        IArray or float
            ``sqrt(S / (count - ddof))`` where ``S`` is the sum of squared
            deviations; 0.0 when ``count <= ddof``.
        """

    def min(self: IArray, axis: Optional[int] = None) -> Union[IArray, Number]:
        """
        Smallest element, in the source dtype.

        Raises
        ------
        ValueError
            If the array is empty.
        """

    def max(self: IArray, axis: Optional[int] = None) -> Union[IArray, Number]:
        """
        Largest element, in the source dtype.

        Raises
        ------
        ValueError
            If the array is empty.
        """

    def argmin(self: IArray, axis: Optional[int] = None) -> Union[IArray, int]:
        """
        Position of the smallest element; ties keep the first position.

        Returns
        -------
        IArray or int
            ``DType.UINT16`` positions along the axis, or the flat traversal
            index when ``axis`` is None.

        Raises
        ------
        ValueError
            If the array is empty or the reduced axis has more than 65535
            elements.
        """

    def argmax(self: IArray, axis: Optional[int] = None) -> Union[IArray, int]:
        """
        Position of the largest element; ties keep the first position.

        See :meth:`argmin` for result and error semantics.
        """

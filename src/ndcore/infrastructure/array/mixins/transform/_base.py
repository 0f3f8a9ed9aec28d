"""
Transform mixin defining the public NDArray shape-transform API.

This module declares :class:`ArrayMixinTransform`, an abstract mixin for
the operations that rearrange or difference elements without folding an
axis away: `diff`, `flip` and `roll`.

As with reductions, the numerical logic is provided by kernels registered
per storage dtype through the control-path dispatch mechanism.
"""

from typing import Optional
from abc import ABC

from .....domain._array import IArray


class ArrayMixinTransform(ABC):
    """
    Abstract mixin defining shape-transform operations for arrays.

    Notes
    -----
    - `diff` and `roll` always return freshly allocated dense arrays.
    - `flip` along an axis returns a zero-copy view sharing the source
      buffer; flipping the flattened array returns a rank-1 copy.
    """

    def diff(self: IArray, n: int = 1, axis: int = -1) -> IArray:
        """
        n-th order finite difference along one axis.

        Each output element is ``sum_i stencil[i] * x[k + n - i]`` along the axis,
        with the binomial stencil ``stencil[0] = 1``,
        ``stencil[i] = -stencil[i-1] * (n - i + 1) / i``.

        Parameters
        ----------
        n : int, optional
            Differentiation order, ``0 <= n <= 9`` and smaller than the
            axis' extent. Defaults to 1.
        axis : int, optional
            Axis to difference along. Defaults to -1.

        Returns
        -------
        IArray
            Same dtype and rank; the chosen axis shrinks by `n`. Integer
            results wrap around the dtype's range.

        Raises
        ------
        TypeError
            If `n` or `axis` is not an integer.
        ValueError
            If `n` is out of range (or `axis` is, as ``AxisError``).
        """

    def flip(self: IArray, axis: Optional[int] = None) -> IArray:
        """
        Reverse the element order.

        Parameters
        ----------
        axis : Optional[int], optional
            Axis to reverse, or None to reverse the flattened array.

        Returns
        -------
        IArray
            With an axis: a view whose stride on that axis is negated and
            whose offset points at the last position along it. With None: a
            rank-1 dense copy read back to front.
        """

    def roll(self: IArray, distance: int, axis: Optional[int] = None) -> IArray:
        """
        Circularly shift elements by `distance` positions.

        Parameters
        ----------
        distance : int
            Signed shift; positive moves elements towards higher indices.
        axis : Optional[int], optional
            Axis to roll along, or None to roll the flattened array (the
            shape is preserved).

        Returns
        -------
        IArray
            A new dense array of the same shape and dtype.
        """

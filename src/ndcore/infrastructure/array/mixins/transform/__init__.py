"""
Shape-transform mixins and their per-dtype implementations.

This package aggregates the NDArray operations that rearrange or
difference elements without folding an axis away:

- ``diff`` : n-th order finite difference along one axis
- ``flip`` : reversal, as a view along an axis
- ``roll`` : circular shift

As with the reductions, each kernel is registered through the control-path
dispatch mechanism keyed on the array's dtype.

Public API
----------
- ``ArrayMixinTransform``
"""

from ._array_diff import *
from ._array_flip import *
from ._array_roll import *
from ._base import ArrayMixinTransform

__all__ = [
    ArrayMixinTransform.__name__,
]

"""
Reduction mixins and dtype-specific implementations for NDArray operations.

This package aggregates reduction-related NDArray mixins and their concrete
control-path implementations, including:

- ``sum``                : summation (narrow accumulator for integers)
- ``mean`` / ``std``     : streaming (Welford) statistics
- ``min`` / ``max``      : extreme values
- ``argmin`` / ``argmax``: positions of extreme values

Each reduction is implemented using the control-path dispatch mechanism,
keyed on the array's dtype, while exposing a single public API on the
NDArray class.

Public API
----------
Only the base mixin class is exported as part of the public interface:

- ``ArrayMixinReduction``

The concrete implementations (e.g., ``_array_sum``, ``_array_mean_std``,
``_array_extrema``) are imported for side effects so that their control
paths are registered, but they are not intended to be used directly.
"""

from ._array_sum import *
from ._array_mean_std import *
from ._array_extrema import *
from ._base import ArrayMixinReduction

__all__ = [
    ArrayMixinReduction.__name__,
]

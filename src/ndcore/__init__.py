"""
ndcore: a fixed-rank strided array engine with reductions and shape transforms.

The names exported here are the functional surface of the engine. Note that
`sum`, `min` and `max` shadow the builtins when star-imported.
"""

from .domain._dtype import DType
from .domain._errors import AllocationError, AxisError, DTypeNotSupportedError
from .infrastructure._config import RANK_CAP
from .infrastructure.array import NDArray
from .infrastructure._numerical import (
    argmax,
    argmin,
    array,
    diff,
    flip,
    max,
    mean,
    min,
    roll,
    std,
    sum,
    zeros,
)

__all__ = [
    "DType",
    "NDArray",
    "RANK_CAP",
    "AllocationError",
    "AxisError",
    "DTypeNotSupportedError",
    "argmax",
    "argmin",
    "array",
    "diff",
    "flip",
    "max",
    "mean",
    "min",
    "roll",
    "std",
    "sum",
    "zeros",
]

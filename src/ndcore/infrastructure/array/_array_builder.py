"""
Array control-path manager for dtype-specific dispatch.

This module defines the shared control-path manager used to register and
resolve dtype-specific implementations of NDArray methods.

The manager is created by specializing the generic `create_path_builder`
utility with the state attribute name ``"dtype"``. Method dispatch is
therefore performed on the runtime value of ``self.dtype``.

Typical usage
-------------
Kernels register one control path per storage dtype they support:

    @array_control_path_manager(ArrayMixin, ArrayMixin.op, DType.UINT8, trap)
    @array_control_path_manager(ArrayMixin, ArrayMixin.op, DType.FLOAT, trap)
    def op_kernel(self, ...): ...

At runtime, calling ``NDArray.op(...)`` dispatches to the implementation
registered for ``self.dtype``; a dtype with no registered kernel raises
:class:`DTypeNotSupportedError` through :func:`dtype_trap`.
"""

from ...domain._errors import DTypeNotSupportedError
from ...domain.utils._control_path import create_path_builder

# Control-path manager that dispatches NDArray methods based on `self.dtype`
array_control_path_manager = create_path_builder("dtype")


def dtype_trap(op: str, dtype: object) -> DTypeNotSupportedError:
    """Build the error raised when no kernel matches an array's dtype."""
    return DTypeNotSupportedError(op, dtype)

"""
Array-engine exceptions for ndcore.

This module defines the custom errors raised by the array engine. Each one
derives from the built-in exception a caller would naturally catch for that
category (``MemoryError``, ``ValueError``, ``NotImplementedError``), so code
written against plain Python exceptions keeps working.

All of these are input-contract violations or resource failures reported
synchronously; none of them is retried.
"""


class AllocationError(MemoryError):
    """
    Raised when the dense allocator cannot obtain storage for an array.

    Attributes
    ----------
    count : int
        Number of elements requested.
    dtype : str
        Name of the requested element type.
    """

    def __init__(self, count: int, dtype: str) -> None:
        """
        Initialize the AllocationError.

        Parameters
        ----------
        count : int
            Number of elements that could not be allocated.
        dtype : str
            Element type of the failed allocation.
        """
        super().__init__(f"cannot allocate {count} elements of dtype {dtype}")
        self.count = count
        self.dtype = dtype


class AxisError(ValueError, IndexError):
    """
    Raised when an integer axis falls outside ``[-ndim, ndim)``.

    The class inherits from both ``ValueError`` and ``IndexError`` so callers
    may treat an out-of-range axis either as a bad value or as a bad index.

    Attributes
    ----------
    axis : int
        The axis as supplied by the caller.
    ndim : int
        Rank of the array the axis was applied to.
    """

    def __init__(self, axis: int, ndim: int) -> None:
        super().__init__("index out of range")
        self.axis = axis
        self.ndim = ndim


class DTypeNotSupportedError(NotImplementedError):
    """
    Raised when an operation has no kernel registered for an array's dtype.

    Valid inputs never reach this error; it signals a gap in the kernel
    dispatch table (for example, an operation invoked on the logical
    ``BOOL`` kind, which is never a storage dtype).

    Attributes
    ----------
    op : str
        Name of the operation that was attempted (e.g., "sum", "diff").
    dtype : str
        String form of the dtype the operation was attempted on.
    """

    def __init__(self, op: str, dtype: object) -> None:
        """
        Initialize the DTypeNotSupportedError.

        Parameters
        ----------
        op : str
            The operation name that is not supported for the dtype.
        dtype : object
            The dtype (or dtype description) of the operand.
        """
        super().__init__(f"{op} is not implemented for dtype '{dtype}'.")
        self.op = op
        self.dtype = str(dtype)

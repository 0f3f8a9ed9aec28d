"""
Shared element buffers and their lifetime management.

This module defines `_BufferStorage`, a reference-counted wrapper around one
flat NumPy buffer. Arrays never own element memory directly; they hold a
reference to a storage object and describe a window onto it with a
descriptor and an offset.

Core Concepts
-------------
- **Shared ownership**:
    A freshly allocated array and every view derived from it (flip, etc.)
    reference the same storage. Each referencing array increments the count
    on construction and decrements it when it is garbage-collected, so the
    buffer is released only after its last holder is gone.

- **Deterministic release**:
    When the count drops to zero the buffer reference is dropped and the
    storage is marked released. Any later access raises `RuntimeError`
    instead of reading freed memory.

- **Checked access**:
    `read` / `write` translate a buffer position into an element access and
    check it against the buffer length when bounds checking is enabled.

Design Notes
------------
- `_BufferStorage` intentionally avoids defining `__del__`; arrays attach a
  `weakref.finalize` callback instead (see `NDArray`).
- The storage does not impose layout, stride, or shape semantics; these
  remain the responsibility of the array descriptor.
- Execution is single-threaded, so reference counts are not locked.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from .._config import settings


@dataclass(eq=False)
class _BufferStorage:
    """
    Reference-counted wrapper around a flat element buffer.

    Ownership semantics
    -------------------
    - The storage starts with a reference count of zero; every array that
      references it calls `incref` once.
    - When `_refcnt` returns to zero, the NumPy buffer is dropped and the
      storage becomes invalid.

    Notes
    -----
    - `data` is always one-dimensional and C-contiguous.
    """

    data: Optional[np.ndarray]
    bounds_check: bool = settings.bounds_check

    _refcnt: int = 0

    @property
    def refcount(self) -> int:
        """Number of arrays currently referencing this storage."""
        return self._refcnt

    @property
    def released(self) -> bool:
        return self.data is None

    def __len__(self) -> int:
        return 0 if self.data is None else int(self.data.shape[0])

    def incref(self) -> None:
        """
        Increment the storage reference count.

        Raises
        ------
        RuntimeError
            If the storage has already been released.
        """
        if self.data is None:
            raise RuntimeError("cannot reference a released buffer")
        self._refcnt += 1

    def decref(self) -> None:
        """
        Decrement the reference count and release the buffer at zero.

        Calls after release are ignored.
        """
        if self._refcnt == 0:
            return
        self._refcnt -= 1
        if self._refcnt == 0:
            self.data = None

    def _buffer(self) -> np.ndarray:
        if self.data is None:
            raise RuntimeError("buffer has been released")
        return self.data

    def _check(self, buf: np.ndarray, pos: int) -> None:
        if self.bounds_check and not 0 <= pos < buf.shape[0]:
            raise IndexError(
                f"buffer position {pos} outside [0, {buf.shape[0]})"
            )

    def read(self, pos: int) -> Union[int, float]:
        """
        Return the element at buffer position `pos` as a Python scalar.
        """
        buf = self._buffer()
        self._check(buf, pos)
        return buf[pos].item()

    def write(self, pos: int, value: Union[int, float]) -> None:
        """
        Store `value` at buffer position `pos`.

        The value must already be representable in the buffer dtype.
        """
        buf = self._buffer()
        self._check(buf, pos)
        buf[pos] = value

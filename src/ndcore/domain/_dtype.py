"""
Element type descriptors for ndcore arrays.

This module defines :class:`DType`, the enumeration of element kinds an
array may carry. It mirrors the typecodes of the Python ``array`` module
so that dtypes can be named the same way on both sides of a host boundary.

The enumeration is backend-agnostic: mapping a dtype onto a concrete
storage type (e.g., a NumPy dtype) is the responsibility of the
infrastructure layer.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class DType(Enum):
    """
    Enumeration of array element kinds.

    Attributes
    ----------
    BOOL : DType
        Logical kind. Never used as a storage dtype: boolean arrays are
        stored as ``UINT8`` and carry a separate ``boolean`` flag.
    UINT8, INT8, UINT16, INT16 : DType
        Narrow integer storage kinds.
    FLOAT : DType
        Floating-point storage kind. Its width is a configuration choice
        (single or double precision).
    """

    BOOL = "?"
    UINT8 = "B"
    INT8 = "b"
    UINT16 = "H"
    INT16 = "h"
    FLOAT = "float"

    @property
    def typecode(self) -> str:
        """
        Return the nominal ``array``-module style typecode for this dtype.

        ``FLOAT`` always reports ``"f"`` here because its width is not known
        at the domain level. The width actually in use (``"d"`` under the
        default configuration) is what ``NDArray.typecode`` reports.
        """
        return "f" if self is DType.FLOAT else self.value

    def is_integer(self) -> bool:
        return self in (DType.UINT8, DType.INT8, DType.UINT16, DType.INT16)

    def is_storage(self) -> bool:
        """Return True if arrays may store elements of this kind directly."""
        return self is not DType.BOOL

    @classmethod
    def parse(cls, value: Any) -> "DType":
        """
        Normalize a user-facing dtype designation into a :class:`DType`.

        Parameters
        ----------
        value : Any
            A ``DType`` member, a typecode (``"B"``, ``"b"``, ``"H"``, ``"h"``,
            ``"f"``, ``"d"``, ``"?"``), or a dtype name such as ``"uint8"``,
            ``"int16"``, ``"float"``, ``"float32"``, ``"float64"``, ``"bool"``.
            Objects with a ``name`` attribute (NumPy dtypes) are looked up by
            that name.

        Returns
        -------
        DType
            The matching dtype.

        Raises
        ------
        TypeError
            If `value` does not name a supported dtype.
        """
        if isinstance(value, DType):
            return value
        if value is bool:
            return DType.BOOL
        if value is float:
            return DType.FLOAT

        name = getattr(value, "name", value)
        if isinstance(name, str):
            found = _ALIASES.get(name) or _ALIASES.get(name.lower())
            if found is not None:
                return found

        raise TypeError(f"unsupported dtype {value!r}")


_ALIASES = {
    "?": DType.BOOL,
    "bool": DType.BOOL,
    "B": DType.UINT8,
    "uint8": DType.UINT8,
    "b": DType.INT8,
    "int8": DType.INT8,
    "H": DType.UINT16,
    "uint16": DType.UINT16,
    "h": DType.INT16,
    "int16": DType.INT16,
    "f": DType.FLOAT,
    "d": DType.FLOAT,
    "float": DType.FLOAT,
    "float32": DType.FLOAT,
    "float64": DType.FLOAT,
}

"""
Environment-driven configuration for the ndcore array engine.

Settings are read once, at import time, from ``NDCORE_*`` environment
variables. They describe properties that behave like build-time constants
for the rest of the engine (the rank cap, the floating-point width) plus a
few diagnostics toggles.

Variables
---------
NDCORE_MAX_DIMS
    Rank cap (maximum number of axes). Integer in ``[1, 8]``; default ``4``.
NDCORE_FLOAT_TYPECODE
    ``"d"`` for double precision (default) or ``"f"`` for single precision.
NDCORE_BOUNDS_CHECK
    Bounds-check every element access against the backing buffer.
    Default on.
NDCORE_WARN_OVERFLOW
    Emit a ``RuntimeWarning`` when an integer sum wraps around its dtype.
    Default on.

Boolean variables treat ``"0"``, ``""`` and ``"false"`` (any case) as off.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional
import os

_FALSY = ("0", "", "false")
_MAX_RANK_CAP = 8


def _parse_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in _FALSY


@dataclass(frozen=True)
class Settings:
    """
    Immutable engine settings.

    Attributes
    ----------
    max_dims : int
        Rank cap: the number of shape/stride slots in every descriptor.
    float_typecode : str
        ``"d"`` (float64) or ``"f"`` (float32).
    bounds_check : bool
        Whether element reads/writes are checked against the buffer length.
    warn_overflow : bool
        Whether wrapped integer sums emit a ``RuntimeWarning``.
    """

    max_dims: int = 4
    float_typecode: str = "d"
    bounds_check: bool = True
    warn_overflow: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Parameters
        ----------
        environ : Optional[Mapping[str, str]]
            Mapping to read from. Defaults to ``os.environ``.

        Returns
        -------
        Settings
            Parsed settings.

        Raises
        ------
        ValueError
            If a variable holds an unsupported value.
        """
        if environ is None:
            environ = os.environ

        raw_dims = environ.get("NDCORE_MAX_DIMS", "4").strip()
        try:
            max_dims = int(raw_dims)
        except ValueError:
            raise ValueError(
                f"NDCORE_MAX_DIMS must be an integer, got {raw_dims!r}"
            ) from None
        if not 1 <= max_dims <= _MAX_RANK_CAP:
            raise ValueError(
                f"NDCORE_MAX_DIMS must be in [1, {_MAX_RANK_CAP}], got {max_dims}"
            )

        float_typecode = environ.get("NDCORE_FLOAT_TYPECODE", "d").strip()
        if float_typecode not in ("f", "d"):
            raise ValueError(
                f"NDCORE_FLOAT_TYPECODE must be 'f' or 'd', got {float_typecode!r}"
            )

        return cls(
            max_dims=max_dims,
            float_typecode=float_typecode,
            bounds_check=_parse_flag(environ, "NDCORE_BOUNDS_CHECK", True),
            warn_overflow=_parse_flag(environ, "NDCORE_WARN_OVERFLOW", True),
        )


settings = Settings.from_env()

# Rank cap shared by every descriptor in the process.
RANK_CAP = settings.max_dims

"""
Element-type agnostic folds shared by the reduction kernels.

Each fold consumes an iterable of plain Python scalars, so the same code
serves a strided lane of an array, a whole flattened array, and the
linear-scan fallback for host sequences.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Iterable, NamedTuple, Optional, Tuple


class Moments(NamedTuple):
    """
    Running statistics produced by :func:`welford`.

    Attributes
    ----------
    count : int
        Number of values consumed.
    mean : float
        Running mean (0.0 when `count` is 0).
    m2 : float
        Running sum of squared deviations from the mean.
    """

    count: int
    mean: float
    m2: float


def welford(values: Iterable[Any], convert: Callable[[Any], float] = float) -> Moments:
    """
    Single-pass, numerically stable mean and sum of squared deviations.

    For each value ``v`` at 1-based count ``c``::

        m' = m + (v - m) / c
        s' = s + (v - m) * (v - m')
    """
    count = 0
    mean = 0.0
    m2 = 0.0
    for item in values:
        value = convert(item)
        count += 1
        delta = value - mean
        mean += delta / count
        m2 += delta * (value - mean)
    return Moments(count, mean, m2)


def standard_deviation(moments: Moments, ddof: int) -> float:
    """
    Standard deviation from running moments.

    Returns ``sqrt(m2 / (count - ddof))``, or 0.0 when ``count <= ddof``.
    """
    if moments.count <= ddof:
        return 0.0
    return math.sqrt(moments.m2 / (moments.count - ddof))


def extreme(
    values: Iterable[Any],
    largest: bool,
    key: Optional[Callable[[Any], Any]] = None,
) -> Tuple[int, Any]:
    """
    Index and value of the first smallest (or largest) element.

    Parameters
    ----------
    values : Iterable[Any]
        Values to scan; must not be empty.
    largest : bool
        Track the maximum instead of the minimum.
    key : Callable, optional
        Applied to each value before comparison (the returned value is the
        original item).

    Returns
    -------
    tuple[int, Any]
        ``(index, value)``; ties keep the earliest index.

    Raises
    ------
    ValueError
        If `values` is empty.
    """
    it = iter(values)
    try:
        best = next(it)
    except StopIteration:
        raise ValueError("extreme of an empty sequence") from None
    best_key = best if key is None else key(best)
    best_idx = 0
    for idx, item in enumerate(it, start=1):
        item_key = item if key is None else key(item)
        if (item_key > best_key) if largest else (item_key < best_key):
            best, best_key, best_idx = item, item_key, idx
    return best_idx, best

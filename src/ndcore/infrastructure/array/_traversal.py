"""
Rank-generic strided traversal.

Every kernel in the engine walks its operands with the same scheme: a
fixed-length vector of per-axis counters (one per descriptor slot) that is
advanced like an odometer. Advancing increments the innermost counter; when
a counter reaches its extent it is reset and the next-outer counter is
incremented (a carry). Traversal ends when the outermost counter carries.

Buffer positions are maintained incrementally rather than recomputed from
the index tuple: moving one step along an axis adds that axis' stride, and
a carry rewinds the axis by ``stride * (extent - 1)`` before the outer axis
advances. Slots of extent 1 (the unused leading slots of a lower-rank
array) never advance, so one routine serves every rank up to the cap.
"""

from __future__ import annotations

from typing import Iterator, List, Sequence, Tuple

Layout = Tuple[Sequence[int], int]
"""A ``(strides, offset)`` pair describing where one operand's elements live."""


class IndexCounter:
    """
    Odometer-style index vector over a fixed number of slots.

    Parameters
    ----------
    shape : Sequence[int]
        Extent of each slot. A zero extent makes the counter start exhausted.

    Attributes
    ----------
    index : list[int]
        Current index per slot.
    exhausted : bool
        True once every index tuple has been visited.
    """

    def __init__(self, shape: Sequence[int]) -> None:
        self._shape = tuple(shape)
        self.index: List[int] = [0] * len(self._shape)
        self.exhausted = any(extent == 0 for extent in self._shape)

    def advance(self) -> int:
        """
        Move to the next index tuple in lexicographic order.

        Returns
        -------
        int
            The slot that was incremented (the outermost slot touched by the
            carry chain), or ``-1`` once the counter is exhausted.
        """
        if self.exhausted:
            return -1
        for slot in range(len(self._shape) - 1, -1, -1):
            self.index[slot] += 1
            if self.index[slot] < self._shape[slot]:
                return slot
            self.index[slot] = 0
        self.exhausted = True
        return -1


def walk(shape: Sequence[int], *layouts: Layout) -> Iterator[Tuple[int, ...]]:
    """
    Visit every index tuple of `shape`, yielding one buffer position per layout.

    All layouts are advanced in lock-step over the same index space, which
    is how a kernel pairs a source element with its destination slot.

    Parameters
    ----------
    shape : Sequence[int]
        Extents of the index space (normally ``RANK_CAP`` slots).
    *layouts : tuple[Sequence[int], int]
        ``(strides, offset)`` for each operand; strides must have one entry
        per slot of `shape`.

    Yields
    ------
    tuple[int, ...]
        Buffer positions, one per layout, in lexicographic index order.
    """
    shape = tuple(shape)
    strides = [tuple(layout[0]) for layout in layouts]
    positions = [layout[1] for layout in layouts]

    counter = IndexCounter(shape)
    while not counter.exhausted:
        yield tuple(positions)

        slot = counter.advance()
        if slot < 0:
            return
        # Rewind every slot the carry passed through, then step the slot
        # that absorbed it.
        for k, st in enumerate(strides):
            pos = positions[k]
            for rewound in range(slot + 1, len(shape)):
                pos -= st[rewound] * (shape[rewound] - 1)
            positions[k] = pos + st[slot]


def lane(start: int, stride: int, extent: int) -> List[int]:
    """Buffer positions of `extent` elements spaced `stride` apart."""
    return [start + i * stride for i in range(extent)]

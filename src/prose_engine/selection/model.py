"""Anchored, directional index selections and their step reducers."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal, Optional, Tuple

Direction = Literal["left", "right"]


@dataclass(frozen=True, slots=True)
class IndexSelection:
    """Word or sentence index range.

    ``start`` is the anchor, ``end`` the moving edge, ``direction`` the way the
    selection was first extended.
    """

    start: int
    end: int
    direction: Direction

    @property
    def low(self) -> int:
        return min(self.start, self.end)

    @property
    def high(self) -> int:
        return max(self.start, self.end)

    @property
    def span(self) -> Tuple[int, int]:
        return (self.low, self.high)

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.low <= index <= self.high

    def shifted(self, delta: int) -> "IndexSelection":
        return replace(self, start=self.start + delta, end=self.end + delta)


def begin(anchor: int, direction: Direction) -> IndexSelection:
    return IndexSelection(start=anchor, end=anchor, direction=direction)


def step(
    previous: IndexSelection, direction: Direction, count: int
) -> Optional[IndexSelection]:
    """Move the extending edge one unit in ``direction``.

    Crossing back over the anchor against the recorded direction deselects
    entirely; running off either end of ``[0, count - 1]`` holds.
    """

    delta = 1 if direction == "right" else -1
    new_end = previous.end + delta
    if previous.direction == "left" and direction == "right" and new_end > previous.start:
        return None
    if previous.direction == "right" and direction == "left" and new_end < previous.start:
        return None
    if new_end < 0 or new_end >= count:
        return previous
    return replace(previous, end=new_end)


def extend(
    previous: Optional[IndexSelection],
    direction: Direction,
    *,
    anchor: int,
    count: int,
    blocked: bool = False,
) -> Optional[IndexSelection]:
    """Start a selection at ``anchor`` or step an existing one.

    ``blocked`` reports that there is nothing to select in ``direction`` from
    the cursor; it only matters when no selection exists yet.
    """

    if previous is None:
        if blocked or count <= 0:
            return None
        return begin(max(0, min(anchor, count - 1)), direction)
    return step(previous, direction, count)


__all__ = ["Direction", "IndexSelection", "begin", "extend", "step"]

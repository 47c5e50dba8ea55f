"""Ghost range translation across text splices."""

from __future__ import annotations

from typing import Iterable, Tuple

from .state import GhostRange, normalize_ghosts


def after_insert(
    ranges: Iterable[GhostRange], pos: int, length: int
) -> Tuple[GhostRange, ...]:
    """Shift ranges starting at or after ``pos``; ranges straddling it grow."""

    if length <= 0:
        return normalize_ghosts(ranges)
    moved: list[GhostRange] = []
    for start, end in ranges:
        if start >= pos:
            moved.append((start + length, end + length))
        elif end > pos:
            moved.append((start, end + length))
        else:
            moved.append((start, end))
    return normalize_ghosts(moved)


def after_delete(
    ranges: Iterable[GhostRange], start: int, end: int
) -> Tuple[GhostRange, ...]:
    """Collapse ``[start, end)`` out of every range, dropping emptied ones."""

    if end <= start:
        return normalize_ghosts(ranges)
    removed = end - start

    def carry(pos: int) -> int:
        if pos <= start:
            return pos
        if pos <= end:
            return start
        return pos - removed

    return normalize_ghosts((carry(a), carry(b)) for a, b in ranges)


def after_splice(
    ranges: Iterable[GhostRange], start: int, end: int, inserted: int
) -> Tuple[GhostRange, ...]:
    return after_insert(after_delete(ranges, start, end), start, inserted)


def covers(ranges: Iterable[GhostRange], pos: int) -> bool:
    return any(start <= pos < end for start, end in ranges)


__all__ = ["after_delete", "after_insert", "after_splice", "covers"]

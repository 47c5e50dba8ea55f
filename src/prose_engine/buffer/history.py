"""Snapshot-based undo/redo with typing batches."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Optional, Tuple

from prose_engine.runtime import telemetry

from .state import EditorState, GhostRange

Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class HistorySnapshot:
    text: str
    cursor: int
    ghost_ranges: Tuple[GhostRange, ...]
    committed: frozenset[int]

    @classmethod
    def capture(cls, state: EditorState) -> "HistorySnapshot":
        return cls(
            text=state.text,
            cursor=state.cursor,
            ghost_ranges=state.ghost_ranges,
            committed=state.committed,
        )

    def restore(self) -> EditorState:
        """Live state for this snapshot; selections never survive a restore."""

        return EditorState(
            text=self.text,
            cursor=self.cursor,
            committed=self.committed,
            ghost_ranges=self.ghost_ranges,
        )


class EditHistory:
    """Two bounded stacks of snapshots.

    A non-forced snapshot taken while a typing group is open and younger than
    ``batch_window`` seconds is absorbed into that group. Forced snapshots,
    undo and redo close the group.
    """

    def __init__(
        self,
        *,
        limit: int = 100,
        batch_window: float = 0.5,
        clock: Clock = time.monotonic,
        logger_name: str | None = None,
    ) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        self._undo: Deque[HistorySnapshot] = deque(maxlen=limit)
        self._redo: Deque[HistorySnapshot] = deque(maxlen=limit)
        self._limit = limit
        self._batch_window = batch_window
        self._clock = clock
        self._logger_name = logger_name
        self._group_started: Optional[float] = None

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
        self._group_started = None

    def snapshot_before_edit(self, state: EditorState, *, force: bool) -> bool:
        """Record ``state`` as the point to return to; False if absorbed."""

        now = self._clock()
        if (
            not force
            and self._group_started is not None
            and now - self._group_started < self._batch_window
        ):
            return False

        if len(self._undo) == self._limit:
            telemetry.record_event(
                "history.evict",
                level="debug",
                data={"limit": self._limit},
                logger_name=self._logger_name,
            )
        self._undo.append(HistorySnapshot.capture(state))
        self._redo.clear()
        self._group_started = None if force else now
        return True

    def undo(self, current: EditorState) -> Optional[EditorState]:
        if not self._undo:
            return None
        with telemetry.span(
            "history::undo",
            logger_name=self._logger_name,
            component="history",
            metadata={"depth": len(self._undo)},
        ):
            self._redo.append(HistorySnapshot.capture(current))
            self._group_started = None
            return self._undo.pop().restore()

    def redo(self, current: EditorState) -> Optional[EditorState]:
        if not self._redo:
            return None
        with telemetry.span(
            "history::redo",
            logger_name=self._logger_name,
            component="history",
            metadata={"depth": len(self._redo)},
        ):
            self._undo.append(HistorySnapshot.capture(current))
            self._group_started = None
            return self._redo.pop().restore()


__all__ = ["Clock", "EditHistory", "HistorySnapshot"]

"""The single authoritative editor state value."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Tuple

from prose_engine.document import DocumentAST, parse
from prose_engine.selection import IndexSelection

GhostRange = Tuple[int, int]  # (start, end), end exclusive


def normalize_ghosts(ranges: Iterable[GhostRange]) -> Tuple[GhostRange, ...]:
    """Sort, drop empty ranges and merge overlapping or touching ones."""

    merged: list[GhostRange] = []
    for start, end in sorted(r for r in ranges if r[1] > r[0]):
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return tuple(merged)


@dataclass(frozen=True, slots=True)
class EditorState:
    """Text buffer plus everything indexed against it.

    Instances are never mutated; every operation returns a replacement. The
    parse is derived from ``text`` and cached per instance.
    """

    text: str = ""
    cursor: int = 0
    word_selection: Optional[IndexSelection] = None
    sentence_selection: Optional[IndexSelection] = None
    committed: frozenset[int] = frozenset()
    ghost_ranges: Tuple[GhostRange, ...] = ()
    _ast: Optional[DocumentAST] = field(
        default=None, repr=False, compare=False, hash=False
    )

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        cursor: Optional[int] = None,
        committed: Iterable[int] = (),
    ) -> "EditorState":
        position = len(text) if cursor is None else max(0, min(cursor, len(text)))
        return cls(text=text, cursor=position, committed=frozenset(committed))

    @property
    def ast(self) -> DocumentAST:
        if self._ast is None or self._ast.text != self.text:
            object.__setattr__(self, "_ast", parse(self.text))
        return self._ast  # type: ignore[return-value]

    @property
    def has_selection(self) -> bool:
        return self.word_selection is not None or self.sentence_selection is not None

    def evolve(self, **changes: object) -> "EditorState":
        if "text" in changes and changes["text"] != self.text:
            changes.setdefault("_ast", None)
        return replace(self, **changes)  # type: ignore[arg-type]

    def without_selections(self) -> "EditorState":
        if not self.has_selection:
            return self
        return replace(self, word_selection=None, sentence_selection=None)

    def editable_fields(self) -> Tuple[str, int, Tuple[GhostRange, ...], frozenset[int]]:
        """The fields history snapshots capture and compare."""

        return (self.text, self.cursor, self.ghost_ranges, self.committed)


__all__ = ["EditorState", "GhostRange", "normalize_ghosts"]

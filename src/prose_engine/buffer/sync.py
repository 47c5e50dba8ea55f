"""Boundary types exchanged with presentation and persistence collaborators."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from prose_engine.document import DocumentAST, word_range_for
from prose_engine.selection import IndexSelection

from .state import EditorState, GhostRange

DEFAULT_SEPARATOR = " "


@dataclass(frozen=True, slots=True)
class HighlightSpan:
    start: int
    end: int
    selected: bool = False
    uncommitted: bool = False
    ghost: bool = False


@dataclass(frozen=True, slots=True)
class EditorMirror:
    """Read-only view of one editing session for renderers and debug tools."""

    text: str
    cursor: int
    word_selection: Optional[IndexSelection]
    sentence_selection: Optional[IndexSelection]
    committed: frozenset[int]
    ghost_ranges: Tuple[GhostRange, ...]
    ast: DocumentAST

    @classmethod
    def of(cls, state: EditorState) -> "EditorMirror":
        return cls(
            text=state.text,
            cursor=state.cursor,
            word_selection=state.word_selection,
            sentence_selection=state.sentence_selection,
            committed=state.committed,
            ghost_ranges=state.ghost_ranges,
            ast=state.ast,
        )

    def highlight_spans(self) -> List[HighlightSpan]:
        """Maximal runs of characters sharing the same highlight flags."""

        selected = [False] * len(self.text)
        if self.word_selection is not None and self.ast.words:
            start, end = word_range_for(self.ast, self.word_selection)
            selected[start:end] = [True] * (end - start)
        if self.sentence_selection is not None:
            for sentence in self.ast.sentences[
                self.sentence_selection.low : self.sentence_selection.high + 1
            ]:
                width = sentence.char_end - sentence.char_start
                selected[sentence.char_start : sentence.char_end] = [True] * width

        uncommitted = [False] * len(self.text)
        for sentence in self.ast.sentences:
            if sentence.index in self.committed:
                continue
            for token in sentence.tokens:
                width = token.char_end - token.char_start
                uncommitted[token.char_start : token.char_end] = [True] * width

        ghost = [False] * len(self.text)
        for start, end in self.ghost_ranges:
            ghost[start:end] = [True] * (end - start)

        spans: List[HighlightSpan] = []
        flags = list(zip(selected, uncommitted, ghost))
        pos = 0
        for key, run in itertools.groupby(flags):
            width = len(list(run))
            spans.append(HighlightSpan(pos, pos + width, *key))
            pos += width
        return spans

    def debug_payload(self) -> Dict[str, Any]:
        sentences = [
            {
                "index": sentence.index,
                "text": sentence.text_in(self.text),
                "range": [sentence.char_start, sentence.char_end],
                "committed": sentence.index in self.committed,
                "tokens": [
                    {
                        "type": token.kind,
                        "text": token.text,
                        "range": [token.char_start, token.char_end],
                    }
                    for token in sentence.tokens
                ],
            }
            for sentence in self.ast.sentences
        ]
        return {
            "cursor": self.cursor,
            "word_selection": _selection_payload(self.word_selection),
            "sentence_selection": _selection_payload(self.sentence_selection),
            "ghost_ranges": [list(r) for r in self.ghost_ranges],
            "ast": {
                "sentences": sentences,
                "word_count": self.ast.word_count,
                "sentence_count": self.ast.sentence_count,
                "committed_count": len(self.committed),
            },
        }


def _selection_payload(selection: Optional[IndexSelection]) -> Optional[Dict[str, Any]]:
    if selection is None:
        return None
    return {"start": selection.start, "end": selection.end, "direction": selection.direction}


@dataclass(frozen=True, slots=True)
class SentenceRecord:
    """Serializable editable unit handed to persistence.

    ``separator`` is the text written after the sentence. Left as ``None``
    it defaults to a single space between records and nothing after the
    last one; an explicit value is always written back verbatim.
    """

    text: str
    committed: bool = False
    separator: Optional[str] = None

    def separator_after(self, is_last: bool) -> str:
        if self.separator is not None:
            return self.separator
        return "" if is_last else DEFAULT_SEPARATOR

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"text": self.text, "committed": self.committed}
        if self.separator is not None:
            data["separator"] = self.separator
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SentenceRecord":
        separator = data.get("separator")
        return cls(
            text=str(data.get("text", "")),
            committed=bool(data.get("committed", False)),
            separator=None if separator is None else str(separator),
        )


def records_from_state(state: EditorState) -> List[SentenceRecord]:
    sentences = state.ast.sentences
    records: List[SentenceRecord] = []
    for index, sentence in enumerate(sentences):
        following = sentences[index + 1].char_start if index + 1 < len(sentences) else len(state.text)
        records.append(
            SentenceRecord(
                text=sentence.text_in(state.text),
                committed=sentence.index in state.committed,
                separator=state.text[sentence.char_end : following],
            )
        )
    return records


def state_from_records(records: Sequence[SentenceRecord]) -> EditorState:
    """Rebuild text and committed set; cursor goes to the end of the text."""

    last = len(records) - 1
    text = "".join(
        record.text + record.separator_after(position == last)
        for position, record in enumerate(records)
    )
    base = EditorState.from_text(text)
    committed = (
        index
        for index, record in enumerate(records)
        if record.committed and index < len(base.ast.sentences)
    )
    return base.evolve(committed=frozenset(committed))


class IdSequence:
    """Monotonic ``prefix-N`` identifiers, owned by whoever injects it."""

    def __init__(self, prefix: str = "fragment", *, start: int = 1) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)

    def next_id(self) -> str:
        return f"{self._prefix}-{next(self._counter)}"


@dataclass(frozen=True, slots=True)
class FragmentSnapshot:
    fragment_id: str
    sentences: Tuple[SentenceRecord, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.fragment_id,
            "sentences": [record.to_dict() for record in self.sentences],
        }


class EditorSync(Protocol):
    """How a persistence collaborator receives settled content."""

    def push_records(self, fragment: FragmentSnapshot) -> None:
        """Store the latest sentence records for one fragment."""
        ...


__all__ = [
    "DEFAULT_SEPARATOR",
    "EditorMirror",
    "EditorSync",
    "FragmentSnapshot",
    "HighlightSpan",
    "IdSequence",
    "SentenceRecord",
    "records_from_state",
    "state_from_records",
]

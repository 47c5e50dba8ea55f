"""Offset <-> word/sentence index queries over a parsed document.

Every query clamps instead of raising: an out-of-range index or an empty
document yields a degenerate but defined answer.
"""

from __future__ import annotations

from typing import Optional, Protocol, Tuple

from .models import DocumentAST, Sentence

CharRange = Tuple[int, int]


class IndexRange(Protocol):
    start: int
    end: int


def _ordered(selection: IndexRange) -> Tuple[int, int]:
    return min(selection.start, selection.end), max(selection.start, selection.end)


def sentence_at(ast: DocumentAST, pos: int) -> Optional[Sentence]:
    sentences = ast.sentences
    for index, sentence in enumerate(sentences):
        if sentence.char_start <= pos < sentence.char_end:
            return sentence
        following = sentences[index + 1] if index + 1 < len(sentences) else None
        if following is not None and sentence.char_end <= pos < following.char_start:
            return sentence
    if sentences and (pos >= len(ast.text) or pos >= sentences[-1].char_end):
        return sentences[-1]
    return sentences[0] if sentences else None


def sentence_index_at(ast: DocumentAST, pos: int) -> int:
    sentence = sentence_at(ast, pos)
    return sentence.index if sentence is not None else 0


def word_index_at(ast: DocumentAST, pos: int) -> int:
    """Index of the word containing or immediately following ``pos``."""

    for index, word in enumerate(ast.words):
        if word.char_start <= pos <= word.char_end:
            return index
        if pos < word.char_start:
            return index
    return max(0, len(ast.words) - 1)


def word_range_for(ast: DocumentAST, selection: IndexRange) -> CharRange:
    low, high = _ordered(selection)
    if not ast.words:
        return (0, 0)
    low = max(0, min(low, len(ast.words) - 1))
    high = max(0, min(high, len(ast.words) - 1))
    return (ast.words[low].char_start, ast.words[high].char_end)


def sentence_range_for(ast: DocumentAST, selection: IndexRange) -> CharRange:
    low, high = _ordered(selection)
    if not ast.sentences:
        return (0, len(ast.text))
    low = max(0, min(low, len(ast.sentences) - 1))
    high = max(0, min(high, len(ast.sentences) - 1))
    return (ast.sentences[low].char_start, ast.sentences[high].char_end)


def is_char_in_sentence_selection(
    ast: DocumentAST, pos: int, selection: IndexRange
) -> bool:
    low, high = _ordered(selection)
    for sentence in ast.sentences[max(0, low) : max(0, high + 1)]:
        if sentence.char_start <= pos < sentence.char_end:
            return True
    return False


def sentences_overlapping(ast: DocumentAST, start: int, end: int) -> range:
    """Indices of sentences whose span intersects ``[start, end)``."""

    hits = [
        sentence.index
        for sentence in ast.sentences
        if sentence.char_start < end and start < sentence.char_end
    ]
    if not hits:
        return range(0)
    return range(hits[0], hits[-1] + 1)


__all__ = [
    "CharRange",
    "IndexRange",
    "is_char_in_sentence_selection",
    "sentence_at",
    "sentence_index_at",
    "sentence_range_for",
    "sentences_overlapping",
    "word_index_at",
    "word_range_for",
]

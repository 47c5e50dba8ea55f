"""Character-level boundary search used by cursor motion and backspace."""

from __future__ import annotations

from .parser import is_separator, is_terminal, is_whitespace


def _clamp(pos: int, text: str) -> int:
    return max(0, min(len(text), pos))


def next_word_boundary(text: str, pos: int) -> int:
    """Skip the rest of the current word, then the separator run after it."""

    i = _clamp(pos, text)
    while i < len(text) and not is_separator(text[i]):
        i += 1
    while i < len(text) and is_separator(text[i]):
        i += 1
    return i


def previous_word_boundary(text: str, pos: int) -> int:
    """Skip separators left of ``pos``, then land on the start of that word."""

    i = _clamp(pos, text) - 1
    while i >= 0 and is_separator(text[i]):
        i -= 1
    while i >= 0 and not is_separator(text[i]):
        i -= 1
    return _clamp(i + 1, text)


def _ends_sentence_at(text: str, i: int) -> bool:
    return is_terminal(text[i]) and (i + 1 >= len(text) or is_whitespace(text[i + 1]))


def next_sentence_boundary(text: str, pos: int) -> int:
    """Offset just past the next ``.?!`` + whitespace pair, or the text end."""

    i = _clamp(pos, text)
    while i < len(text):
        if _ends_sentence_at(text, i):
            return min(len(text), i + 2)
        i += 1
    return len(text)


def previous_sentence_boundary(text: str, pos: int) -> int:
    i = _clamp(pos, text) - 1
    # step over the terminator we may be sitting right after
    while i >= 0 and is_whitespace(text[i]):
        i -= 1
    if i >= 0 and is_terminal(text[i]):
        i -= 1
    while i >= 0:
        if is_terminal(text[i]) and i + 1 < len(text) and is_whitespace(text[i + 1]):
            return i + 2
        i -= 1
    return 0


def line_start(text: str, pos: int) -> int:
    return text.rfind("\n", 0, _clamp(pos, text)) + 1


def line_end(text: str, pos: int) -> int:
    end = text.find("\n", _clamp(pos, text))
    return len(text) if end == -1 else end


def line_above(text: str, pos: int) -> int | None:
    """Same column on the previous logical line, clamped to its length."""

    start = line_start(text, pos)
    if start == 0:
        return None
    column = _clamp(pos, text) - start
    previous_start = line_start(text, start - 1)
    return previous_start + min(column, (start - 1) - previous_start)


def line_below(text: str, pos: int) -> int | None:
    end = line_end(text, pos)
    if end >= len(text):
        return None
    column = _clamp(pos, text) - line_start(text, pos)
    next_start = end + 1
    return next_start + min(column, line_end(text, next_start) - next_start)


__all__ = [
    "line_above",
    "line_below",
    "line_end",
    "line_start",
    "next_sentence_boundary",
    "next_word_boundary",
    "previous_sentence_boundary",
    "previous_word_boundary",
]

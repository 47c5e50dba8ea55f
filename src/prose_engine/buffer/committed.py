"""Keeping committed-sentence indices attached to their sentences."""

from __future__ import annotations

from typing import Iterable

from prose_engine.document import DocumentAST, sentence_index_at


def _valid(indices: Iterable[int], ast: DocumentAST) -> frozenset[int]:
    return frozenset(i for i in indices if 0 <= i < len(ast.sentences))


def after_splice(
    committed: frozenset[int],
    old: DocumentAST,
    new: DocumentAST,
    start: int,
    end: int,
    inserted: int,
) -> frozenset[int]:
    """Follow committed sentences through replacing ``[start, end)``.

    Each committed sentence's start offset is carried through the splice and
    resolved against the new parse; sentences lying wholly inside a non-empty
    deleted span are dropped.
    """

    if not committed:
        return committed
    removed = end - start
    result: set[int] = set()
    for index in committed:
        if not 0 <= index < len(old.sentences):
            continue
        sentence = old.sentences[index]
        if removed > 0 and start <= sentence.char_start and sentence.char_end <= end:
            continue
        anchor = sentence.char_start
        if anchor > end:
            anchor = anchor - removed + inserted
        elif anchor > start:
            anchor = start + inserted
        result.add(sentence_index_at(new, anchor))
    return _valid(result, new)


def after_sentence_delete(
    committed: frozenset[int], low: int, high: int, new: DocumentAST
) -> frozenset[int]:
    """Drop ``[low, high]`` and shift later indices down by the deleted count."""

    count = high - low + 1
    kept = (
        index if index < low else index - count
        for index in committed
        if index < low or index > high
    )
    return _valid(kept, new)


def after_reorder(
    committed: frozenset[int], low: int, high: int, delta: int
) -> frozenset[int]:
    """Swap the block ``[low, high]`` with its neighbour one step ``delta`` away."""

    neighbour = low - 1 if delta < 0 else high + 1
    vacated = high if delta < 0 else low
    moved: set[int] = set()
    for index in committed:
        if low <= index <= high:
            moved.add(index + delta)
        elif index == neighbour:
            moved.add(vacated)
        else:
            moved.add(index)
    return frozenset(moved)


def toggled(committed: frozenset[int], indices: range) -> frozenset[int]:
    """Uncommit ``indices`` if all are committed, otherwise commit them all."""

    targets = set(indices)
    if not targets:
        return committed
    if targets <= committed:
        return committed - targets
    return committed | targets


__all__ = ["after_reorder", "after_sentence_delete", "after_splice", "toggled"]

"""Text to sentence/word structure.

The parse is a pure function of the text and is recomputed in full on every
change; nothing here holds scan state between calls.
"""

from __future__ import annotations

from typing import Iterator, List

from .models import DocumentAST, Sentence, Token

SEPARATOR_CHARS = frozenset(" ,;.?!\n—()")
TERMINAL_CHARS = frozenset(".?!")
WHITESPACE_CHARS = frozenset(" \t\r\n")


def is_separator(char: str) -> bool:
    return char in SEPARATOR_CHARS


def is_terminal(char: str) -> bool:
    return char in TERMINAL_CHARS


def is_whitespace(char: str) -> bool:
    return char in WHITESPACE_CHARS


def tokenize(text: str) -> List[Token]:
    tokens: List[Token] = []
    start = 0
    for end in _run_ends(text):
        kind = "separator" if is_separator(text[start]) else "word"
        tokens.append(Token(kind, text[start:end], start, end))
        start = end
    return tokens


def _run_ends(text: str) -> Iterator[int]:
    for index in range(1, len(text)):
        if is_separator(text[index]) != is_separator(text[index - 1]):
            yield index
    if text:
        yield len(text)


def _closes_sentence(token: Token, is_last: bool) -> bool:
    if token.is_word or not any(is_terminal(ch) for ch in token.text):
        return False
    if is_last or len(token.text) > 1:
        return True
    return any(is_whitespace(ch) for ch in token.text)


def _terminal_end(token: Token) -> int:
    last = max(i for i, ch in enumerate(token.text) if is_terminal(ch))
    return token.char_start + last + 1


def group_sentences(tokens: List[Token], text: str) -> List[Sentence]:
    sentences: List[Sentence] = []
    pending: List[Token] = []
    start = 0
    for position, token in enumerate(tokens):
        pending.append(token)
        if not _closes_sentence(token, position == len(tokens) - 1):
            continue
        sentences.append(
            Sentence(len(sentences), tuple(pending), start, _terminal_end(token))
        )
        start = token.char_end
        pending = []

    if pending:
        sentences.append(Sentence(len(sentences), tuple(pending), start, len(text)))
    return sentences


def parse(text: str) -> DocumentAST:
    """Split ``text`` into tokens, sentences and the word list.

    Empty text parses to no sentences and no words.
    """

    tokens = tokenize(text)
    sentences = group_sentences(tokens, text)
    words = tuple(token for token in tokens if token.is_word)
    return DocumentAST(text=text, sentences=tuple(sentences), words=words)


__all__ = [
    "SEPARATOR_CHARS",
    "TERMINAL_CHARS",
    "group_sentences",
    "is_separator",
    "is_terminal",
    "is_whitespace",
    "parse",
    "tokenize",
]

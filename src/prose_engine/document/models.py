"""Value types for the parsed view of a text buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

TokenKind = Literal["word", "separator"]


@dataclass(frozen=True, slots=True)
class Token:
    """Maximal run of word or separator characters; ``char_end`` is exclusive."""

    kind: TokenKind
    text: str
    char_start: int
    char_end: int

    @property
    def is_word(self) -> bool:
        return self.kind == "word"


@dataclass(frozen=True, slots=True)
class Sentence:
    """Run of tokens closed by terminal punctuation or the end of the text.

    ``char_end`` stops right after the terminal punctuation, so trailing
    whitespace is covered by ``tokens`` but not by ``char_start..char_end``.
    """

    index: int
    tokens: tuple[Token, ...]
    char_start: int
    char_end: int

    def text_in(self, text: str) -> str:
        return text[self.char_start : self.char_end]


@dataclass(frozen=True, slots=True)
class DocumentAST:
    text: str
    sentences: tuple[Sentence, ...]
    words: tuple[Token, ...]

    @property
    def sentence_count(self) -> int:
        return len(self.sentences)

    @property
    def word_count(self) -> int:
        return len(self.words)

    def tokens(self) -> tuple[Token, ...]:
        return tuple(token for sentence in self.sentences for token in sentence.tokens)


__all__ = ["DocumentAST", "Sentence", "Token", "TokenKind"]

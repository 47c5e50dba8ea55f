"""Parsed document structure and position queries."""

from .models import DocumentAST, Sentence, Token
from .parser import parse, tokenize
from .positions import (
    is_char_in_sentence_selection,
    sentence_at,
    sentence_index_at,
    sentence_range_for,
    sentences_overlapping,
    word_index_at,
    word_range_for,
)

__all__ = [
    "DocumentAST",
    "Sentence",
    "Token",
    "is_char_in_sentence_selection",
    "parse",
    "sentence_at",
    "sentence_index_at",
    "sentence_range_for",
    "sentences_overlapping",
    "tokenize",
    "word_index_at",
    "word_range_for",
]

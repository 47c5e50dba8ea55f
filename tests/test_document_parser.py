from __future__ import annotations

import pytest

from prose_engine.document import parse, tokenize

SAMPLES = [
    "",
    "Hello world. Goodbye.",
    "no terminal punctuation at all",
    "Really?! Yes.",
    "One.\nTwo.\n\nThree",
    "Wait... what (exactly) — happened?",
    "  leading space. trailing space.  ",
    "e.g. this, that; the other.",
]


def test_parse_splits_sentences_at_terminal_punctuation() -> None:
    ast = parse("Hello world. Goodbye.")

    assert [(s.char_start, s.char_end) for s in ast.sentences] == [(0, 12), (13, 21)]
    assert [s.text_in(ast.text) for s in ast.sentences] == ["Hello world.", "Goodbye."]
    assert [w.text for w in ast.words] == ["Hello", "world", "Goodbye"]


def test_parse_empty_text_has_no_sentences_or_words() -> None:
    ast = parse("")

    assert ast.sentences == ()
    assert ast.words == ()
    assert ast.sentence_count == 0


def test_text_without_terminal_is_one_sentence() -> None:
    ast = parse("just a few words")

    assert len(ast.sentences) == 1
    assert (ast.sentences[0].char_start, ast.sentences[0].char_end) == (0, 16)


def test_consecutive_terminals_form_one_separator_run() -> None:
    ast = parse("Really?! Yes.")

    assert [t.text for t in tokenize("Really?! Yes.")] == ["Really", "?! ", "Yes", "."]
    # The sentence runs through the last terminal in the run, not the first.
    assert [s.text_in(ast.text) for s in ast.sentences] == ["Really?!", "Yes."]


def test_single_period_inside_word_does_not_end_sentence() -> None:
    ast = parse("e.g this works")

    assert ast.sentence_count == 1


def test_newline_after_terminal_ends_sentence() -> None:
    ast = parse("One.\nTwo.")

    assert [(s.char_start, s.char_end) for s in ast.sentences] == [(0, 4), (5, 9)]


@pytest.mark.parametrize("text", SAMPLES)
def test_tokens_partition_the_text(text: str) -> None:
    tokens = tokenize(text)

    assert "".join(t.text for t in tokens) == text
    position = 0
    for token in tokens:
        assert token.char_start == position
        assert token.char_end == position + len(token.text)
        position = token.char_end
    assert position == len(text)


@pytest.mark.parametrize("text", SAMPLES)
def test_sentences_cover_every_token(text: str) -> None:
    ast = parse(text)

    assert list(ast.tokens()) == tokenize(text)
    assert [s.index for s in ast.sentences] == list(range(ast.sentence_count))


@pytest.mark.parametrize("text", SAMPLES)
def test_reparse_is_structurally_identical(text: str) -> None:
    assert parse(text) == parse(text)

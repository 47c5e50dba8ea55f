"""Textual adapter: key translation and UI hooks for an EditSession."""

from .controller import TextualEditAdapter, TextualUIHooks, translate_textual_key

__all__ = ["TextualEditAdapter", "TextualUIHooks", "translate_textual_key"]

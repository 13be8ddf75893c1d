"""Markup tokenizer: receipt markup in, ordered tokens out."""

from .tokenizer import MarkupTokenizer, tokenize

__all__ = [
    "MarkupTokenizer",
    "tokenize",
]

"""Token, attribute and settings types shared by the tokenizer and the encoder."""

from .settings import EncoderSettings
from .tokens import (
    Attributes,
    Comment,
    EndTag,
    ProcessingInstruction,
    StartTag,
    Text,
    Token,
)

__all__ = [
    "Attributes",
    "Comment",
    "EncoderSettings",
    "EndTag",
    "ProcessingInstruction",
    "StartTag",
    "Text",
    "Token",
]

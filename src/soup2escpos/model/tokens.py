# Markup tokens in document order, as delivered by soup2escpos.markup.tokenizer.
# Immutable; the encoder never modifies a token it receives.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Tuple, Union

from soup2escpos.exceptions import MissingAttributeError

__all__ = [
    "Attributes",
    "StartTag",
    "EndTag",
    "Text",
    "Comment",
    "ProcessingInstruction",
    "Token",
]


@dataclass(frozen=True)
class Attributes:
    """
    Ordered attribute list of a start tag.

    Lookup is case-insensitive on the attribute name and the first matching
    attribute wins, even when a later duplicate has a value. An empty value
    counts as absent.

    Example:
        >>> attrs = Attributes.from_pairs([("MODE", "upc"), ("value", "")])
        >>> attrs.get("mode")
        'upc'
        >>> attrs.get("value") is None
        True
    """

    pairs: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> "Attributes":
        return cls(tuple((name, value) for name, value in pairs))

    def get(self, name: str) -> Optional[str]:
        """Return the attribute value, or None if absent or empty."""
        wanted = name.lower()
        for attr_name, value in self.pairs:
            if attr_name.lower() == wanted:
                return value or None
        return None

    def require(self, tag: str, name: str) -> str:
        """
        Return a mandatory attribute value.

        Raises:
            MissingAttributeError: If the attribute is absent or empty.
        """
        value = self.get(name)
        if value is None:
            raise MissingAttributeError(tag, name)
        return value

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)


@dataclass(frozen=True)
class StartTag:
    name: str
    attributes: Attributes = field(default_factory=Attributes)


@dataclass(frozen=True)
class EndTag:
    name: str


@dataclass(frozen=True)
class Text:
    """Character data between tags, already encoded to printer bytes."""

    data: bytes


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class ProcessingInstruction:
    """``<?target data?>``; well-formed markup, but not part of the tag vocabulary."""

    target: str
    data: str


Token = Union[StartTag, EndTag, Text, Comment, ProcessingInstruction]

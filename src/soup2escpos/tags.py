"""
Tag vocabulary of the receipt markup.

Every tag is one of two variants:

    FixedTag     emits a constant sequence on open and another on close
    ComputedTag  builds its opening sequence from the tag attributes and
                 emits nothing on close

Tag names are matched case-insensitively. The registry is built once at
import time and is read-only.

Example:
    >>> lookup_tag("B").start(Attributes())
    b'\\x1bE\\x01'
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from soup2escpos.barcodegen import barcode_command
from soup2escpos.escpos.commands import (
    ESC_ALIGN_CENTER,
    ESC_ALIGN_LEFT,
    ESC_ALIGN_RIGHT,
    ESC_BOLD_OFF,
    ESC_BOLD_ON,
    ESC_DOUBLE_HEIGHT_ON,
    ESC_DOUBLE_WIDTH_ON,
    ESC_FONT_NORMAL,
    ESC_FONT_SMALL,
    ESC_PRINT_MODE_RESET,
    ESC_QUAD_SIZE_ON,
    ESC_UNDERLINE_DOUBLE,
    ESC_UNDERLINE_OFF,
    ESC_UNDERLINE_ON,
    GS_REVERSE_OFF,
    GS_REVERSE_ON,
    LF,
)
from soup2escpos.exceptions import UnknownTagError
from soup2escpos.imagegen import image_command
from soup2escpos.model.settings import EncoderSettings
from soup2escpos.model.tokens import Attributes

__all__ = [
    "Tag",
    "FixedTag",
    "ComputedTag",
    "TAG_REGISTRY",
    "lookup_tag",
]

Producer = Callable[[Attributes, EncoderSettings], bytes]


class Tag(ABC):
    """A markup tag and the printer bytes it stands for."""

    name: str
    eats_next_newline: bool

    @abstractmethod
    def start(self, attributes: Attributes, settings: Optional[EncoderSettings] = None) -> bytes:
        """Bytes emitted for the start tag."""

    @abstractmethod
    def end(self) -> bytes:
        """Bytes emitted for the end tag."""


@dataclass(frozen=True)
class FixedTag(Tag):
    """
    Tag with constant open/close sequences.

    ``eats_next_newline`` marks block tags whose close sequence already ends
    the line; a newline right after the end tag in the source is dropped.
    """

    name: str
    start_bytes: bytes
    end_bytes: bytes
    eats_next_newline: bool = False

    def start(self, attributes: Attributes, settings: Optional[EncoderSettings] = None) -> bytes:
        return self.start_bytes

    def end(self) -> bytes:
        return self.end_bytes


@dataclass(frozen=True)
class ComputedTag(Tag):
    """Tag whose opening sequence is produced from its attributes."""

    name: str
    producer: Producer
    eats_next_newline: bool = False

    def start(self, attributes: Attributes, settings: Optional[EncoderSettings] = None) -> bytes:
        return self.producer(attributes, settings or EncoderSettings())

    def end(self) -> bytes:
        return b""


def _barcode(attributes: Attributes, settings: EncoderSettings) -> bytes:
    return barcode_command(attributes)


_END_ALIGNED_BLOCK = LF + ESC_ALIGN_LEFT

_TAGS = (
    FixedTag("b", ESC_BOLD_ON, ESC_BOLD_OFF),
    FixedTag("u", ESC_UNDERLINE_ON, ESC_UNDERLINE_OFF),
    FixedTag("uu", ESC_UNDERLINE_DOUBLE, ESC_UNDERLINE_OFF),
    FixedTag("inv", GS_REVERSE_ON, GS_REVERSE_OFF),
    FixedTag("small", ESC_FONT_SMALL, ESC_FONT_NORMAL),
    FixedTag("center", ESC_ALIGN_CENTER, _END_ALIGNED_BLOCK, eats_next_newline=True),
    FixedTag("right", ESC_ALIGN_RIGHT, _END_ALIGNED_BLOCK, eats_next_newline=True),
    FixedTag("tall", ESC_DOUBLE_HEIGHT_ON, ESC_PRINT_MODE_RESET),
    FixedTag("wide", ESC_DOUBLE_WIDTH_ON, ESC_PRINT_MODE_RESET),
    FixedTag("huge", ESC_QUAD_SIZE_ON, ESC_PRINT_MODE_RESET),
    ComputedTag("barcode", _barcode),
    ComputedTag("img", image_command),
)

TAG_REGISTRY: Mapping[str, Tag] = MappingProxyType({tag.name: tag for tag in _TAGS})


def lookup_tag(name: str) -> Tag:
    """
    Resolve a tag by name, ignoring case.

    Raises:
        UnknownTagError: If the tag is not part of the vocabulary.
    """
    key = name.lower()
    tag = TAG_REGISTRY.get(key)
    if tag is None:
        raise UnknownTagError(key)
    return tag

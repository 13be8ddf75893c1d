"""
Streaming tokenizer for receipt markup.

Wraps ``xml.parsers.expat`` and turns its callbacks into a flat sequence of
tokens (see ``soup2escpos.model.tokens``). Receipt documents are fragments:
they may contain several top-level tags and bare text, so the input is
parsed inside a synthetic root element that is never reported.

Adjacent character data is merged into one ``Text`` token, so a text run
between two tags always arrives whole regardless of how the input was
chunked.

Tag and attribute names are reported by local name; a namespace prefix
(``<x:b>``) is dropped. Attribute values follow XML normalization: a literal
newline or tab inside a value reads as a space, while ``&#10;`` keeps the
line feed.
"""

from __future__ import annotations

from typing import BinaryIO, Iterator, List, Optional, Tuple, Union
from xml.parsers import expat

from soup2escpos import get_logger
from soup2escpos.exceptions import MalformedInputError
from soup2escpos.model.tokens import (
    Attributes,
    Comment,
    EndTag,
    ProcessingInstruction,
    StartTag,
    Text,
    Token,
)

logger = get_logger(__name__)

__all__ = [
    "MarkupTokenizer",
    "tokenize",
]

_ROOT_OPEN = b"<soup2escpos>"
_ROOT_CLOSE = b"</soup2escpos>"

DEFAULT_CHUNK_SIZE = 64 * 1024

MarkupSource = Union[bytes, bytearray, str, BinaryIO]


def _local_name(name: str) -> str:
    """Drop a namespace prefix: ``x:b`` -> ``b``."""
    return name.rpartition(":")[2]


class MarkupTokenizer:
    """
    Incremental markup tokenizer.

    Args:
        text_encoding: Codec used to encode character data for the printer.

    Example:
        >>> tokenizer = MarkupTokenizer()
        >>> tokens = tokenizer.feed(b"<b>Hi</b>") + tokenizer.close()
        >>> [type(t).__name__ for t in tokens]
        ['StartTag', 'Text', 'EndTag']
    """

    def __init__(self, text_encoding: str = "utf-8") -> None:
        self.text_encoding = text_encoding
        self._parser = expat.ParserCreate(encoding="utf-8")
        self._parser.ordered_attributes = True
        self._parser.StartElementHandler = self._on_start
        self._parser.EndElementHandler = self._on_end
        self._parser.CharacterDataHandler = self._on_text
        self._parser.CommentHandler = self._on_comment
        self._parser.ProcessingInstructionHandler = self._on_processing_instruction

        self._tokens: List[Token] = []
        self._text_parts: List[str] = []
        self._depth = 0
        self._started = False
        self._closed = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def feed(self, data: bytes) -> List[Token]:
        """Parse a chunk of markup and return the tokens completed so far."""
        if self._closed:
            raise ValueError("Tokenizer already closed")
        if not self._started:
            self._started = True
            self._parse(_ROOT_OPEN, final=False)
        self._parse(data, final=False)
        return self._drain()

    def close(self) -> List[Token]:
        """Finish parsing and return the remaining tokens."""
        if self._closed:
            return []
        if not self._started:
            self._started = True
            self._parse(_ROOT_OPEN, final=False)
        self._parse(_ROOT_CLOSE, final=True)
        self._closed = True
        self._flush_text()
        return self._drain()

    # ------------------------------------------------------------------
    # expat callbacks
    # ------------------------------------------------------------------

    def _on_start(self, name: str, attributes: List[str]) -> None:
        self._flush_text()
        self._depth += 1
        if self._depth == 1:
            return
        # ordered_attributes delivers [name1, value1, name2, value2, ...]
        pairs = zip(map(_local_name, attributes[0::2]), attributes[1::2])
        self._tokens.append(StartTag(_local_name(name), Attributes.from_pairs(pairs)))

    def _on_end(self, name: str) -> None:
        self._flush_text()
        self._depth -= 1
        if self._depth == 0:
            return
        self._tokens.append(EndTag(_local_name(name)))

    def _on_text(self, data: str) -> None:
        self._text_parts.append(data)

    def _on_comment(self, data: str) -> None:
        self._flush_text()
        self._tokens.append(Comment(data))

    def _on_processing_instruction(self, target: str, data: str) -> None:
        self._flush_text()
        self._tokens.append(ProcessingInstruction(target, data))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _parse(self, data: bytes, final: bool) -> None:
        try:
            self._parser.Parse(data, final)
        except expat.ExpatError as e:
            line, column = self._source_position(e.lineno, e.offset)
            raise MalformedInputError(
                expat.ErrorString(e.code), line=line, column=column
            ) from e

    @staticmethod
    def _source_position(lineno: int, offset: int) -> Tuple[int, int]:
        """Map an expat position back to the caller's document (1-based column)."""
        if lineno == 1:
            offset = max(offset - len(_ROOT_OPEN), 0)
        return lineno, offset + 1

    def _flush_text(self) -> None:
        if not self._text_parts:
            return
        text = "".join(self._text_parts)
        self._text_parts = []
        try:
            data = text.encode(self.text_encoding)
        except UnicodeEncodeError as e:
            raise MalformedInputError(
                f"text {e.object[e.start:e.end]!r} cannot be encoded as {self.text_encoding}"
            ) from e
        except LookupError as e:
            raise MalformedInputError(f"unknown text encoding {self.text_encoding!r}") from e
        self._tokens.append(Text(data))

    def _drain(self) -> List[Token]:
        tokens, self._tokens = self._tokens, []
        return tokens


def tokenize(
    source: MarkupSource,
    text_encoding: str = "utf-8",
    chunk_size: Optional[int] = None,
) -> Iterator[Token]:
    """
    Yield the tokens of a markup document in order.

    Args:
        source: Markup as bytes, str, or a binary file object read in chunks.
        text_encoding: Codec used to encode character data.
        chunk_size: Read size for file objects.

    Raises:
        MalformedInputError: If the markup is not well-formed.
    """
    tokenizer = MarkupTokenizer(text_encoding)

    if isinstance(source, str):
        source = source.encode("utf-8")

    if isinstance(source, (bytes, bytearray)):
        yield from tokenizer.feed(bytes(source))
    else:
        size = chunk_size or DEFAULT_CHUNK_SIZE
        while True:
            chunk = source.read(size)
            if not chunk:
                break
            if isinstance(chunk, str):
                chunk = chunk.encode("utf-8")
            yield from tokenizer.feed(chunk)

    yield from tokenizer.close()
    logger.debug("Tokenizer finished")

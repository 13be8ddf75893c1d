"""
Token stream encoder: turns markup tokens into ESC/POS bytes.

The encoder is a small state machine. Its only state is the pending-newline
flag: closing a block tag such as ``</center>`` already ends the printed
line, so a line feed written right after the end tag in the source would
leave an empty line on the receipt. The flag remembers that the next text
chunk may start with such a redundant newline.

Flag lifecycle:
    - end tag          → flag = tag.eats_next_newline (always overwritten)
    - text "\\n..."    → leading LF dropped and flag cleared, if flag set
    - other text       → emitted unchanged, flag kept
    - start tag        → flag kept
    - comment          → ignored

Any error aborts the run: nothing after the failing token is emitted.

Example:
    >>> encode(b"<center>X</center>\\nY")
    b'\\x1ba\\x01X\\n\\x1ba\\x00Y'
"""

from __future__ import annotations

from typing import BinaryIO, Iterable, Iterator, Optional

from soup2escpos import get_logger
from soup2escpos.exceptions import MalformedInputError
from soup2escpos.markup.tokenizer import MarkupSource, tokenize
from soup2escpos.model.settings import EncoderSettings
from soup2escpos.model.tokens import Comment, EndTag, ProcessingInstruction, StartTag, Text, Token
from soup2escpos.tags import lookup_tag

logger = get_logger(__name__)

__all__ = [
    "TokenStreamEncoder",
    "encode",
    "encode_to",
]

_NEWLINE = 0x0A


class TokenStreamEncoder:
    """
    Encodes tokens one at a time, in document order.

    Use a fresh instance per document; the pending-newline flag belongs to
    a single run.

    Args:
        settings: Run-wide settings passed to computed tags.
    """

    def __init__(self, settings: Optional[EncoderSettings] = None) -> None:
        self.settings = settings or EncoderSettings()
        self._eat_next_newline = False

    @property
    def eat_next_newline(self) -> bool:
        return self._eat_next_newline

    def feed(self, token: Token) -> bytes:
        """
        Encode a single token.

        Raises:
            EncodeError: Any failure from tag lookup or a tag producer.
            MalformedInputError: For token kinds outside the vocabulary.
        """
        if isinstance(token, StartTag):
            tag = lookup_tag(token.name)
            logger.debug("Start <%s>", tag.name)
            return tag.start(token.attributes, self.settings)

        if isinstance(token, EndTag):
            tag = lookup_tag(token.name)
            self._eat_next_newline = tag.eats_next_newline
            return tag.end()

        if isinstance(token, Text):
            data = token.data
            if self._eat_next_newline and data and data[0] == _NEWLINE:
                self._eat_next_newline = False
                return data[1:]
            return data

        if isinstance(token, Comment):
            return b""

        if isinstance(token, ProcessingInstruction):
            raise MalformedInputError(f"unexpected processing instruction <?{token.target}?>")
        raise MalformedInputError(f"unexpected token type {type(token).__name__}")

    def iter_encode(self, tokens: Iterable[Token]) -> Iterator[bytes]:
        """Yield the encoded bytes for each token that produces output."""
        for token in tokens:
            chunk = self.feed(token)
            if chunk:
                yield chunk


def encode(markup: MarkupSource, settings: Optional[EncoderSettings] = None) -> bytes:
    """
    Encode a whole document in memory.

    Either the complete byte stream is returned or an ``EncodeError`` is
    raised; partial output is never returned.
    """
    settings = settings or EncoderSettings()
    encoder = TokenStreamEncoder(settings)
    return b"".join(encoder.iter_encode(tokenize(markup, settings.text_encoding)))


def encode_to(
    source: MarkupSource,
    sink: BinaryIO,
    settings: Optional[EncoderSettings] = None,
) -> int:
    """
    Stream-encode ``source`` into a writable binary ``sink``.

    Bytes are written as soon as each token is encoded. On error the
    exception propagates and nothing further is written.

    Returns:
        Number of bytes written.
    """
    settings = settings or EncoderSettings()
    encoder = TokenStreamEncoder(settings)
    written = 0
    for chunk in encoder.iter_encode(tokenize(source, settings.text_encoding)):
        sink.write(chunk)
        written += len(chunk)
    logger.debug("Encoded %d bytes", written)
    return written

import io
from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from soup2escpos import TokenStreamEncoder, encode, encode_to
from soup2escpos.exceptions import (
    BarcodeCharsetError,
    BarcodeLengthError,
    MalformedInputError,
    MissingAttributeError,
    UnknownTagError,
)
from soup2escpos.model.settings import EncoderSettings
from soup2escpos.model.tokens import Comment, EndTag, ProcessingInstruction, StartTag, Text


class TestEncode:
    def test_plain_text_passthrough(self) -> None:
        assert encode(b"Hello\nworld\n") == b"Hello\nworld\n"

    def test_bold(self) -> None:
        assert encode(b"<b>Hi</b>") == b"\x1b\x45\x01Hi\x1b\x45\x00"

    def test_nested_tags(self) -> None:
        assert encode(b"<u><b>x</b></u>") == b"\x1b\x2d\x01\x1b\x45\x01x\x1b\x45\x00\x1b\x2d\x00"

    def test_upc_barcode(self) -> None:
        assert encode(b'<barcode mode="upc" value="01234567890" />') == (
            b"\x1d\x6b\x00" + b"01234567890" + b"\x00"
        )

    def test_center_eats_one_newline(self) -> None:
        assert encode(b"<center>X</center>\nY") == b"\x1b\x61\x01X\n\x1b\x61\x00Y"

    def test_only_first_newline_is_eaten(self) -> None:
        assert encode(b"<right>X</right>\n\nY") == b"\x1b\x61\x02X\n\x1b\x61\x00\nY"

    def test_inline_end_tag_overwrites_flag(self) -> None:
        assert encode(b"<b><center>X</center></b>\nY") == (
            b"\x1b\x45\x01\x1b\x61\x01X\n\x1b\x61\x00\x1b\x45\x00\nY"
        )

    def test_flag_survives_start_tag(self) -> None:
        assert encode(b"<center>X</center><b>\nY</b>") == (
            b"\x1b\x61\x01X\n\x1b\x61\x00\x1b\x45\x01Y\x1b\x45\x00"
        )

    def test_flag_survives_comment(self) -> None:
        assert encode(b"<center>X</center><!-- c -->\nY") == b"\x1b\x61\x01X\n\x1b\x61\x00Y"

    def test_flag_survives_text_without_newline(self) -> None:
        assert encode(b"<center>X</center>Z<b>\nY</b>") == (
            b"\x1b\x61\x01X\n\x1b\x61\x00Z\x1b\x45\x01Y\x1b\x45\x00"
        )

    def test_newline_not_eaten_without_block_tag(self) -> None:
        assert encode(b"<b>X</b>\nY") == b"\x1b\x45\x01X\x1b\x45\x00\nY"

    def test_crlf_after_block_tag(self) -> None:
        # expat normalizes CRLF to LF
        assert encode(b"<center>X</center>\r\nY") == b"\x1b\x61\x01X\n\x1b\x61\x00Y"

    def test_tag_names_ignore_case(self) -> None:
        assert encode(b"<B>x</B>") == b"\x1b\x45\x01x\x1b\x45\x00"

    def test_prefixed_tag(self) -> None:
        assert encode(b"<x:b>Hi</x:b>") == b"\x1b\x45\x01Hi\x1b\x45\x00"

    def test_barcode_value_line_feed_reference_rejected(self) -> None:
        with pytest.raises(BarcodeCharsetError) as exc_info:
            encode(b'<barcode mode="code39" value="A&#10;B" />')
        assert exc_info.value.position == 1
        assert exc_info.value.byte == 0x0A

    def test_barcode_value_literal_newline_reads_as_space(self) -> None:
        assert encode(b'<barcode mode="code39" value="A\nB" />') == b"\x1d\x6b\x04A B\x00"

    def test_image(self, write_png: Callable[..., Path]) -> None:
        path = write_png(Image.new("L", (8, 1), 0))
        markup = f'<center><img src="{path}" /></center>'.encode("utf-8")
        assert encode(markup) == b"\x1b\x61\x01\x1d\x76\x30\x00\x01\x00\x01\x00\xff\n\x1b\x61\x00"

    def test_text_encoding_setting(self) -> None:
        assert encode("<b>é</b>", EncoderSettings(text_encoding="cp437")) == (
            b"\x1b\x45\x01\x82\x1b\x45\x00"
        )

    def test_unknown_tag_aborts(self) -> None:
        with pytest.raises(UnknownTagError, match="Unknown tag: blink"):
            encode(b"<b>Hi</b><blink>!</blink>")

    def test_unknown_self_closing_tag_aborts(self) -> None:
        with pytest.raises(UnknownTagError):
            encode(b"<b>Hi</b><x/>")

    def test_barcode_error_propagates(self) -> None:
        with pytest.raises(BarcodeLengthError):
            encode(b'<barcode mode="upc" value="1234" />')

    def test_missing_attribute_propagates(self) -> None:
        with pytest.raises(MissingAttributeError):
            encode(b"<img />")

    def test_processing_instruction_rejected(self) -> None:
        with pytest.raises(MalformedInputError, match="processing instruction"):
            encode(b"x<?cut?>y")

    def test_malformed_markup(self) -> None:
        with pytest.raises(MalformedInputError):
            encode(b"<b>Hi</u>")


class TestEncodeTo:
    def test_streams_to_sink(self) -> None:
        sink = io.BytesIO()
        written = encode_to(io.BytesIO(b"<b>Hi</b>"), sink)
        assert sink.getvalue() == b"\x1b\x45\x01Hi\x1b\x45\x00"
        assert written == len(sink.getvalue())

    def test_output_before_error_is_kept(self) -> None:
        sink = io.BytesIO()
        with pytest.raises(UnknownTagError):
            encode_to(b"<b>Hi</b><blink>", sink)
        assert sink.getvalue() == b"\x1b\x45\x01Hi\x1b\x45\x00"

    def test_empty_source(self) -> None:
        sink = io.BytesIO()
        assert encode_to(io.BytesIO(b""), sink) == 0
        assert sink.getvalue() == b""


class TestTokenStreamEncoder:
    def test_feed_tokens(self) -> None:
        encoder = TokenStreamEncoder()
        assert encoder.feed(StartTag("center")) == b"\x1b\x61\x01"
        assert encoder.eat_next_newline is False
        assert encoder.feed(EndTag("center")) == b"\n\x1b\x61\x00"
        assert encoder.eat_next_newline is True
        assert encoder.feed(Text(b"\n\n")) == b"\n"
        assert encoder.eat_next_newline is False

    def test_empty_text_keeps_flag(self) -> None:
        encoder = TokenStreamEncoder()
        encoder.feed(EndTag("right"))
        assert encoder.feed(Text(b"")) == b""
        assert encoder.eat_next_newline is True

    def test_comment_emits_nothing(self) -> None:
        assert TokenStreamEncoder().feed(Comment("x")) == b""

    def test_processing_instruction(self) -> None:
        with pytest.raises(MalformedInputError):
            TokenStreamEncoder().feed(ProcessingInstruction("cut", ""))

    def test_unexpected_token_type(self) -> None:
        with pytest.raises(MalformedInputError, match="unexpected token type str"):
            TokenStreamEncoder().feed("<b>")  # type: ignore[arg-type]

    def test_iter_encode_skips_empty_chunks(self) -> None:
        tokens = [Comment("a"), StartTag("b"), Text(b""), EndTag("b")]
        assert list(TokenStreamEncoder().iter_encode(tokens)) == [
            b"\x1b\x45\x01",
            b"\x1b\x45\x00",
        ]


class TestDeterminism:
    def test_encoding_twice_is_identical(self) -> None:
        markup = b'<center><b>Total</b></center>\n<barcode mode="ean13" value="978014300723" height="60"/>'
        assert encode(markup) == encode(markup)

import struct
import zlib
from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from soup2escpos.escpos.commands import ImageMode
from soup2escpos.exceptions import (
    ImageSizeError,
    MissingAttributeError,
    ResourceAccessError,
    UnsupportedValueError,
)
from soup2escpos.imagegen import (
    DARKNESS_THRESHOLD,
    RasterImageGenerator,
    image_command,
    luminance,
    open_image,
)
from soup2escpos.model.settings import EncoderSettings
from soup2escpos.model.tokens import Attributes

WritePng = Callable[..., Path]


def _png_header(width: int, height: int) -> bytes:
    """A PNG whose header claims the given size; the pixel data is empty."""

    def chunk(kind: bytes, body: bytes) -> bytes:
        crc = zlib.crc32(kind + body) & 0xFFFFFFFF
        return struct.pack(">I", len(body)) + kind + body + struct.pack(">I", crc)

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 0, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", ihdr)
        + chunk(b"IDAT", zlib.compress(b""))
        + chunk(b"IEND", b"")
    )


def _img_attrs(src: Path, mode: str = "") -> Attributes:
    pairs = [("src", str(src))]
    if mode:
        pairs.append(("mode", mode))
    return Attributes.from_pairs(pairs)


class TestLuminance:
    def test_opaque_gray_maps_to_itself(self) -> None:
        for level in (0, 1, 64, 127, 128, 200, 255):
            assert luminance(level, level, level) == level

    def test_threshold(self) -> None:
        assert DARKNESS_THRESHOLD == 128
        assert luminance(127, 127, 127) < DARKNESS_THRESHOLD
        assert luminance(128, 128, 128) >= DARKNESS_THRESHOLD

    def test_transparent_is_black(self) -> None:
        assert luminance(255, 255, 255, 0) == 0

    def test_green_weighs_most(self) -> None:
        assert luminance(0, 255, 0) > luminance(255, 0, 0) > luminance(0, 0, 255)


class TestRasterImageGenerator:
    def test_pack_rows_padding(self) -> None:
        image = Image.new("RGB", (10, 2), "white")
        image.putpixel((0, 0), (0, 0, 0))
        image.putpixel((9, 0), (0, 0, 0))
        image.putpixel((8, 1), (0, 0, 0))
        cmd = RasterImageGenerator(image).render_command()
        assert cmd == b"\x1d\x76\x30\x00\x02\x00\x02\x00" + b"\x80\x40\x00\x80"

    def test_all_black_rows_do_not_share_bytes(self) -> None:
        image = Image.new("1", (13, 3), 0)
        gen = RasterImageGenerator(image)
        assert gen.bytes_per_row == 2
        assert gen.pack_rows() == b"\xff\xf8" * 3

    def test_grayscale_threshold(self) -> None:
        image = Image.new("L", (2, 1))
        image.putpixel((0, 0), 127)
        image.putpixel((1, 0), 128)
        assert RasterImageGenerator(image).pack_rows() == b"\x80"

    def test_transparent_pixel_prints(self) -> None:
        image = Image.new("RGBA", (2, 1), (255, 255, 255, 255))
        image.putpixel((1, 0), (255, 255, 255, 0))
        assert RasterImageGenerator(image).pack_rows() == b"\x40"

    def test_wide_gray_uses_high_byte(self) -> None:
        image = Image.new("I", (2, 1))
        image.putpixel((0, 0), 0x1000)
        image.putpixel((1, 0), 0xF000)
        assert RasterImageGenerator(image).pack_rows() == b"\x80"

    def test_mode_code_in_header(self) -> None:
        image = Image.new("L", (8, 1), 255)
        cmd = RasterImageGenerator(image, ImageMode.HUGE).render_command()
        assert cmd == b"\x1d\x76\x30\x03\x01\x00\x01\x00\x00"

    @pytest.mark.parametrize(
        "mode,width,ok",
        [
            (ImageMode.NORMAL, 360, True),
            (ImageMode.NORMAL, 361, False),
            (ImageMode.TALL, 361, False),
            (ImageMode.WIDE, 180, True),
            (ImageMode.WIDE, 181, False),
            (ImageMode.HUGE, 181, False),
        ],
    )
    def test_width_limit(self, mode: ImageMode, width: int, ok: bool) -> None:
        gen = RasterImageGenerator(Image.new("L", (width, 1), 255), mode)
        if ok:
            gen.validate()
        else:
            with pytest.raises(ImageSizeError) as exc_info:
                gen.validate()
            assert exc_info.value.dimension == "width"
            assert exc_info.value.maximum == mode.max_width(2)

    def test_wider_paper_raises_limit(self) -> None:
        gen = RasterImageGenerator(Image.new("L", (500, 1), 255), paper_width_inches=3)
        gen.validate()

    def test_height_limit(self) -> None:
        gen = RasterImageGenerator(Image.new("L", (1, 65536), 255))
        with pytest.raises(ImageSizeError, match="Image height of 65536 exceeds max of 65535"):
            gen.validate()


class TestImageCommand:
    def test_reads_png_file(self, write_png: WritePng) -> None:
        image = Image.new("RGB", (8, 2), "white")
        image.putpixel((0, 1), (0, 0, 0))
        path = write_png(image)
        assert image_command(_img_attrs(path)) == b"\x1d\x76\x30\x00\x01\x00\x02\x00\x00\x80"

    def test_mode_attribute(self, write_png: WritePng) -> None:
        path = write_png(Image.new("L", (8, 1), 0))
        assert image_command(_img_attrs(path, "tall")) == b"\x1d\x76\x30\x02\x01\x00\x01\x00\xff"

    def test_settings_paper_width(self, write_png: WritePng) -> None:
        path = write_png(Image.new("L", (400, 1), 255))
        with pytest.raises(ImageSizeError):
            image_command(_img_attrs(path))
        image_command(_img_attrs(path), EncoderSettings(paper_width_inches=3))

    def test_sixteen_bit_gray_png(self, write_png: WritePng) -> None:
        image = Image.new("I;16", (4, 1))
        for x, value in enumerate((0x1000, 0xF000, 0x7FFF, 0x8000)):
            image.putpixel((x, 0), value)
        path = write_png(image)
        assert image_command(_img_attrs(path)) == b"\x1d\x76\x30\x00\x01\x00\x01\x00\xa0"

    def test_huge_header_is_a_size_error(self, tmp_path: Path) -> None:
        path = tmp_path / "huge.png"
        path.write_bytes(_png_header(20000, 10000))
        limit = Image.MAX_IMAGE_PIXELS
        with pytest.raises(ImageSizeError) as exc_info:
            image_command(_img_attrs(path))
        assert exc_info.value.dimension == "width"
        assert exc_info.value.actual == 20000
        assert Image.MAX_IMAGE_PIXELS == limit

    def test_missing_src(self) -> None:
        with pytest.raises(MissingAttributeError, match="Required attr 'src' not found on <img>"):
            image_command(Attributes())

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ResourceAccessError) as exc_info:
            image_command(_img_attrs(tmp_path / "nope.png"))
        assert exc_info.value.source == str(tmp_path / "nope.png")

    def test_not_an_image(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("not an image")
        with pytest.raises(ResourceAccessError):
            image_command(_img_attrs(path))

    def test_truncated_png(self, write_png: WritePng, tmp_path: Path) -> None:
        image = Image.effect_noise((64, 64), 100).convert("L")
        path = write_png(image)
        data = path.read_bytes()
        truncated = tmp_path / "truncated.png"
        truncated.write_bytes(data[: len(data) // 2])
        with pytest.raises(ResourceAccessError):
            image_command(_img_attrs(truncated))

    def test_unknown_mode(self, write_png: WritePng) -> None:
        path = write_png(Image.new("L", (8, 1), 255))
        with pytest.raises(UnsupportedValueError) as exc_info:
            image_command(_img_attrs(path, "giant"))
        assert exc_info.value.allowed == ["huge", "normal", "tall", "wide"]

    def test_open_image_is_lazy(self, write_png: WritePng) -> None:
        path = write_png(Image.new("L", (3, 5), 255))
        with open_image(path) as image:
            assert image.size == (3, 5)

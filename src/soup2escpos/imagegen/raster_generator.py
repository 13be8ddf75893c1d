from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from PIL import Image

from soup2escpos import get_logger
from soup2escpos.escpos.commands.graphics import (
    IMAGE_MODES,
    RASTER_MAX_DIMENSION,
    ImageMode,
    print_raster_image,
)
from soup2escpos.exceptions import ImageSizeError, ResourceAccessError, UnsupportedValueError
from soup2escpos.model.settings import EncoderSettings
from soup2escpos.model.tokens import Attributes

logger = get_logger(__name__)

__all__ = [
    "DARKNESS_THRESHOLD",
    "RasterImageGenerator",
    "image_command",
    "luminance",
    "open_image",
]

IMG_TAG = "img"

DARKNESS_THRESHOLD = 128

# Pillow failures while identifying or decoding a file
_IMAGE_ERRORS = (OSError, SyntaxError, ValueError)

# Modes holding more than 8 bits per gray sample (16-bit PNG grayscale)
_WIDE_GRAY_MODES = ("I", "I;16", "I;16L", "I;16B", "I;16N")


def luminance(r: int, g: int, b: int, a: int = 0xFF) -> int:
    """
    8-bit gray level of a non-premultiplied RGBA pixel.

    Channels are widened to 16 bits and premultiplied by alpha before the
    weighted sum, so fully transparent pixels come out black. Opaque gray
    input maps to itself.

    Example:
        >>> luminance(255, 255, 255)
        255
        >>> luminance(255, 255, 255, 0)
        0
    """
    r16 = (r * 0x101) * a // 0xFF
    g16 = (g * 0x101) * a // 0xFF
    b16 = (b * 0x101) * a // 0xFF
    return (19595 * r16 + 38470 * g16 + 7471 * b16 + (1 << 15)) >> 24


class RasterImageGenerator:
    """
    Converts a Pillow image into a GS v 0 raster command.

    Pixels darker than DARKNESS_THRESHOLD become printed dots. Rows are
    packed MSB-first and never share a byte; the unused low bits of a
    row's last byte stay zero.

    Args:
        image: Opened Pillow image; pixel data may still be unloaded
        mode: Raster scaling mode
        paper_width_inches: Printable width used to bound the image width
    """

    def __init__(
        self,
        image: Image.Image,
        mode: ImageMode = ImageMode.NORMAL,
        paper_width_inches: int = 2,
    ) -> None:
        self.image = image
        self.mode = mode
        self.paper_width_inches = paper_width_inches

    @property
    def max_width(self) -> int:
        return self.mode.max_width(self.paper_width_inches)

    @property
    def bytes_per_row(self) -> int:
        return (self.image.width + 7) // 8

    def validate(self) -> None:
        """
        Check the image geometry against printer limits.

        Only the header-derived size is used, so this is cheap to call
        before the pixel data is decoded.

        Raises:
            ImageSizeError: If the image is too wide for the mode or too tall
                            for the 16-bit height field.
        """
        width, height = self.image.size
        if width > self.max_width:
            raise ImageSizeError("width", width, self.max_width)
        if height > RASTER_MAX_DIMENSION:
            raise ImageSizeError("height", height, RASTER_MAX_DIMENSION)

    def pack_rows(self) -> bytes:
        """Return the 1-bit-per-pixel raster data, row by row."""
        rgba = _to_rgba(self.image)
        width, height = rgba.size
        pixels = rgba.tobytes()
        stride = width * 4

        packed = bytearray()
        for y in range(height):
            row = pixels[y * stride : (y + 1) * stride]
            current = 0
            for x in range(width):
                offset = x * 4
                gray = luminance(row[offset], row[offset + 1], row[offset + 2], row[offset + 3])
                if gray < DARKNESS_THRESHOLD:
                    current |= 0x80 >> (x & 7)
                if x & 7 == 7:
                    packed.append(current)
                    current = 0
            if width & 7:
                packed.append(current)
        return bytes(packed)

    def render_command(self) -> bytes:
        """Validate, decode and return the complete raster command."""
        self.validate()
        data = self.pack_rows()
        logger.debug(
            "Raster image %dx%d mode=%s (%d bytes per row)",
            self.image.width,
            self.image.height,
            self.mode.key,
            self.bytes_per_row,
        )
        return print_raster_image(self.mode, self.bytes_per_row, self.image.height, data)


def _to_rgba(image: Image.Image) -> Image.Image:
    """
    Convert to 8-bit RGBA.

    Pillow clips wide gray samples to 255 on conversion; they are scaled
    down to their high byte instead so dark 16-bit pixels stay dark.
    """
    if image.mode in _WIDE_GRAY_MODES:
        wide = image.convert("I")
        narrow = bytes(min(max(v, 0) >> 8, 0xFF) for v in wide.getdata())
        image = Image.frombytes("L", wide.size, narrow)
    return image.convert("RGBA")


def open_image(path: Union[str, Path]) -> Image.Image:
    """
    Lazily open an image file, mapping failures to ResourceAccessError.

    Only the header is read. Pillow's decompression-bomb check is off for
    this call; the caller bounds the geometry with
    ``RasterImageGenerator.validate()`` before any pixel data is decoded.
    """
    saved_limit = Image.MAX_IMAGE_PIXELS
    Image.MAX_IMAGE_PIXELS = None
    try:
        return Image.open(path)
    except _IMAGE_ERRORS as e:
        raise ResourceAccessError(str(path), str(e)) from e
    finally:
        Image.MAX_IMAGE_PIXELS = saved_limit


def _resolve_mode(raw_mode: Optional[str]) -> ImageMode:
    if raw_mode is None:
        return ImageMode.NORMAL
    mode = IMAGE_MODES.get(raw_mode)
    if mode is None:
        raise UnsupportedValueError("image mode", raw_mode, IMAGE_MODES)
    return mode


def image_command(
    attributes: Attributes, settings: Optional[EncoderSettings] = None
) -> bytes:
    """
    Producer for the ``<img>`` tag.

    The file header is read first to check the size; the pixel data is
    only decoded once the geometry is known to fit.

    Raises:
        MissingAttributeError: If ``src`` is absent.
        ResourceAccessError: If the file cannot be opened or decoded.
        UnsupportedValueError: For an unknown ``mode``.
        ImageSizeError: If the image exceeds printer limits.
    """
    settings = settings or EncoderSettings()
    src = attributes.require(IMG_TAG, "src")

    with open_image(src) as image:
        generator = RasterImageGenerator(
            image,
            _resolve_mode(attributes.get("mode")),
            settings.paper_width_inches,
        )
        generator.validate()
        try:
            image.load()
        except _IMAGE_ERRORS as e:
            raise ResourceAccessError(src, str(e)) from e
        return generator.render_command()

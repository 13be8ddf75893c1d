from __future__ import annotations

import re
from typing import List, Optional, Set

from soup2escpos import get_logger
from soup2escpos.escpos.commands.barcode import (
    BARCODE_HEIGHT_MAX,
    BARCODE_HEIGHT_MIN,
    BARCODE_SYMBOLOGIES,
    GS_BARCODE_HEIGHT_RESET,
    GS_HRI_FONT_RESET,
    GS_HRI_POSITION_RESET,
    BarcodeHRI,
    BarcodeHRIFont,
    BarcodeSymbology,
    print_barcode,
    set_barcode_height,
    set_hri_font,
    set_hri_position,
)
from soup2escpos.exceptions import (
    BarcodeCharsetError,
    BarcodeLengthError,
    UnsupportedValueError,
    ValueRangeError,
)
from soup2escpos.model.tokens import Attributes

logger = get_logger(__name__)

__all__ = [
    "BarcodeGenerator",
    "barcode_command",
]

BARCODE_TAG = "barcode"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

_HRI_POSITIONS = {position.key: position for position in BarcodeHRI}
_HRI_FONTS = {font.key: font for font in BarcodeHRIFont}


class BarcodeGenerator:
    """
    Builds the GS k command for one barcode, bracketed by optional
    height / HRI configuration commands.

    Each configured option contributes a "set" command before the barcode
    and a matching "reset to default" command after it, so the printer
    state is unchanged once the barcode is printed.

    Args:
        symbology: Barcode type from the symbology table
        data: Payload bytes
        height: Optional bar height in dots
        hri_position: Optional HRI text position
        hri_font: Optional HRI font
    """

    def __init__(
        self,
        symbology: BarcodeSymbology,
        data: bytes,
        height: Optional[int] = None,
        hri_position: Optional[BarcodeHRI] = None,
        hri_font: Optional[BarcodeHRIFont] = None,
    ) -> None:
        if not isinstance(symbology, BarcodeSymbology):
            raise TypeError(f"symbology must be BarcodeSymbology enum, got {type(symbology)!r}")
        self.symbology = symbology
        self.data = data
        self.height = height
        self.hri_position = hri_position
        self.hri_font = hri_font

    @classmethod
    def from_attributes(cls, attributes: Attributes) -> "BarcodeGenerator":
        """
        Resolve ``<barcode>`` attributes into a generator.

        Raises:
            MissingAttributeError: If ``mode`` or ``value`` is absent.
            UnsupportedValueError: For an unknown mode, HRI position or HRI font.
            ValueRangeError: If ``height`` is not an integer in range.
        """
        mode = attributes.require(BARCODE_TAG, "mode")
        symbology = BARCODE_SYMBOLOGIES.get(mode)
        if symbology is None:
            raise UnsupportedValueError("barcode mode", mode, BARCODE_SYMBOLOGIES)

        data = attributes.require(BARCODE_TAG, "value").encode("utf-8")
        # Payload errors take precedence over option errors.
        cls(symbology, data).validate()

        height: Optional[int] = None
        raw_height = attributes.get("height")
        if raw_height is not None:
            height = _parse_height(raw_height)

        hri_position: Optional[BarcodeHRI] = None
        raw_position = attributes.get("hri_pos")
        if raw_position is not None:
            hri_position = _HRI_POSITIONS.get(raw_position)
            if hri_position is None:
                raise UnsupportedValueError("HRI position", raw_position, _HRI_POSITIONS)

        hri_font: Optional[BarcodeHRIFont] = None
        raw_font = attributes.get("hri_font")
        if raw_font is not None:
            hri_font = _HRI_FONTS.get(raw_font)
            if hri_font is None:
                raise UnsupportedValueError("HRI font", raw_font, _HRI_FONTS)

        return cls(symbology, data, height, hri_position, hri_font)

    def validate(self) -> None:
        """
        Check the payload against the symbology's length and character rules.

        Raises:
            BarcodeLengthError: If the payload is too short or too long.
            BarcodeCharsetError: On the first byte outside every valid range.
        """
        symbology = self.symbology
        length = len(self.data)

        if length < symbology.min_length:
            raise BarcodeLengthError("minimum", symbology.min_length, length)
        if symbology.max_length > 0 and length > symbology.max_length:
            raise BarcodeLengthError("maximum", symbology.max_length, length)

        for position, byte in enumerate(self.data):
            if not symbology.accepts_byte(byte):
                raise BarcodeCharsetError(position, byte)

    def render_command(self) -> bytes:
        """Validate and return the full command sequence."""
        self.validate()

        pre_codes: List[bytes] = []
        post_codes: List[bytes] = []

        if self.height is not None:
            pre_codes.append(set_barcode_height(self.height))
            post_codes.append(GS_BARCODE_HEIGHT_RESET)
        if self.hri_position is not None:
            pre_codes.append(set_hri_position(self.hri_position))
            post_codes.append(GS_HRI_POSITION_RESET)
        if self.hri_font is not None:
            pre_codes.append(set_hri_font(self.hri_font))
            post_codes.append(GS_HRI_FONT_RESET)

        logger.debug(
            "Barcode %s data=%r height=%s hri_pos=%s hri_font=%s",
            self.symbology.key,
            self.data,
            self.height,
            self.hri_position,
            self.hri_font,
        )

        return b"".join(pre_codes) + print_barcode(self.symbology, self.data) + b"".join(post_codes)

    @classmethod
    def supported_modes(cls) -> Set[str]:
        return set(BARCODE_SYMBOLOGIES)


def _parse_height(raw: str) -> int:
    if not _INTEGER_RE.fullmatch(raw):
        raise ValueRangeError("height", raw, BARCODE_HEIGHT_MIN, BARCODE_HEIGHT_MAX)
    height = int(raw)
    if height < BARCODE_HEIGHT_MIN or height > BARCODE_HEIGHT_MAX:
        raise ValueRangeError("height", raw, BARCODE_HEIGHT_MIN, BARCODE_HEIGHT_MAX)
    return height


def barcode_command(attributes: Attributes) -> bytes:
    """Producer for the ``<barcode>`` tag."""
    return BarcodeGenerator.from_attributes(attributes).render_command()

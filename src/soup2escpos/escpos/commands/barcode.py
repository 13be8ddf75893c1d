"""
Barcode commands for ESC/POS thermal printers.

Contains the symbology table for the native GS k barcode command (function A,
NUL-terminated form) and the GS h / GS H / GS f configuration commands that
set bar height, HRI position and HRI font.

Reference: Epson ESC/POS Application Programming Guide, "Bar Code"
Supported Types: UPC-A, EAN-13, EAN-8, CODE39

IMPORTANT: Configuration commands persist until changed or until ESC @.
           Callers that change them for one barcode should restore the
           documented defaults afterwards (see the *_RESET constants).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Final, Tuple

__all__ = [
    "ByteRange",
    "BarcodeSymbology",
    "BarcodeHRI",
    "BarcodeHRIFont",
    "BARCODE_SYMBOLOGIES",
    "BARCODE_HEIGHT_MIN",
    "BARCODE_HEIGHT_MAX",
    "BARCODE_HEIGHT_DEFAULT",
    "GS_BARCODE_HEIGHT_RESET",
    "GS_HRI_POSITION_RESET",
    "GS_HRI_FONT_RESET",
    "set_barcode_height",
    "set_hri_position",
    "set_hri_font",
    "print_barcode",
]

# =============================================================================
# CHARACTER RANGES
# =============================================================================


@dataclass(frozen=True)
class ByteRange:
    """Inclusive interval of byte values."""

    min: int
    max: int

    def __contains__(self, byte: object) -> bool:
        return isinstance(byte, int) and self.min <= byte <= self.max


DIGITS: Final[Tuple[ByteRange, ...]] = (ByteRange(0x30, 0x39),)

CODE39_CHARS: Final[Tuple[ByteRange, ...]] = (
    ByteRange(0x30, 0x39),  # 0-9
    ByteRange(0x41, 0x5A),  # A-Z
    ByteRange(0x20, 0x20),  # space
    ByteRange(0x24, 0x25),  # $ %
    ByteRange(0x2B, 0x2B),  # +
    ByteRange(0x2D, 0x2F),  # - . /
)

# =============================================================================
# BARCODE TYPE CONSTANTS
# =============================================================================


class BarcodeSymbology(Enum):
    """
    Barcode symbologies available through GS k (function A).

    Format: (markup key, type code m, min length, max length, valid ranges)
    A max length of 0 means the printer imposes no upper bound.
    """

    UPC = ("upc", 0x00, 11, 12, DIGITS)
    """
    UPC-A. 11 digits (printer adds the check digit) or 12 digits.
    Example: "01234567890"
    """

    EAN13 = ("ean13", 0x02, 12, 13, DIGITS)
    """
    EAN-13 (JAN-13). 12 digits (check digit added) or 13 digits.
    Example: "978014300723"
    """

    EAN8 = ("ean8", 0x03, 7, 8, DIGITS)
    """
    EAN-8 (JAN-8). 7 digits (check digit added) or 8 digits.
    Example: "1234567"
    """

    CODE39 = ("code39", 0x04, 1, 0, CODE39_CHARS)
    """
    CODE 39. Variable length: 0-9, A-Z, space, $ % + - . /
    Start/stop '*' characters are added by the printer.
    Example: "PART-12345"
    """

    def __init__(
        self,
        key: str,
        code: int,
        min_length: int,
        max_length: int,
        valid_ranges: Tuple[ByteRange, ...],
    ) -> None:
        self.key = key
        self.code = code
        self.min_length = min_length
        self.max_length = max_length
        self.valid_ranges = valid_ranges

    def accepts_byte(self, byte: int) -> bool:
        return any(byte in byte_range for byte_range in self.valid_ranges)


BARCODE_SYMBOLOGIES: Final[Dict[str, BarcodeSymbology]] = {
    symbology.key: symbology for symbology in BarcodeSymbology
}


class BarcodeHRI(Enum):
    """
    Human Readable Interpretation (HRI) text position.

    Each value is the parameter byte sent in GS H n.
    """

    NONE = 0
    """No HRI text printed."""

    ABOVE = 1
    """HRI text above the bars."""

    BELOW = 2
    """HRI text below the bars (power-on default)."""

    BOTH = 3
    """HRI text above and below the bars."""

    @property
    def key(self) -> str:
        return self.name.lower()


class BarcodeHRIFont(Enum):
    """HRI character font, sent in GS f n."""

    NORMAL = 0
    """Font A (power-on default)."""

    SMALL = 1
    """Font B."""

    @property
    def key(self) -> str:
        return self.name.lower()


# =============================================================================
# CONFIGURATION COMMANDS
# =============================================================================

BARCODE_HEIGHT_MIN: Final[int] = 8
BARCODE_HEIGHT_MAX: Final[int] = 162
BARCODE_HEIGHT_DEFAULT: Final[int] = 162


def set_barcode_height(height: int) -> bytes:
    """
    Build GS h n (bar height in dots).

    Command: GS h n
    Hex: 1D 68 n

    Args:
        height: Bar height in dots (BARCODE_HEIGHT_MIN-BARCODE_HEIGHT_MAX).

    Raises:
        ValueError: If height is outside the accepted range.
    """
    if not (BARCODE_HEIGHT_MIN <= height <= BARCODE_HEIGHT_MAX):
        raise ValueError(
            f"Barcode height must be {BARCODE_HEIGHT_MIN}-{BARCODE_HEIGHT_MAX}, got {height}"
        )
    return b"\x1dh" + bytes([height])


def set_hri_position(position: BarcodeHRI) -> bytes:
    """
    Build GS H n (HRI position).

    Command: GS H n
    Hex: 1D 48 n
    """
    return b"\x1dH" + bytes([position.value])


def set_hri_font(font: BarcodeHRIFont) -> bytes:
    """
    Build GS f n (HRI font).

    Command: GS f n
    Hex: 1D 66 n
    """
    return b"\x1df" + bytes([font.value])


GS_BARCODE_HEIGHT_RESET: Final[bytes] = set_barcode_height(BARCODE_HEIGHT_DEFAULT)
"""Restore the default bar height (GS h 162)."""

GS_HRI_POSITION_RESET: Final[bytes] = set_hri_position(BarcodeHRI.BELOW)
"""Restore the default HRI position (GS H 2)."""

GS_HRI_FONT_RESET: Final[bytes] = set_hri_font(BarcodeHRIFont.NORMAL)
"""Restore the default HRI font (GS f 0)."""

# =============================================================================
# BARCODE PRINTING
# =============================================================================


def print_barcode(symbology: BarcodeSymbology, data: bytes) -> bytes:
    """
    Build the ESC/POS command that prints a barcode.

    Command: GS k m d1...dk NUL
    Hex: 1D 6B m d1...dk 00

    The payload is not validated here beyond the terminator constraint;
    see ``soup2escpos.barcodegen.BarcodeGenerator`` for symbology rules.

    Args:
        symbology: Barcode type (see BarcodeSymbology).
        data: Payload bytes.

    Returns:
        ESC/POS command bytes.

    Raises:
        ValueError: If data contains NUL, which would end the payload early.

    Example:
        >>> print_barcode(BarcodeSymbology.EAN8, b"1234567")
        b'\\x1dk\\x031234567\\x00'
    """
    if b"\x00" in data:
        raise ValueError("Barcode data must not contain NUL bytes")
    return b"\x1dk" + bytes([symbology.code]) + data + b"\x00"

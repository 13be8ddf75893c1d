"""
Raster bit-image commands for ESC/POS thermal printers.

Contains the GS v 0 raster image command and its scaling modes. Raster data
is sent row by row, top to bottom, one bit per dot (MSB = leftmost dot,
1 = print). Every row starts on a byte boundary.

Reference: Epson ESC/POS Application Programming Guide, GS v 0
Resolution: 180 × 180 DPI on TM-series 58 mm printers
"""

from enum import Enum
from typing import Dict, Final

__all__ = [
    "ImageMode",
    "IMAGE_MODES",
    "RASTER_MAX_DIMENSION",
    "print_raster_image",
]

RASTER_MAX_DIMENSION: Final[int] = 0xFFFF  # xL xH / yL yH are 16-bit fields

# =============================================================================
# RASTER MODE CONSTANTS
# =============================================================================


class ImageMode(Enum):
    """
    Raster bit-image scaling modes.

    Format: (markup key, mode byte m, effective horizontal DPI)
    Double-width modes halve the horizontal density, so the widest image
    that fits the paper is halved as well.
    """

    NORMAL = ("normal", 0x00, 180)
    """Normal size (180 × 180 DPI)."""

    WIDE = ("wide", 0x01, 90)
    """Double-width (90 × 180 DPI)."""

    TALL = ("tall", 0x02, 180)
    """Double-height (180 × 90 DPI)."""

    HUGE = ("huge", 0x03, 90)
    """Quadruple size (90 × 90 DPI)."""

    def __init__(self, key: str, code: int, horizontal_dpi: int) -> None:
        self.key = key
        self.code = code
        self.horizontal_dpi = horizontal_dpi

    def max_width(self, paper_width_inches: int) -> int:
        """Widest image, in dots, that fits the given paper width."""
        return paper_width_inches * self.horizontal_dpi


IMAGE_MODES: Final[Dict[str, ImageMode]] = {mode.key: mode for mode in ImageMode}

# =============================================================================
# RASTER IMAGE PRINTING
# =============================================================================


def print_raster_image(mode: ImageMode, bytes_per_row: int, height: int, data: bytes) -> bytes:
    """
    Generate the ESC/POS command that prints a raster bit image.

    Command: GS v 0 m xL xH yL yH d1...dk
    Hex: 1D 76 30 m xL xH yL yH d1...dk

    Args:
        mode: Scaling mode (see ImageMode).
        bytes_per_row: Row length in bytes, i.e. ceil(width / 8).
        height: Number of rows.
        data: Packed raster rows, ``bytes_per_row * height`` bytes.

    Returns:
        ESC/POS command bytes.

    Raises:
        ValueError: If a dimension does not fit its 16-bit field or the data
                    length does not match the geometry.

    Example:
        >>> # 8×2 image: top row black, bottom row white
        >>> print_raster_image(ImageMode.NORMAL, 1, 2, b"\\xff\\x00")
        b'\\x1dv0\\x00\\x01\\x00\\x02\\x00\\xff\\x00'
    """
    if not (0 <= bytes_per_row <= RASTER_MAX_DIMENSION):
        raise ValueError(f"Bytes per row must be 0-{RASTER_MAX_DIMENSION}, got {bytes_per_row}")

    if not (0 <= height <= RASTER_MAX_DIMENSION):
        raise ValueError(f"Height must be 0-{RASTER_MAX_DIMENSION}, got {height}")

    if len(data) != bytes_per_row * height:
        raise ValueError(
            f"Data length ({len(data)} bytes) must equal bytes_per_row × height "
            f"({bytes_per_row} × {height})"
        )

    # Little-endian 16-bit geometry
    xL = bytes_per_row & 0xFF
    xH = (bytes_per_row >> 8) & 0xFF
    yL = height & 0xFF
    yH = (height >> 8) & 0xFF

    return b"\x1dv0" + bytes([mode.code, xL, xH, yL, yH]) + data

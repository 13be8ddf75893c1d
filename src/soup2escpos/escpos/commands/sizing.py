"""
Character sizing commands for ESC/POS thermal printers.

Uses the combined print-mode command ESC ! n. Bit 4 of ``n`` selects
double-height, bit 5 double-width; setting both gives quadruple size.
Any ESC ! call replaces the whole print mode, so the single reset
sequence cancels every size variant.

Reference: Epson ESC/POS Application Programming Guide, ESC !
"""

from typing import Final

__all__ = [
    "PRINT_MODE_DOUBLE_HEIGHT",
    "PRINT_MODE_DOUBLE_WIDTH",
    "select_print_mode",
    "ESC_DOUBLE_HEIGHT_ON",
    "ESC_DOUBLE_WIDTH_ON",
    "ESC_QUAD_SIZE_ON",
    "ESC_PRINT_MODE_RESET",
]

PRINT_MODE_DOUBLE_HEIGHT: Final[int] = 0x10
PRINT_MODE_DOUBLE_WIDTH: Final[int] = 0x20


def select_print_mode(n: int) -> bytes:
    """
    Build ESC ! n.

    Args:
        n: Print mode bit field (0-255).

    Returns:
        ESC/POS command bytes.

    Raises:
        ValueError: If n does not fit in one byte.

    Example:
        >>> select_print_mode(PRINT_MODE_DOUBLE_WIDTH)
        b'\\x1b! '
    """
    if not (0 <= n <= 0xFF):
        raise ValueError(f"Print mode must be 0-255, got {n}")
    return b"\x1b!" + bytes([n])


ESC_DOUBLE_HEIGHT_ON: Final[bytes] = select_print_mode(PRINT_MODE_DOUBLE_HEIGHT)
"""
Double-height characters.

Command: ESC ! 16
Hex: 1B 21 10
"""

ESC_DOUBLE_WIDTH_ON: Final[bytes] = select_print_mode(PRINT_MODE_DOUBLE_WIDTH)
"""
Double-width characters.

Command: ESC ! 32
Hex: 1B 21 20
"""

ESC_QUAD_SIZE_ON: Final[bytes] = select_print_mode(
    PRINT_MODE_DOUBLE_HEIGHT | PRINT_MODE_DOUBLE_WIDTH
)
"""
Double-width and double-height characters.

Command: ESC ! 48
Hex: 1B 21 30
"""

ESC_PRINT_MODE_RESET: Final[bytes] = select_print_mode(0)
"""
Return to the default print mode (font A, normal size, no emphasis).

Command: ESC ! 0
Hex: 1B 21 00
"""

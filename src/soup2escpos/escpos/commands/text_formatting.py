"""
Text formatting ESC/POS commands for thermal receipt printers.

Contains commands for emphasized (bold), underline, reverse (white-on-black)
and the smaller character font. All sequences take an explicit on/off
parameter byte, so each "off" command is the same opcode with ``n = 0``.

Reference: Epson ESC/POS Application Programming Guide, "Print characters"
Compatibility: TM-T20, TM-T88, TM-m30 and ESC/POS clones
"""

from typing import Final

__all__ = [
    "ESC_BOLD_ON",
    "ESC_BOLD_OFF",
    "ESC_UNDERLINE_ON",
    "ESC_UNDERLINE_DOUBLE",
    "ESC_UNDERLINE_OFF",
    "GS_REVERSE_ON",
    "GS_REVERSE_OFF",
    "ESC_FONT_SMALL",
    "ESC_FONT_NORMAL",
]

# =============================================================================
# EMPHASIZED (BOLD) MODE
# =============================================================================

ESC_BOLD_ON: Final[bytes] = b"\x1bE\x01"
"""
Turn emphasized mode on.

Command: ESC E 1
Hex: 1B 45 01
Reset: ESC E 0 or ESC @

Example:
    >>> printer.send(ESC_BOLD_ON + b"TOTAL" + ESC_BOLD_OFF)
"""

ESC_BOLD_OFF: Final[bytes] = b"\x1bE\x00"
"""
Turn emphasized mode off.

Command: ESC E 0
Hex: 1B 45 00
"""

# =============================================================================
# UNDERLINE
# =============================================================================

ESC_UNDERLINE_ON: Final[bytes] = b"\x1b-\x01"
"""
Turn on 1-dot thick underline.

Command: ESC - 1
Hex: 1B 2D 01
Note: Rotated and reverse-printed characters are not underlined.
"""

ESC_UNDERLINE_DOUBLE: Final[bytes] = b"\x1b-\x02"
"""
Turn on 2-dot thick underline.

Command: ESC - 2
Hex: 1B 2D 02
"""

ESC_UNDERLINE_OFF: Final[bytes] = b"\x1b-\x00"
"""
Turn underline off (cancels both 1-dot and 2-dot modes).

Command: ESC - 0
Hex: 1B 2D 00
"""

# =============================================================================
# REVERSE (WHITE/BLACK) PRINTING
# =============================================================================

GS_REVERSE_ON: Final[bytes] = b"\x1dB\x01"
"""
Turn white/black reverse printing on.

Command: GS B 1
Hex: 1D 42 01
Effect: Characters print white on a black background.
"""

GS_REVERSE_OFF: Final[bytes] = b"\x1dB\x00"
"""
Turn white/black reverse printing off.

Command: GS B 0
Hex: 1D 42 00
"""

# =============================================================================
# CHARACTER FONT
# =============================================================================

ESC_FONT_SMALL: Final[bytes] = b"\x1bM\x01"
"""
Select character font B (9×17 on most 80 mm printers).

Command: ESC M 1
Hex: 1B 4D 01
"""

ESC_FONT_NORMAL: Final[bytes] = b"\x1bM\x00"
"""
Select character font A (12×24, the power-on default).

Command: ESC M 0
Hex: 1B 4D 00
"""

"""
Line feed and justification commands for ESC/POS thermal printers.

Justification (ESC a n) only takes effect at the beginning of a line, which
is why the end sequences of aligned blocks emit LF before restoring left
justification.

Reference: Epson ESC/POS Application Programming Guide, ESC a
"""

from typing import Final

__all__ = [
    "LF",
    "ESC_ALIGN_LEFT",
    "ESC_ALIGN_CENTER",
    "ESC_ALIGN_RIGHT",
]

LF: Final[bytes] = b"\n"
"""
Print the buffer and feed one line.

Hex: 0A
"""

ESC_ALIGN_LEFT: Final[bytes] = b"\x1ba\x00"
"""
Left justification (default).

Command: ESC a 0
Hex: 1B 61 00
"""

ESC_ALIGN_CENTER: Final[bytes] = b"\x1ba\x01"
"""
Centered justification.

Command: ESC a 1
Hex: 1B 61 01
"""

ESC_ALIGN_RIGHT: Final[bytes] = b"\x1ba\x02"
"""
Right justification.

Command: ESC a 2
Hex: 1B 61 02
"""

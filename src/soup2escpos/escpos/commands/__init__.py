"""
ESC/POS command constants for thermal receipt printers.

This package contains the low-level byte sequences emitted by the markup
encoder. Constants are plain ``bytes``; parameterized commands are small
builder functions returning ``bytes``.

Module Structure:
    commands/
    ├── __init__.py             # This file (public API exports)
    ├── text_formatting.py      # Bold, underline, reverse, small font
    ├── sizing.py               # ESC ! print mode (double width/height)
    ├── positioning.py          # Line feed, justification
    ├── barcode.py              # GS k barcodes, GS h/H/f configuration
    └── graphics.py             # GS v 0 raster images

Usage:
    >>> from soup2escpos.escpos.commands import ESC_BOLD_ON, ESC_BOLD_OFF
    >>> command = ESC_BOLD_ON + b"Bold text" + ESC_BOLD_OFF
"""

# Barcode commands
from soup2escpos.escpos.commands.barcode import (
    BARCODE_HEIGHT_DEFAULT,
    BARCODE_HEIGHT_MAX,
    BARCODE_HEIGHT_MIN,
    BARCODE_SYMBOLOGIES,
    GS_BARCODE_HEIGHT_RESET,
    GS_HRI_FONT_RESET,
    GS_HRI_POSITION_RESET,
    BarcodeHRI,
    BarcodeHRIFont,
    BarcodeSymbology,
    ByteRange,
    print_barcode,
    set_barcode_height,
    set_hri_font,
    set_hri_position,
)

# Graphics commands
from soup2escpos.escpos.commands.graphics import (
    IMAGE_MODES,
    RASTER_MAX_DIMENSION,
    ImageMode,
    print_raster_image,
)

# Line feed and justification
from soup2escpos.escpos.commands.positioning import (
    ESC_ALIGN_CENTER,
    ESC_ALIGN_LEFT,
    ESC_ALIGN_RIGHT,
    LF,
)

# Sizing commands
from soup2escpos.escpos.commands.sizing import (
    ESC_DOUBLE_HEIGHT_ON,
    ESC_DOUBLE_WIDTH_ON,
    ESC_PRINT_MODE_RESET,
    ESC_QUAD_SIZE_ON,
    PRINT_MODE_DOUBLE_HEIGHT,
    PRINT_MODE_DOUBLE_WIDTH,
    select_print_mode,
)

# Text formatting commands
from soup2escpos.escpos.commands.text_formatting import (
    ESC_BOLD_OFF,
    ESC_BOLD_ON,
    ESC_FONT_NORMAL,
    ESC_FONT_SMALL,
    ESC_UNDERLINE_DOUBLE,
    ESC_UNDERLINE_OFF,
    ESC_UNDERLINE_ON,
    GS_REVERSE_OFF,
    GS_REVERSE_ON,
)

__all__ = [
    # Text formatting
    "ESC_BOLD_ON",
    "ESC_BOLD_OFF",
    "ESC_UNDERLINE_ON",
    "ESC_UNDERLINE_DOUBLE",
    "ESC_UNDERLINE_OFF",
    "GS_REVERSE_ON",
    "GS_REVERSE_OFF",
    "ESC_FONT_SMALL",
    "ESC_FONT_NORMAL",
    # Sizing
    "PRINT_MODE_DOUBLE_HEIGHT",
    "PRINT_MODE_DOUBLE_WIDTH",
    "select_print_mode",
    "ESC_DOUBLE_HEIGHT_ON",
    "ESC_DOUBLE_WIDTH_ON",
    "ESC_QUAD_SIZE_ON",
    "ESC_PRINT_MODE_RESET",
    # Positioning
    "LF",
    "ESC_ALIGN_LEFT",
    "ESC_ALIGN_CENTER",
    "ESC_ALIGN_RIGHT",
    # Barcode
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
    # Graphics
    "ImageMode",
    "IMAGE_MODES",
    "RASTER_MAX_DIMENSION",
    "print_raster_image",
]

"""
barcodegen

Native printer barcodes for the ``<barcode>`` tag.

Public API:
    - BarcodeGenerator: validates a payload and builds the GS k command (class)
    - barcode_command: tag producer taking the start-tag attributes

Example:
    >>> from soup2escpos.barcodegen import BarcodeGenerator
    >>> from soup2escpos.escpos.commands import BarcodeSymbology
    >>> BarcodeGenerator(BarcodeSymbology.EAN8, b"1234567").render_command()
    b'\\x1dk\\x031234567\\x00'
"""

from .barcode_generator import BarcodeGenerator, barcode_command

__all__ = [
    "BarcodeGenerator",
    "barcode_command",
]

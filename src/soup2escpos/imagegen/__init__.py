"""
imagegen

Raster images for the ``<img>`` tag.

Public API:
    - RasterImageGenerator: converts a Pillow image to a GS v 0 command (class)
    - image_command: tag producer taking the start-tag attributes
    - open_image: lazy image open with ResourceAccessError mapping
    - luminance: 8-bit gray level used for the darkness threshold

Dependencies:
    Pillow
"""

from .raster_generator import (
    DARKNESS_THRESHOLD,
    RasterImageGenerator,
    image_command,
    luminance,
    open_image,
)

__all__ = [
    "DARKNESS_THRESHOLD",
    "RasterImageGenerator",
    "image_command",
    "luminance",
    "open_image",
]

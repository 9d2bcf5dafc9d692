"""
Image processing utilities.

This package provides focused image utilities:
- codec: Decode files to RGBA buffers and encode buffers to PNG (Pillow)
- processors: Color keying and nearest-neighbour resizing (NumPy, OpenCV)
"""

from core.image.codec import RasterImage, decode, encode
from core.image.processors import (
    make_color_transparent,
    nearest_neighbor_maps,
    remap_nearest,
    resize_nearest,
)

__all__ = [
    "RasterImage",
    "decode",
    "encode",
    "make_color_transparent",
    "nearest_neighbor_maps",
    "remap_nearest",
    "resize_nearest",
]

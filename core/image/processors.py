"""
Image processing operations.

Handles pixel-level manipulation on RGBA buffers:
- Color keying (make one color transparent)
- Nearest-neighbour resizing with mirrored edges
"""

import logging
from typing import Tuple

import cv2
import numpy as np

from core.constants import ImageConstants

logger = logging.getLogger(__name__)


def make_color_transparent(pixels: np.ndarray, color: Tuple[int, int, int]) -> np.ndarray:
    """
    Set alpha to fully transparent for every pixel matching a color.

    Only the alpha channel of exact RGB matches changes. All other pixels,
    including their alpha, are copied unchanged.

    Args:
        pixels: RGBA image as NumPy array (H x W x 4)
        color: (r, g, b) color key

    Returns:
        New RGBA array; the input is not modified
    """
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError(f"Expected RGBA pixel buffer, got shape {pixels.shape}")

    key = np.array(color, dtype=pixels.dtype)
    mask = np.all(pixels[..., :3] == key, axis=-1)

    result = pixels.copy()
    result[mask, 3] = ImageConstants.ALPHA_TRANSPARENT

    logger.debug(f"Keyed {int(mask.sum())} pixels matching {color}")
    return result


def nearest_neighbor_maps(
    src_width: int, src_height: int, dst_width: int, dst_height: int
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build sampling maps from destination to source coordinates.

    Destination pixel d samples source pixel floor((d + 0.5) * src / dst),
    i.e. the source pixel under the destination pixel centre.

    Returns:
        Tuple of (map_x, map_y), float32 arrays of shape (dst_height, dst_width)
    """
    xs = np.floor((np.arange(dst_width) + 0.5) * (src_width / dst_width))
    ys = np.floor((np.arange(dst_height) + 0.5) * (src_height / dst_height))
    map_x, map_y = np.meshgrid(xs.astype(np.float32), ys.astype(np.float32))
    return map_x, map_y


def remap_nearest(pixels: np.ndarray, map_x: np.ndarray, map_y: np.ndarray) -> np.ndarray:
    """
    Sample pixels at the given source coordinates without interpolation.

    Coordinates outside the source are reflected across its edges as if the
    image were tiled with mirrored copies (-1 -> 0, width -> width - 1).

    Args:
        pixels: Source image as NumPy array
        map_x: Source x coordinate for each destination pixel
        map_y: Source y coordinate for each destination pixel

    Returns:
        Sampled image with the shape of the maps
    """
    return cv2.remap(
        np.ascontiguousarray(pixels),
        map_x.astype(np.float32),
        map_y.astype(np.float32),
        interpolation=cv2.INTER_NEAREST,
        borderMode=cv2.BORDER_REFLECT,
    )


def resize_nearest(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Resize image with nearest-neighbour sampling.

    Args:
        pixels: Input image as NumPy array
        width: Target width
        height: Target height

    Returns:
        Resized image as NumPy array
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid target size {width}x{height}")

    h, w = pixels.shape[:2]
    if (w, h) == (width, height):
        return pixels.copy()

    map_x, map_y = nearest_neighbor_maps(w, h, width, height)
    return remap_nearest(pixels, map_x, map_y)

"""
Image decoding and encoding.

Handles conversions between image files and pixel buffers:
- Image files (any format Pillow can read) to RGBA NumPy arrays
- RGBA NumPy arrays to PNG files, keeping resolution metadata
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from core.constants import ImageConstants
from core.exceptions import DecodeError, EncodeError

logger = logging.getLogger(__name__)


@dataclass
class RasterImage:
    """Decoded image: RGBA pixel buffer plus resolution metadata."""

    pixels: np.ndarray  # H x W x 4, uint8, RGBA order
    dpi: Optional[Tuple[float, float]] = None

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


def decode(path: Union[str, Path]) -> RasterImage:
    """
    Decode an image file into an RGBA pixel buffer.

    Sources without an alpha channel come back fully opaque. The file handle
    is closed before this function returns.

    Args:
        path: Image file path

    Returns:
        RasterImage with pixels and DPI (None if the file carries none)

    Raises:
        DecodeError: If the file is missing, unsupported or corrupt
    """
    path = Path(path)
    try:
        with Image.open(path) as image:
            image.load()
            dpi = _read_dpi(image)
            pixels = _to_rgba(image)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.error(f"Failed to decode {path}: {e}")
        raise DecodeError(path, str(e)) from e

    return RasterImage(pixels=pixels, dpi=dpi)


def encode(raster: RasterImage, path: Union[str, Path], format: str = ImageConstants.OUTPUT_FORMAT) -> None:
    """
    Encode an RGBA pixel buffer and write it to disk.

    Args:
        raster: Image to write
        path: Destination file path
        format: Pillow format name

    Raises:
        EncodeError: If the image cannot be encoded or written
    """
    path = Path(path)
    save_kwargs = {"format": format}
    if raster.dpi is not None:
        save_kwargs["dpi"] = raster.dpi

    try:
        image = Image.fromarray(np.ascontiguousarray(raster.pixels, dtype=np.uint8))
        image.save(path, **save_kwargs)
    except (OSError, ValueError, TypeError) as e:
        logger.error(f"Failed to encode {path}: {e}")
        raise EncodeError(path, str(e)) from e


def _to_rgba(image: Image.Image) -> np.ndarray:
    # Pillow's RGBA conversion clips 16-bit grey levels at 255
    if image.mode in ImageConstants.WIDE_GRAYSCALE_MODES:
        wide = np.clip(np.array(image, dtype=np.int64), 0, 0xFFFF)
        gray = (wide >> 8).astype(np.uint8)
        pixels = np.empty(gray.shape + (4,), dtype=np.uint8)
        pixels[..., :3] = gray[..., None]
        pixels[..., 3] = ImageConstants.ALPHA_OPAQUE
        return pixels

    if image.mode != ImageConstants.PIXEL_MODE:
        image = image.convert(ImageConstants.PIXEL_MODE)
    return np.array(image, dtype=np.uint8)


def _read_dpi(image: Image.Image) -> Optional[Tuple[float, float]]:
    dpi = image.info.get("dpi")
    if not dpi or len(dpi) != 2:
        return None
    x_dpi, y_dpi = float(dpi[0]), float(dpi[1])
    if x_dpi <= 0 or y_dpi <= 0:
        return None
    return x_dpi, y_dpi

"""
Image Engine - Batch image manipulation over a working directory.

This service runs the two batch operations:
- make_transparent: convert bitmaps to PNGs with one color keyed out
- resize: resize PNGs of an exact size in place

Every operation stops at the first error. Listeners are notified once per
successfully processed file.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Tuple, Union

from core.constants import ImageConstants
from core.events import EventHook
from core.exceptions import ConfigurationError
from core.file_enumerator import iter_files
from core.image.codec import RasterImage, decode, encode
from core.image.processors import make_color_transparent, resize_nearest
from schemas import ColorKey, Dimensions, ImageResizedEvent, MadeTransparentEvent

logger = logging.getLogger(__name__)


class ImageEngine:
    """
    Batch manipulates images in a working directory.

    Register listeners on ``made_transparent`` and ``image_resized`` before
    running an operation.
    """

    def __init__(self, working_path: Optional[Union[str, Path]] = None):
        """
        Initialize image engine.

        Args:
            working_path: Root directory for batch operations
        """
        self._working_path: Optional[Path] = None
        self.working_path = working_path

        self.made_transparent: EventHook[MadeTransparentEvent] = EventHook("made_transparent")
        self.image_resized: EventHook[ImageResizedEvent] = EventHook("image_resized")

    @property
    def working_path(self) -> Optional[Path]:
        return self._working_path

    @working_path.setter
    def working_path(self, value: Optional[Union[str, Path]]) -> None:
        self._working_path = Path(value) if value is not None else None

    def make_transparent(self, color: Union[ColorKey, str, Tuple[int, int, int]]) -> int:
        """
        Make transparent PNGs from all BMP images in the working path.

        Each ``<name>.bmp`` produces a sibling ``<name>.png``; the bitmap is not
        modified. Only the working directory itself is searched.

        Args:
            color: Color to make transparent (ColorKey, "#RRGGBB" or (r, g, b))

        Returns:
            Number of files converted

        Raises:
            FormatError: If color is a malformed hex string
            DecodeError: If a bitmap cannot be read
            EncodeError: If a PNG cannot be written
            OSError: If the working path cannot be enumerated
        """
        key = ColorKey.coerce(color)
        root = self._require_working_path()

        logger.info(f"Making {key} transparent in {root}")
        converted = 0
        for source in iter_files(
            root,
            ImageConstants.TRANSPARENT_SOURCE_PATTERN,
            recursive=ImageConstants.TRANSPARENT_SOURCE_RECURSIVE,
        ):
            event = self._make_file_transparent(source, key)
            converted += 1
            self.made_transparent.emit(event)

        logger.info(f"Converted {converted} bitmap(s) in {root}")
        return converted

    def resize(
        self,
        old: Union[Dimensions, str, Tuple[int, int]],
        new: Union[Dimensions, str, Tuple[int, int]],
    ) -> int:
        """
        Change the dimensions of all PNG images in the working path (recursively)
        that are exactly ``old`` to ``new``.

        Images of any other size are left untouched.

        Args:
            old: Size to match (Dimensions, "WxH" or (width, height))
            new: Target size (Dimensions, "WxH" or (width, height))

        Returns:
            Number of files resized

        Raises:
            FormatError: If a dimension string is malformed
            DecodeError: If an image cannot be read
            EncodeError: If a resized image cannot be written
            OSError: If enumeration or the file replacement fails
        """
        old_dims = Dimensions.coerce(old)
        new_dims = Dimensions.coerce(new)
        root = self._require_working_path()

        logger.info(f"Resizing {old_dims} images to {new_dims} under {root}")
        resized = 0
        skipped = 0
        for path in iter_files(
            root, ImageConstants.RESIZE_PATTERN, recursive=ImageConstants.RESIZE_RECURSIVE
        ):
            event = self._resize_file(path, old_dims, new_dims)
            if event is None:
                skipped += 1
                continue
            resized += 1
            self.image_resized.emit(event)

        logger.info(f"Resized {resized} image(s), skipped {skipped} under {root}")
        return resized

    def _require_working_path(self) -> Path:
        if self._working_path is None:
            raise ConfigurationError("Working path is not set")
        return self._working_path

    def _make_file_transparent(self, source: Path, key: ColorKey) -> MadeTransparentEvent:
        target = source.with_suffix(ImageConstants.OUTPUT_SUFFIX)

        image = decode(source)
        keyed = RasterImage(
            pixels=make_color_transparent(image.pixels, key.as_tuple()),
            dpi=image.dpi,
        )
        _write_replacing(keyed, target)

        logger.debug(f"{source} --> {target}")
        return MadeTransparentEvent(old_path=source, new_path=target)

    def _resize_file(
        self, path: Path, old: Dimensions, new: Dimensions
    ) -> Optional[ImageResizedEvent]:
        image = decode(path)
        if not old.matches(image.width, image.height):
            logger.debug(f"Skipping {path}: {image.width}x{image.height}")
            return None

        resized = RasterImage(
            pixels=resize_nearest(image.pixels, new.width, new.height),
            dpi=image.dpi,
        )
        _write_replacing(resized, path)

        logger.debug(f"{path}: {old} --> {new}")
        return ImageResizedEvent(
            path=path,
            old_width=old.width,
            old_height=old.height,
            new_width=new.width,
            new_height=new.height,
        )


def _write_replacing(raster: RasterImage, target: Path) -> None:
    """
    Encode raster to a temporary sibling and rename it over target.

    The rename is atomic, so target holds either its previous content or the
    complete new image. The temporary file is removed on failure.
    """
    tmp_path = target.with_name(target.name + ImageConstants.TEMP_SUFFIX)
    try:
        encode(raster, tmp_path)
        os.replace(tmp_path, target)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

"""
Notification records emitted by the image engine.

One record is emitted for each successfully processed file.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class MadeTransparentEvent:
    """A bitmap was converted to a transparent PNG"""

    old_path: Path
    new_path: Path


@dataclass(frozen=True)
class ImageResizedEvent:
    """An image was resized in place"""

    path: Path
    old_width: int
    old_height: int
    new_width: int
    new_height: int

    @property
    def old_dims(self) -> str:
        """Get old size as "WxH"."""
        return f"{self.old_width}x{self.old_height}"

    @property
    def new_dims(self) -> str:
        """Get new size as "WxH"."""
        return f"{self.new_width}x{self.new_height}"

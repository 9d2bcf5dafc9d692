"""
Image operation parameter models.

This module contains the value types accepted by the batch operations:
- ColorKey: RGB color made transparent
- Dimensions: width x height pair matched and produced by resize
"""

import re
from typing import Tuple, Union

from pydantic import BaseModel, Field, ValidationError

from core.constants import FormatConstants
from core.exceptions import FormatError

_HEX_COLOR_RE = re.compile(FormatConstants.HEX_COLOR_PATTERN)
_DIMENSIONS_RE = re.compile(FormatConstants.DIMENSIONS_PATTERN)


class ColorKey(BaseModel):
    """RGB color key (no alpha)"""

    class Config:
        extra = "forbid"
        frozen = True

    r: int = Field(..., ge=0, le=255, description="Red channel")
    g: int = Field(..., ge=0, le=255, description="Green channel")
    b: int = Field(..., ge=0, le=255, description="Blue channel")

    @classmethod
    def from_hex(cls, value: str) -> "ColorKey":
        """
        Parse a "#RRGGBB" string. Case-insensitive, the "#" is optional.

        Raises:
            FormatError: If value is not six hex digits
        """
        match = _HEX_COLOR_RE.fullmatch(value.strip()) if isinstance(value, str) else None
        if match is None:
            raise FormatError(str(value), FormatConstants.HEX_COLOR_EXPECTED)

        rgb = int(match.group(1), 16)
        return cls(r=(rgb >> 16) & 0xFF, g=(rgb >> 8) & 0xFF, b=rgb & 0xFF)

    @classmethod
    def coerce(cls, value: Union["ColorKey", str, Tuple[int, int, int]]) -> "ColorKey":
        """Accept a ColorKey, a hex string or an (r, g, b) tuple."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        r, g, b = value
        return cls(r=r, g=g, b=b)

    def to_hex(self) -> str:
        """Render as upper-case "#RRGGBB"."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def __str__(self) -> str:
        return self.to_hex()


class Dimensions(BaseModel):
    """Image size in pixels"""

    class Config:
        extra = "forbid"
        frozen = True

    width: int = Field(..., gt=0, description="Width")
    height: int = Field(..., gt=0, description="Height")

    @classmethod
    def parse(cls, value: str) -> "Dimensions":
        """
        Parse a "<width>x<height>" string, e.g. "16x16".

        Raises:
            FormatError: If value is not two positive integers separated by "x"
        """
        match = _DIMENSIONS_RE.fullmatch(value.strip()) if isinstance(value, str) else None
        if match is None:
            raise FormatError(str(value), FormatConstants.DIMENSIONS_EXPECTED)

        try:
            return cls(width=int(match.group(1)), height=int(match.group(2)))
        except ValidationError as e:
            raise FormatError(value, FormatConstants.DIMENSIONS_EXPECTED) from e

    @classmethod
    def coerce(cls, value: Union["Dimensions", str, Tuple[int, int]]) -> "Dimensions":
        """Accept Dimensions, a "WxH" string or a (width, height) tuple."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        width, height = value
        return cls(width=width, height=height)

    def matches(self, width: int, height: int) -> bool:
        """Check whether an image size equals these dimensions exactly."""
        return self.width == width and self.height == height

    def __str__(self) -> str:
        return f"{self.width}{FormatConstants.DIMENSIONS_SEPARATOR}{self.height}"

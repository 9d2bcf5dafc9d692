"""
Schemas Package

This package contains the value types shared across the application layers:
- image: operation parameters (ColorKey, Dimensions), validated with Pydantic
- events: immutable notification records emitted per processed file
"""

from .events import ImageResizedEvent, MadeTransparentEvent
from .image import ColorKey, Dimensions

__all__ = [
    "ColorKey",
    "Dimensions",
    "ImageResizedEvent",
    "MadeTransparentEvent",
]

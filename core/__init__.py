"""
Core modules for Image Transform
"""

from .events import EventHook
from .exceptions import (
    ConfigurationError,
    DecodeError,
    EncodeError,
    FormatError,
    ImageTransformError,
)
from .file_enumerator import iter_files

__all__ = [
    "EventHook",
    "iter_files",
    "ImageTransformError",
    "ConfigurationError",
    "FormatError",
    "DecodeError",
    "EncodeError",
]

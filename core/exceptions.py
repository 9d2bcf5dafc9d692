"""
Exception hierarchy for the Image Transform utility.

I/O failures (enumeration, file replacement) are not wrapped and propagate
as the built-in OSError family.
"""

from pathlib import Path
from typing import Optional, Union


class ImageTransformError(Exception):
    """Base class for all errors raised by the image engine and driver."""


class ConfigurationError(ImageTransformError):
    """Invalid arguments, or the working path is missing or not a directory."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        super().__init__(f"{message}: {self.path}" if self.path is not None else message)


class FormatError(ImageTransformError, ValueError):
    """Input string does not match the expected format."""

    def __init__(self, value: str, expected: str):
        self.value = value
        self.expected = expected
        super().__init__(f"Invalid value {value!r}, expected {expected}")


class DecodeError(ImageTransformError):
    """Image file could not be opened or decoded."""

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = Path(path)
        detail = f": {reason}" if reason else ""
        super().__init__(f"Failed to decode image {self.path}{detail}")


class EncodeError(ImageTransformError):
    """Image could not be encoded or written."""

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = Path(path)
        detail = f": {reason}" if reason else ""
        super().__init__(f"Failed to encode image {self.path}{detail}")

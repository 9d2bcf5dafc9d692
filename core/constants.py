"""
Constants and configuration values for the Image Transform utility.
Centralizes all fixed operation parameters.
"""


# Image Operation Constants
class ImageConstants:
    """Constants for the batch image operations."""

    # Transparency conversion
    TRANSPARENT_SOURCE_PATTERN = "*.bmp"
    TRANSPARENT_SOURCE_RECURSIVE = False

    # Resize
    RESIZE_PATTERN = "*.png"
    RESIZE_RECURSIVE = True

    # Output encoding
    OUTPUT_FORMAT = "PNG"
    OUTPUT_SUFFIX = ".png"
    TEMP_SUFFIX = ".tmp"

    # Alpha channel
    ALPHA_TRANSPARENT = 0
    ALPHA_OPAQUE = 255
    PIXEL_MODE = "RGBA"

    # 16-bit grayscale modes, reduced to 8 bits on decode
    WIDE_GRAYSCALE_MODES = ("I;16", "I;16L", "I;16B", "I;16N", "I")


# Parsing Constants
class FormatConstants:
    """Patterns accepted by the string parsers."""

    HEX_COLOR_PATTERN = r"#?([0-9a-fA-F]{6})"
    HEX_COLOR_EXPECTED = "#RRGGBB"
    DIMENSIONS_PATTERN = r"(\d+)x(\d+)"
    DIMENSIONS_EXPECTED = "<width>x<height>"
    DIMENSIONS_SEPARATOR = "x"


# System Constants
class SystemConstants:
    """Constants for system operations."""

    # Logging
    LOG_LEVEL_DEFAULT = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    # Environment variables
    ENV_PREFIX = "IMAGE_TRANSFORM_"

    # Command line
    PROGRAM_NAME = "image-transform"
    USAGE = (
        "Usage: image-transform transparent <folderPath> <hexColor>\n"
        "       image-transform resize <folderPath> <oldWxH> <newWxH>"
    )

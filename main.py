"""
Image Transform - Command line entry point
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from config import get_settings
from core.constants import SystemConstants
from core.exceptions import ConfigurationError, ImageTransformError
from schemas import ColorKey, Dimensions, ImageResizedEvent, MadeTransparentEvent
from services.image_engine import ImageEngine

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """Raises ConfigurationError instead of exiting."""

    def error(self, message):
        raise ConfigurationError(f"Invalid arguments: {message}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog=SystemConstants.PROGRAM_NAME, add_help=True)
    commands = parser.add_subparsers(dest="command", required=True, parser_class=_ArgumentParser)

    transparent = commands.add_parser("transparent", help="Convert BMP files to transparent PNGs")
    transparent.add_argument("folder", help="Folder containing .bmp files")
    transparent.add_argument("color", help="Color to make transparent (#RRGGBB)")

    resize = commands.add_parser("resize", help="Resize PNG files of an exact size")
    resize.add_argument("folder", help="Folder searched recursively for .png files")
    resize.add_argument("old", help="Size to match (WxH)")
    resize.add_argument("new", help="New size (WxH)")

    return parser


def configure_logging() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.system.effective_log_level),
        format=SystemConstants.LOG_FORMAT,
    )
    logger.debug(f"Settings: {settings.to_dict()}")


def print_converted(event: MadeTransparentEvent) -> None:
    print(f"{event.old_path} --> {event.new_path}")


def print_resized(event: ImageResizedEvent) -> None:
    print(f"{event.path}: {event.old_dims} --> {event.new_dims}")


def run(args: argparse.Namespace) -> int:
    """Validate arguments and run the selected batch operation."""
    folder = Path(args.folder)
    if not folder.is_dir():
        raise ConfigurationError("Invalid folder path", folder)

    engine = ImageEngine(working_path=folder)

    if args.command == "transparent":
        color = ColorKey.from_hex(args.color)
        engine.made_transparent.subscribe(print_converted)
        return engine.make_transparent(color)

    old = Dimensions.parse(args.old)
    new = Dimensions.parse(args.new)
    engine.image_resized.subscribe(print_resized)
    return engine.resize(old, new)


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging()

    try:
        args = build_parser().parse_args(argv)
        run(args)
    except (ImageTransformError, OSError) as e:
        logger.debug(f"Batch aborted: {e}", exc_info=True)
        print(e)
        print(SystemConstants.USAGE)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

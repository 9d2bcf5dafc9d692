"""
File enumeration for batch operations.
"""

import fnmatch
import logging
import os
from pathlib import Path
from typing import Iterator, Union

logger = logging.getLogger(__name__)


def iter_files(root: Union[str, Path], pattern: str, recursive: bool = False) -> Iterator[Path]:
    """
    Enumerate files under root whose name matches a glob pattern.

    The root is validated when this function is called; the returned iterator
    is lazy and can only be consumed once. Each directory listing is read in
    full before its entries are yielded, so files created by the caller while
    iterating are not returned.

    Args:
        root: Directory to search
        pattern: Filename glob pattern, e.g. "*.bmp"; matched case-insensitively
        recursive: If True, descend into subdirectories

    Returns:
        Iterator of matching file paths, in filesystem order

    Raises:
        FileNotFoundError: If root does not exist
        NotADirectoryError: If root is not a directory
        PermissionError: If a directory cannot be listed
    """
    root_path = Path(root)
    if not root_path.exists():
        raise FileNotFoundError(f"Directory not found: {root_path}")
    if not root_path.is_dir():
        raise NotADirectoryError(f"Not a directory: {root_path}")

    logger.debug(f"Enumerating {pattern} in {root_path} (recursive={recursive})")
    return _walk(root_path, pattern.lower(), recursive)


def _walk(directory: Path, pattern: str, recursive: bool) -> Iterator[Path]:
    with os.scandir(directory) as it:
        entries = list(it)

    for entry in entries:
        if entry.is_file() and fnmatch.fnmatch(entry.name.lower(), pattern):
            yield Path(entry.path)
        elif recursive and entry.is_dir(follow_symlinks=False):
            yield from _walk(Path(entry.path), pattern, recursive)

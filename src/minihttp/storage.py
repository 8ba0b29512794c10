"""
=============================================================================
FILE STORAGE
=============================================================================

The two file-system primitives behind the /files/ routes:

    read_file_or_none(directory, filename)  → bytes, or None
    write_file(directory, filename, data)   → True, or False

Neither one raises for ordinary I/O trouble. A missing file is None, a
failed write is False, and the route turns those into 404 and 500.

=============================================================================
PATH TRAVERSAL
=============================================================================

The router hands over whatever followed "/files/" in the target, so a
client can ask for "/files/../../etc/passwd". The primitives resolve the
joined path (following ".." and symlinks) and refuse anything that lands
outside the storage directory:

    directory = /srv/files
    filename  = ../../etc/passwd
    resolved  = /etc/passwd          ← not under /srv/files → refused

Refusals look exactly like a missing file (read) or a failed write (write)
to the caller, and are logged as warnings.
=============================================================================
"""

import logging
from pathlib import Path
from typing import Optional, Union


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def resolve_inside(directory: PathLike, filename: str) -> Optional[Path]:
    """
    Join `filename` onto `directory`, refusing paths that escape it.

    Args:
        directory: Storage root.
        filename: Name taken from the request target.

    Returns:
        The resolved path, or None if it is outside `directory`.
    """
    root = Path(directory).resolve()

    try:
        full_path = (root / filename).resolve()
    except (OSError, ValueError) as e:
        # Embedded NUL bytes, symlink loops
        logger.warning(f"Unusable file name {filename!r}: {e}")
        return None

    try:
        full_path.relative_to(root)
    except ValueError:
        logger.warning(f"Path traversal attempt refused: {filename!r}")
        return None

    if full_path == root:
        # "/files/" with an empty name points at the directory itself
        return None

    return full_path


def read_file_or_none(directory: PathLike, filename: str) -> Optional[bytes]:
    """
    Read a file from the storage directory.

    Args:
        directory: Storage root.
        filename: File name relative to the root.

    Returns:
        File contents, or None if the file does not exist, is not a
        regular file, cannot be read, or lies outside the root.
    """
    path = resolve_inside(directory, filename)
    if path is None or not path.is_file():
        return None

    try:
        return path.read_bytes()
    except OSError as e:
        logger.error(f"Failed to read {path}: {e}")
        return None


def write_file(directory: PathLike, filename: str, data: bytes) -> bool:
    """
    Write `data` to a file in the storage directory, replacing it.

    Parent directories are NOT created: "/files/a/b.txt" only works if
    "a" already exists.

    Args:
        directory: Storage root.
        filename: File name relative to the root.
        data: Bytes to store.

    Returns:
        True on success, False on any failure.
    """
    path = resolve_inside(directory, filename)
    if path is None:
        return False

    try:
        path.write_bytes(data)
    except OSError as e:
        logger.error(f"Failed to write {path}: {e}")
        return False

    logger.debug(f"Wrote {len(data)} bytes to {path}")
    return True

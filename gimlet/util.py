"""Utility functions for Gimlet."""

import logging
import os
from pathlib import Path

from rich.logging import RichHandler


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging for the application."""
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def relative_posix(base: Path, target: Path) -> str:
    """Express *target* relative to *base* as a POSIX path string.

    Neither path needs to exist. Both are made absolute and normalized
    (``..`` collapsed) before comparing, without resolving symlinks.

    Returns:
        The relative path, or "." when target is base itself

    Raises:
        ValueError: If target lies outside base
    """
    base = Path(os.path.normpath(os.path.abspath(base)))
    target = Path(os.path.normpath(os.path.abspath(target)))

    rel = target.relative_to(base)
    return rel.as_posix()


def is_clean_relative_path(path: str) -> bool:
    """Check that *path* is a normalized, relative POSIX path.

    Rejects absolute paths, empty segments, ``.``/``..`` segments and
    newlines, none of which may appear in the index.
    """
    if not path or "\n" in path:
        return False

    if path.startswith("/"):
        return False

    parts = path.split("/")
    return all(part not in ("", ".", "..") for part in parts)


def atomic_write(path: Path, content: str | bytes, mode: str = "w") -> None:
    """Write file atomically using temp file and rename.

    Args:
        path: Target file path
        content: Content to write
        mode: File open mode ('w' for text, 'wb' for binary)
    """
    temp_path = path.with_name(path.name + ".tmp")

    try:
        if mode == "wb":
            temp_path.write_bytes(content)
        else:
            temp_path.write_text(content, encoding="utf-8")

        # Atomic rename
        temp_path.replace(path)

    except Exception:
        # Clean up temp file on error
        if temp_path.exists():
            temp_path.unlink()
        raise

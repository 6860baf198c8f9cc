"""Working-tree file selection for staging."""

import logging
from pathlib import Path

import pathspec

from gimlet.config import GIMLET_DIR
from gimlet.util import is_clean_relative_path

logger = logging.getLogger(__name__)


def create_pathspec(patterns: list[str]) -> pathspec.PathSpec:
    """Create a PathSpec from gitignore-style patterns."""
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


def is_regular_file(path: Path) -> bool:
    """True for regular files, following no symlinks."""
    return path.is_file() and not path.is_symlink()


def is_internal(rel_path: str) -> bool:
    """Check if a repository-relative path is inside ``.gimlet``."""
    return rel_path == GIMLET_DIR or rel_path.startswith(GIMLET_DIR + "/")


def select_files(
    root: Path,
    rel_target: str,
    exclude_patterns: list[str] | None = None,
) -> list[str]:
    """Resolve a target under the repository root to files to stage.

    A file resolves to itself. A directory resolves to every regular file
    below it, recursively, minus the ``.gimlet`` directory, anything
    matching the exclude patterns and names the index cannot hold.

    Args:
        root: Repository root
        rel_target: Target path relative to root ("." for the root)
        exclude_patterns: Gitignore-style patterns to skip while walking

    Returns:
        Sorted repository-relative POSIX paths
    """
    target = root / rel_target

    if is_internal(rel_target):
        return []

    if is_regular_file(target):
        return [rel_target]

    if not target.is_dir():
        return []

    exclude_spec = create_pathspec(exclude_patterns or [])

    selected = []

    # Walk the directory tree
    for path in target.rglob("*"):
        if not is_regular_file(path):
            continue

        rel_str = path.relative_to(root).as_posix()

        if is_internal(rel_str):
            continue

        if exclude_spec.match_file(rel_str):
            continue

        if not is_clean_relative_path(rel_str):
            logger.warning("Skipping %r: name cannot be stored in the index", rel_str)
            continue

        selected.append(rel_str)

    return sorted(selected)

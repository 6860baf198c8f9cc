"""Repository discovery and the staging/snapshot operations."""

import logging
import os
from pathlib import Path

from gimlet.config import GIMLET_DIR, GlobalConfig, RepoConfig
from gimlet.errors import (
    InvalidPath,
    NoSuchFile,
    NotATree,
    NothingSpecified,
    PathIsDirectory,
    PathNotFound,
    PathOutsideRepository,
    PathspecMatchedNothing,
    RepositoryNotFound,
)
from gimlet.index import StagingIndex
from gimlet.objects import ObjectStore
from gimlet.select import is_internal, select_files
from gimlet.tree import build_tree, read_tree
from gimlet.util import relative_posix

logger = logging.getLogger(__name__)

REPO_DIRECTORIES = [
    "objects",
    "refs/heads",
    "refs/tags",
]

DEFAULT_HEAD = "ref: refs/heads/master\n"


class Repository:
    """A working tree with a ``.gimlet`` directory at its root."""

    def __init__(self, root: Path):
        """Open an existing repository rooted at *root*."""
        self.root = root
        self.gimlet_dir = root / GIMLET_DIR
        self.config = RepoConfig.load_or_default(root)
        self.objects = ObjectStore(self.gimlet_dir, self.config.hash_algorithm)

    @classmethod
    def find(cls, start: Path | None = None) -> "Repository":
        """Locate the repository containing *start* (default: cwd).

        Raises:
            RepositoryNotFound: If no ``.gimlet`` directory exists at or
                above start
        """
        path = Path(start or Path.cwd()).resolve()

        for candidate in (path, *path.parents):
            if (candidate / GIMLET_DIR).is_dir():
                return cls(candidate)

        raise RepositoryNotFound()

    @classmethod
    def init(cls, path: Path | None = None, global_config: GlobalConfig | None = None) -> "Repository":
        """Create the repository structure, leaving existing parts alone."""
        root = Path(path or Path.cwd()).resolve()
        gimlet_dir = root / GIMLET_DIR
        existed = gimlet_dir.is_dir()

        for dir_path in REPO_DIRECTORIES:
            (gimlet_dir / dir_path).mkdir(parents=True, exist_ok=True)

        head_path = gimlet_dir / "HEAD"
        if not head_path.exists():
            head_path.write_text(DEFAULT_HEAD)

        config = RepoConfig.create_default(root, global_config)
        if not config.config_path.exists():
            config.save()

        if existed:
            logger.info("Reinitialized existing Gimlet repository in %s", gimlet_dir)
        else:
            logger.info("Initialized empty Gimlet repository in %s", gimlet_dir)

        return cls(root)

    def load_index(self) -> StagingIndex:
        """Read the staging index into memory."""
        index = StagingIndex(self.gimlet_dir, self.objects)
        index.load()
        return index

    def relative_path(self, path: str | Path, cwd: Path | None = None) -> str:
        """Turn a caller path (relative to *cwd*) into a root-relative one.

        Raises:
            PathOutsideRepository: If the path is not inside the working tree
        """
        cwd = Path(cwd or Path.cwd()).resolve()
        target = Path(os.path.normpath(cwd / path))

        try:
            return relative_posix(self.root, target)
        except ValueError:
            raise PathOutsideRepository(str(path)) from None

    def hash_object(self, path: str | Path | None = None, write: bool = False, cwd: Path | None = None) -> str | None:
        """Compute the object id of a file, storing it when *write* is set."""
        if path is None:
            return None

        try:
            display = self.relative_path(path, cwd)
        except PathOutsideRepository:
            display = str(path)

        target = Path(cwd or Path.cwd()) / path
        if not target.is_file():
            raise NoSuchFile(display)

        content = target.read_bytes()

        if write:
            return self.objects.put(content)

        return self.objects.compute_id(content)

    def add(self, pathspec: str | Path | None = None, cwd: Path | None = None) -> list[str]:
        """Stage every regular file matched by *pathspec*.

        Directories are walked recursively. The index is written once,
        after all files have been staged.

        Returns:
            Repository-relative paths that were staged
        """
        if not pathspec:
            raise NothingSpecified()

        rel = self.relative_path(pathspec, cwd)
        files = select_files(self.root, rel, self.config.exclude_patterns)

        if not files:
            raise PathspecMatchedNothing(rel)

        index = self.load_index()
        with index.deferred_save():
            for file_path in files:
                content = (self.root / file_path).read_bytes()
                index.stage(file_path, content, allow_create=True)

        logger.info("Staged %d file(s) from '%s'", len(files), rel)
        return files

    def update_index(self, path: str | Path | None = None, add: bool = False, cwd: Path | None = None) -> str | None:
        """Stage a single file.

        Untracked files are only accepted when *add* is set; tracked files
        are always updated.

        Returns:
            Object id of the staged content, or None if no path was given
        """
        if path is None:
            return None

        rel = self.relative_path(path, cwd)
        target = self.root / rel

        if is_internal(rel):
            raise InvalidPath(rel)

        if target.is_dir():
            raise PathIsDirectory(rel)

        if not target.is_file():
            raise PathNotFound(rel)

        index = self.load_index()
        return index.stage(rel, target.read_bytes(), allow_create=add)

    def ls_files(self, stage: bool = False, prefix: str | Path | None = None, cwd: Path | None = None) -> list[str]:
        """List tracked paths in ascending order.

        With *stage*, each line is ``"<path> <oid>"``.
        """
        if prefix is not None:
            prefix = self.relative_path(prefix, cwd)

        entries = self.load_index().entries(prefix)

        if stage:
            return [f"{e.path} {e.oid}" for e in entries]

        return [e.path for e in entries]

    def write_tree(self) -> str:
        """Write the index as a tree hierarchy and return the root tree id."""
        return build_tree(self.load_index().entries(), self.objects)

    def cat_file(self, oid: str) -> bytes:
        """Return the raw content of a stored object."""
        return self.objects.get(oid)

    def ls_tree(self, oid: str) -> list[str]:
        """List one level of a stored tree as ``"<kind> <oid>\\t<name>"``."""
        try:
            tree = read_tree(self.objects, oid)
        except ValueError:
            raise NotATree(oid) from None

        return [f"{e.kind} {e.oid}\t{e.name}" for e in tree.entries]

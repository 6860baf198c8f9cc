"""Staging index for Gimlet repositories."""

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

from gimlet.errors import IndexCorrupt, InvalidPath, UntrackedPathRequiresExplicitAdd
from gimlet.hashing import is_object_id
from gimlet.objects import ObjectStore
from gimlet.util import atomic_write, is_clean_relative_path

logger = logging.getLogger(__name__)

INDEX_VERSION = 1


@dataclass(frozen=True)
class IndexEntry:
    """A staged file: repository-relative path and content id."""

    path: str
    oid: str


class StagingIndex:
    """Path -> object id table for the next snapshot.

    The whole table is held in memory and rewritten as a unit on save.
    """

    def __init__(self, gimlet_dir: Path, objects: ObjectStore):
        """Initialize index for a repository."""
        self.gimlet_dir = gimlet_dir
        self.objects = objects
        self.index_path = gimlet_dir / "index.json"
        self.data: dict[str, str] = {}
        self._deferred = False

    def load(self) -> None:
        """Load index from disk.

        Raises:
            IndexCorrupt: If the file breaks any of the format rules
        """
        if not self.index_path.exists():
            self.data = {}
            return

        try:
            with open(self.index_path, encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise IndexCorrupt(f"invalid JSON ({e.msg})") from e
        except UnicodeDecodeError as e:
            raise IndexCorrupt("not UTF-8") from e

        self.data = self._validate(raw)

    def _validate(self, raw: Any) -> dict[str, str]:
        if not isinstance(raw, dict):
            raise IndexCorrupt("expected a JSON object")

        if raw.get("version") != INDEX_VERSION:
            raise IndexCorrupt(f"unsupported version {raw.get('version')!r}")

        algorithm = raw.get("algorithm")
        if algorithm != self.objects.algorithm:
            raise IndexCorrupt(
                f"hash algorithm {algorithm!r} does not match "
                f"repository algorithm {self.objects.algorithm!r}"
            )

        entries = raw.get("entries")
        if not isinstance(entries, dict):
            raise IndexCorrupt("missing entries table")

        for path, oid in entries.items():
            if not is_clean_relative_path(path):
                raise IndexCorrupt(f"bad path {path!r}")
            if not is_object_id(oid, algorithm):
                raise IndexCorrupt(f"bad object id for {path}")

        return dict(entries)

    def save(self) -> None:
        """Save index to disk."""
        self.index_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "version": INDEX_VERSION,
            "algorithm": self.objects.algorithm,
            "entries": self.data,
        }

        # Write atomically
        atomic_write(self.index_path, json.dumps(data, indent=2, sort_keys=True) + "\n")
        logger.debug("Wrote index with %d entries", len(self.data))

    @contextmanager
    def deferred_save(self) -> Iterator["StagingIndex"]:
        """Hold back saves until the block finishes.

        The index is written once if the block succeeds and not at all
        if it raises.
        """
        if self._deferred:
            yield self
            return

        self._deferred = True
        try:
            yield self
        finally:
            self._deferred = False

        self.save()

    def stage(self, path: str, content: bytes, allow_create: bool = False) -> str:
        """Store content and point *path* at it.

        Args:
            path: Repository-relative POSIX path
            content: File content to stage
            allow_create: Permit adding a path that is not yet tracked

        Returns:
            The object id of the staged content

        Raises:
            InvalidPath: If the path is not a normalized relative path
            UntrackedPathRequiresExplicitAdd: If the path is new and
                allow_create is not set
        """
        if not is_clean_relative_path(path):
            raise InvalidPath(path)

        if path not in self.data and not allow_create:
            raise UntrackedPathRequiresExplicitAdd(path)

        oid = self.objects.put(content)

        if self.data.get(path) != oid:
            self.data[path] = oid
            logger.debug("Staged %s as %s", path, oid)

        if not self._deferred:
            self.save()

        return oid

    def lookup(self, path: str) -> str | None:
        """Get the staged object id for a path."""
        return self.data.get(path)

    def __contains__(self, path: str) -> bool:
        return path in self.data

    def __len__(self) -> int:
        return len(self.data)

    def entries(self, prefix: str | None = None) -> list[IndexEntry]:
        """List entries in ascending path order.

        Args:
            prefix: Only return the entry at this path or entries nested
                under it

        Returns:
            Sorted index entries
        """
        if prefix is not None:
            prefix = prefix.rstrip("/")
            if prefix == ".":
                prefix = ""

        result = []

        for path in sorted(self.data):
            if prefix and path != prefix and not path.startswith(prefix + "/"):
                continue
            result.append(IndexEntry(path, self.data[path]))

        return result

"""Tree objects and building them from the staging index.

A tree is one directory level. It is serialized as one line per entry::

    <kind> <oid> <name>\\n

with ``kind`` either ``blob`` or ``tree`` and entries sorted by name. A tree
with no entries serializes to zero bytes. Because a tree's id is the hash of
that serialization, identical directory content always yields the same id.
"""

import logging
from dataclasses import dataclass
from itertools import groupby
from typing import Iterable

from gimlet.hashing import is_object_id
from gimlet.index import IndexEntry
from gimlet.objects import ObjectStore

logger = logging.getLogger(__name__)

BLOB = "blob"
TREE = "tree"


@dataclass(frozen=True)
class TreeEntry:
    kind: str
    oid: str
    name: str

    def __post_init__(self) -> None:
        if self.kind not in (BLOB, TREE):
            raise ValueError(f"Unknown tree entry kind: {self.kind!r}")
        if not self.name or "/" in self.name or "\n" in self.name:
            raise ValueError(f"Invalid tree entry name: {self.name!r}")


@dataclass(frozen=True)
class Tree:
    entries: tuple[TreeEntry, ...] = ()

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.entries, key=lambda e: e.name))
        names = [e.name for e in ordered]
        if len(set(names)) != len(names):
            raise ValueError("Duplicate names in tree")
        object.__setattr__(self, "entries", ordered)

    def serialize(self) -> bytes:
        """Encode entries as the stored tree content."""
        return "".join(
            f"{e.kind} {e.oid} {e.name}\n" for e in self.entries
        ).encode("utf-8")

    @classmethod
    def parse(cls, content: bytes) -> "Tree":
        """Decode stored tree content.

        Raises:
            ValueError: If content is not a serialized tree
        """
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValueError("Tree content is not UTF-8") from e

        if text and not text.endswith("\n"):
            raise ValueError("Tree content must end with a newline")

        entries = []
        for line in text.split("\n")[:-1]:
            parts = line.split(" ", 2)
            if len(parts) != 3 or not is_object_id(parts[1]):
                raise ValueError(f"Malformed tree line: {line!r}")
            kind, oid, name = parts
            entries.append(TreeEntry(kind, oid, name))

        return cls(tuple(entries))


def build_tree(entries: Iterable[IndexEntry], objects: ObjectStore) -> str:
    """Write one tree per directory level and return the root tree id.

    Entries are grouped by their first path segment. Subtrees are written
    before their parent so every referenced id is already stored. Blob
    content is expected to be in the store already.

    Args:
        entries: Staged (path, oid) pairs
        objects: Store receiving the tree objects

    Returns:
        Id of the root tree (the empty tree when there are no entries)
    """
    split = sorted((tuple(e.path.split("/")), e.oid) for e in entries)
    oid = _write_level(split, objects)
    logger.debug("Wrote root tree %s", oid)
    return oid


def _write_level(items: list[tuple[tuple[str, ...], str]], objects: ObjectStore) -> str:
    tree_entries = []

    for name, group in groupby(items, key=lambda item: item[0][0]):
        group = list(group)
        leaves = [oid for parts, oid in group if len(parts) == 1]
        nested = [(parts[1:], oid) for parts, oid in group if len(parts) > 1]

        if leaves and nested:
            raise ValueError(f"'{name}' is staged as both a file and a directory")
        if len(leaves) > 1:
            raise ValueError(f"'{name}' is staged more than once")

        if leaves:
            tree_entries.append(TreeEntry(BLOB, leaves[0], name))
        else:
            tree_entries.append(TreeEntry(TREE, _write_level(nested, objects), name))

    return objects.put(Tree(tuple(tree_entries)).serialize())


def read_tree(objects: ObjectStore, oid: str) -> Tree:
    """Load and parse a stored tree."""
    return Tree.parse(objects.get(oid))


def flatten_tree(objects: ObjectStore, oid: str, prefix: str = "") -> dict[str, str]:
    """Walk a stored tree back into a flat path -> blob id mapping."""
    files = {}

    for entry in read_tree(objects, oid).entries:
        path = f"{prefix}{entry.name}"
        if entry.kind == TREE:
            files.update(flatten_tree(objects, entry.oid, prefix=path + "/"))
        else:
            files[path] = entry.oid

    return files

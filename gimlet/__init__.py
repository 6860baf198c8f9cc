"""Gimlet - content-addressed object store, staging index and tree builder."""

__version__ = "1.0.0"

from gimlet.errors import GimletError
from gimlet.index import IndexEntry, StagingIndex
from gimlet.objects import ObjectStore
from gimlet.repo import Repository
from gimlet.tree import Tree, TreeEntry, build_tree

__all__ = [
    "GimletError",
    "IndexEntry",
    "StagingIndex",
    "ObjectStore",
    "Repository",
    "Tree",
    "TreeEntry",
    "build_tree",
]

"""Module-level operations working on the repository around the cwd.

Each call discovers the repository from the current working directory, so
paths are interpreted the way a user typing them in a shell would expect.
"""

from pathlib import Path

from gimlet.repo import Repository


def init(path: str | Path | None = None) -> Repository:
    """Initialize a repository (safe to repeat)."""
    return Repository.init(Path(path) if path is not None else None)


def hash_object(path: str | Path | None = None, write: bool = False) -> str | None:
    return Repository.find().hash_object(path, write=write)


def add(pathspec: str | Path | None = None) -> list[str]:
    # RepositoryNotFound takes precedence over NothingSpecified
    return Repository.find().add(pathspec)


def update_index(path: str | Path | None = None, add: bool = False) -> str | None:
    return Repository.find().update_index(path, add=add)


def ls_files(stage: bool = False, prefix: str | Path | None = None) -> list[str]:
    return Repository.find().ls_files(stage=stage, prefix=prefix)


def write_tree() -> str:
    return Repository.find().write_tree()


def cat_file(oid: str) -> bytes:
    return Repository.find().cat_file(oid)


def ls_tree(oid: str) -> list[str]:
    return Repository.find().ls_tree(oid)

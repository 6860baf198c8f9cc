"""Errors raised by Gimlet operations.

Every error carries a short, stable message. Paths in messages are always
relative to the repository root.
"""


class GimletError(Exception):
    """Base class for all Gimlet failures."""


class RepositoryNotFound(GimletError):
    def __init__(self) -> None:
        super().__init__(
            "fatal: Not a gimlet repository (or any of the parent directories): .gimlet"
        )


class NoSuchFile(GimletError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"fatal: Cannot open '{path}': No such file or directory")


class _UnprocessablePath(GimletError):
    reason = ""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            f"error: {path}: {self.reason}\nfatal: Unable to process path {path}"
        )


class PathNotFound(_UnprocessablePath):
    reason = "does not exist"


class PathIsDirectory(_UnprocessablePath):
    reason = "is a directory - add files inside instead"


class UntrackedPathRequiresExplicitAdd(_UnprocessablePath):
    reason = "cannot add to the index - missing --add option?"


class InvalidPath(_UnprocessablePath):
    reason = "invalid path"


class NothingSpecified(GimletError):
    def __init__(self) -> None:
        super().__init__("Nothing specified, nothing added.")


class PathspecMatchedNothing(GimletError):
    def __init__(self, pathspec: str) -> None:
        self.pathspec = pathspec
        super().__init__(f"fatal: pathspec '{pathspec}' did not match any files")


class ObjectNotFound(GimletError):
    def __init__(self, oid: str) -> None:
        self.oid = oid
        super().__init__(f"fatal: Not a valid object name {oid}")


class IndexCorrupt(GimletError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"fatal: index file corrupt: {reason}")


class PathOutsideRepository(GimletError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"fatal: '{path}' is outside repository")


class NotATree(GimletError):
    def __init__(self, oid: str) -> None:
        self.oid = oid
        super().__init__(f"fatal: not a tree object: {oid}")

"""Object store for blob and tree content."""

import logging
from pathlib import Path

from gimlet.errors import ObjectNotFound
from gimlet.hashing import DEFAULT_ALGORITHM, hash_bytes, is_object_id
from gimlet.util import atomic_write

logger = logging.getLogger(__name__)


class ObjectStore:
    """Content-addressed store for repository objects.

    Objects live flat under ``.gimlet/objects/<id>`` holding the raw,
    uncompressed bytes. The store is append-only.
    """

    def __init__(self, gimlet_dir: Path, algorithm: str = DEFAULT_ALGORITHM):
        """Initialize object store inside a ``.gimlet`` directory."""
        self.gimlet_dir = gimlet_dir
        self.algorithm = algorithm
        self.store_path = gimlet_dir / "objects"

    def get_object_path(self, oid: str) -> Path:
        """Get path for an object by id."""
        return self.store_path / oid

    def compute_id(self, content: bytes) -> str:
        """Hash content without storing it."""
        return hash_bytes(content, self.algorithm)

    def contains(self, oid: str) -> bool:
        """Check if an object exists."""
        if not is_object_id(oid, self.algorithm):
            return False

        return self.get_object_path(oid).is_file()

    __contains__ = contains

    def get(self, oid: str) -> bytes:
        """Read an object by id.

        Raises:
            ObjectNotFound: If no object with this id was ever stored
        """
        if not self.contains(oid):
            raise ObjectNotFound(oid)

        return self.get_object_path(oid).read_bytes()

    def put(self, content: bytes) -> str:
        """Store content and return its id.

        Storing content that is already present does not touch the
        existing object.
        """
        oid = self.compute_id(content)
        path = self.get_object_path(oid)

        if path.is_file():
            return oid

        self.store_path.mkdir(parents=True, exist_ok=True)

        # Write atomically
        atomic_write(path, content, mode="wb")
        logger.debug("Stored object %s (%d bytes)", oid, len(content))

        return oid

    def list_objects(self) -> list[str]:
        """List all object ids in store."""
        if not self.store_path.is_dir():
            return []

        objects = []

        for path in self.store_path.iterdir():
            if path.is_file() and is_object_id(path.name, self.algorithm):
                objects.append(path.name)

        return sorted(objects)

"""Tests for the content-addressed object store."""

from pathlib import Path

import pytest

from gimlet.errors import ObjectNotFound
from gimlet.hashing import hash_bytes
from gimlet.objects import ObjectStore


def test_put_then_get_round_trip(store):
    """Stored content comes back byte for byte under its hash."""
    content = b"line one\nline two\x00binary"

    oid = store.put(content)

    assert oid == hash_bytes(content)
    assert store.get(oid) == content
    assert store.get_object_path(oid).read_bytes() == content


def test_put_is_idempotent(store, monkeypatch):
    """Putting the same content twice writes it only once."""
    import gimlet.objects

    writes = []
    original = gimlet.objects.atomic_write

    def counting_write(path, content, mode="w"):
        writes.append(path)
        original(path, content, mode)

    monkeypatch.setattr(gimlet.objects, "atomic_write", counting_write)

    first = store.put(b"same")
    second = store.put(b"same")

    assert first == second
    assert len(writes) == 1
    assert store.list_objects() == [first]


def test_compute_id_does_not_store(store):
    oid = store.compute_id(b"dry run")

    assert oid == hash_bytes(b"dry run")
    assert not store.contains(oid)
    assert oid not in store


def test_get_missing_object(store):
    with pytest.raises(ObjectNotFound) as exc_info:
        store.get(hash_bytes(b"never stored"))

    assert str(exc_info.value) == f"fatal: Not a valid object name {hash_bytes(b'never stored')}"


def test_get_rejects_malformed_ids(store):
    """Ids that are not hex digests never reach the filesystem."""
    store.put(b"x")

    with pytest.raises(ObjectNotFound):
        store.get("../index.json")

    assert not store.contains("objects")


def test_failed_write_leaves_nothing_behind(store, monkeypatch):
    """An interrupted write does not expose a partial object."""

    def failing_replace(self, target):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "replace", failing_replace)

    with pytest.raises(OSError):
        store.put(b"doomed")

    assert not store.contains(hash_bytes(b"doomed"))
    assert list(store.store_path.iterdir()) == []


def test_list_objects_skips_temp_files(store):
    a = store.put(b"a")
    b = store.put(b"b")
    (store.store_path / f"{a}.tmp").write_bytes(b"partial")

    assert store.list_objects() == sorted([a, b])


def test_list_objects_on_missing_store(tmp_path):
    assert ObjectStore(tmp_path / "nowhere").list_objects() == []


def test_sha1_store(tmp_path):
    store = ObjectStore(tmp_path / ".gimlet", algorithm="sha1")

    oid = store.put(b"X")

    assert len(oid) == 40
    assert store.get(oid) == b"X"
    # A sha256-shaped id is not valid in a sha1 store
    assert not store.contains(hash_bytes(b"X"))

"""Shared pytest fixtures for Gimlet tests."""

from pathlib import Path

import pytest

from gimlet.config import GlobalConfig
from gimlet.objects import ObjectStore
from gimlet.repo import Repository


@pytest.fixture(autouse=True)
def global_config_path(tmp_path_factory, monkeypatch):
    """Keep tests away from the real per-user config file."""
    config_path = tmp_path_factory.mktemp("global") / "config.yaml"
    monkeypatch.setattr(GlobalConfig, "config_path", property(lambda self: config_path))
    return config_path


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """An empty directory that is also the cwd."""
    root = tmp_path / "work"
    root.mkdir()
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def repo(workdir):
    """An initialized repository rooted at the cwd."""
    return Repository.init(workdir)


@pytest.fixture
def store(tmp_path):
    """A bare object store."""
    return ObjectStore(tmp_path / ".gimlet")


def create_files_from_tree(structure: dict, prefix: Path) -> None:
    """Create files and directories from a nested dict.

    String values become files with that content, dict values become
    directories.
    """
    for name, value in structure.items():
        path = prefix / name
        if isinstance(value, str):
            path.write_text(value)
        else:
            path.mkdir()
            create_files_from_tree(value, path)


@pytest.fixture
def make_files():
    """Factory fixture wrapping create_files_from_tree."""
    return create_files_from_tree

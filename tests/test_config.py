"""Tests for repository and global configuration."""

import pytest

from gimlet.config import GlobalConfig, RepoConfig


def test_repo_config_save_and_load(tmp_path):
    config = RepoConfig(repo_root=tmp_path, hash_algorithm="sha1", exclude_patterns=["*.tmp"])
    config.save()

    loaded = RepoConfig.load(tmp_path)

    assert loaded.hash_algorithm == "sha1"
    assert loaded.exclude_patterns == ["*.tmp"]
    assert loaded.repo_root == tmp_path
    assert "hash-algorithm: sha1" in config.config_path.read_text()


def test_repo_config_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        RepoConfig.load(tmp_path)

    assert RepoConfig.load_or_default(tmp_path).hash_algorithm == "sha256"


def test_repo_config_rejects_unknown_algorithm(tmp_path):
    with pytest.raises(ValueError, match="Unsupported hash algorithm"):
        RepoConfig(repo_root=tmp_path, hash_algorithm="md5")


def test_global_defaults_seed_new_repositories(tmp_path):
    global_config = GlobalConfig(hash_algorithm="sha1", exclude_patterns=["*.log"])
    global_config.save()

    config = RepoConfig.create_default(tmp_path)

    assert config.hash_algorithm == "sha1"
    assert config.exclude_patterns == ["*.log"]


def test_global_config_without_file():
    config = GlobalConfig.load()

    assert config.hash_algorithm == "sha256"
    assert config.exclude_patterns == []

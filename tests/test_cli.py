"""Tests for the Gimlet command-line interface."""

import pytest
from typer.testing import CliRunner

from gimlet.cli import app
from gimlet.hashing import empty_tree_id, hash_bytes


@pytest.fixture
def runner():
    return CliRunner()


def test_version(runner):
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "Gimlet version" in result.output


def test_init_twice(runner, workdir):
    first = runner.invoke(app, ["init"])
    second = runner.invoke(app, ["init"])

    assert first.exit_code == 0
    assert second.exit_code == 0
    assert (workdir / ".gimlet" / "HEAD").read_text() == "ref: refs/heads/master\n"


def test_stage_and_write_tree(runner, workdir):
    runner.invoke(app, ["init"])
    (workdir / "a.txt").write_text("X")
    (workdir / "b.txt").write_text("Y")

    result = runner.invoke(app, ["add", "."])
    assert result.exit_code == 0
    assert "Staged 2 file(s)" in result.output

    result = runner.invoke(app, ["ls-files", "--stage"])
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        f"a.txt {hash_bytes(b'X')}",
        f"b.txt {hash_bytes(b'Y')}",
    ]

    result = runner.invoke(app, ["write-tree"])
    assert result.exit_code == 0
    root = result.output.strip()

    result = runner.invoke(app, ["ls-tree", root])
    assert result.output.splitlines() == [
        f"blob {hash_bytes(b'X')}\ta.txt",
        f"blob {hash_bytes(b'Y')}\tb.txt",
    ]


def test_hash_object_write_and_cat_file(runner, workdir):
    runner.invoke(app, ["init"])
    (workdir / "a.txt").write_text("hello")

    result = runner.invoke(app, ["hash-object", "-w", "a.txt"])
    assert result.exit_code == 0
    assert result.output.strip() == hash_bytes(b"hello")

    result = runner.invoke(app, ["cat-file", hash_bytes(b"hello")])
    assert result.exit_code == 0
    assert result.output == "hello"


def test_write_tree_of_empty_index(runner, workdir):
    runner.invoke(app, ["init"])

    result = runner.invoke(app, ["write-tree"])

    assert result.output.strip() == empty_tree_id()


def test_update_index_requires_add_flag(runner, workdir):
    runner.invoke(app, ["init"])
    (workdir / "README.md").write_text("readme")

    result = runner.invoke(app, ["update-index", "README.md"])
    assert result.exit_code == 1
    assert "missing --add option?" in result.output

    result = runner.invoke(app, ["update-index", "--add", "README.md"])
    assert result.exit_code == 0

    result = runner.invoke(app, ["ls-files"])
    assert result.output.splitlines() == ["README.md"]


def test_error_outside_repository(runner, workdir):
    result = runner.invoke(app, ["write-tree"])

    assert result.exit_code == 1
    assert "Not a gimlet repository" in result.output


def test_add_without_pathspec(runner, workdir):
    runner.invoke(app, ["init"])

    result = runner.invoke(app, ["add"])

    assert result.exit_code == 1
    assert "Nothing specified, nothing added." in result.output

"""Gimlet CLI - Command-line interface for the Gimlet object store."""

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console

from gimlet import __version__
from gimlet.errors import GimletError
from gimlet.repo import Repository
from gimlet.util import setup_logging

app = typer.Typer(
    name="gimlet",
    help="Content-addressed object store and staging index",
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)
console = Console()
err_console = Console(stderr=True)


def _fail(error: GimletError) -> NoReturn:
    err_console.print(str(error), style="red", markup=False, highlight=False, soft_wrap=True)
    raise typer.Exit(1)


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
) -> None:
    """Gimlet - a minimal version-control storage engine."""
    setup_logging(verbose=verbose, quiet=quiet)


@app.command()
def version() -> None:
    """Show Gimlet version."""
    console.print(f"Gimlet version {__version__}")


@app.command()
def init(
    path: Optional[Path] = typer.Argument(None, help="Repository root (defaults to current directory)"),
) -> None:
    """Create an empty repository or leave an existing one untouched."""
    repo = Repository.init(path)
    console.print(f"[green]✓[/green] Gimlet repository in {repo.gimlet_dir}")


@app.command(name="hash-object")
def hash_object(
    path: Optional[str] = typer.Argument(None, help="File to hash"),
    write: bool = typer.Option(False, "--write", "-w", help="Store the content in the object store"),
) -> None:
    """Compute the object id of a file."""
    try:
        oid = Repository.find().hash_object(path, write=write)
    except GimletError as e:
        _fail(e)

    if oid is not None:
        typer.echo(oid)


@app.command()
def add(
    pathspec: Optional[str] = typer.Argument(None, help="File or directory to stage"),
) -> None:
    """Stage file contents, walking directories recursively."""
    try:
        staged = Repository.find().add(pathspec)
    except GimletError as e:
        _fail(e)

    console.print(f"[green]✓[/green] Staged {len(staged)} file(s)")


@app.command(name="update-index")
def update_index(
    path: Optional[str] = typer.Argument(None, help="File to stage"),
    add: bool = typer.Option(False, "--add", help="Allow staging a file that is not tracked yet"),
) -> None:
    """Stage a single file."""
    try:
        Repository.find().update_index(path, add=add)
    except GimletError as e:
        _fail(e)


@app.command(name="ls-files")
def ls_files(
    prefix: Optional[str] = typer.Argument(None, help="Only list paths under this directory"),
    stage: bool = typer.Option(False, "--stage", "-s", help="Show object ids"),
) -> None:
    """List tracked files."""
    try:
        lines = Repository.find().ls_files(stage=stage, prefix=prefix)
    except GimletError as e:
        _fail(e)

    for line in lines:
        typer.echo(line)


@app.command(name="write-tree")
def write_tree() -> None:
    """Write the staging index as tree objects and print the root id."""
    try:
        oid = Repository.find().write_tree()
    except GimletError as e:
        _fail(e)

    typer.echo(oid)


@app.command(name="cat-file")
def cat_file(
    oid: str = typer.Argument(..., help="Object id"),
) -> None:
    """Print the raw content of an object."""
    try:
        content = Repository.find().cat_file(oid)
    except GimletError as e:
        _fail(e)

    typer.echo(content, nl=False)


@app.command(name="ls-tree")
def ls_tree(
    oid: str = typer.Argument(..., help="Tree object id"),
) -> None:
    """List the entries of a tree object."""
    try:
        lines = Repository.find().ls_tree(oid)
    except GimletError as e:
        _fail(e)

    for line in lines:
        typer.echo(line)


def main() -> None:
    """Main entry point for the CLI."""
    app()

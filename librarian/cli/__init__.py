"""CLI entry point for librarian.

This module provides the main CLI application that combines all commands
into a single unified interface.
"""

import typer

from librarian.cli.add import add_command
from librarian.cli.commits import commits_command
from librarian.cli.generate import generate_command
from librarian.cli.main import main_command
from librarian.cli.release import release_command
from librarian.cli.sources import update_sources_command
from librarian.cli.tag import tag_command
from librarian.cli.tidy import tidy_command

# Main application
app = typer.Typer(
    name="librarian",
    help="librarian: generate, configure and release Google API client libraries",
    add_completion=False,
)

app.command("tidy")(tidy_command)
app.command("add")(add_command)
app.command("generate")(generate_command)
app.command("release")(release_command)
app.command("tag")(tag_command)
app.command("commits")(commits_command)
app.command("update-sources")(update_sources_command)

# Main callback handles --verbose and --version
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "add_command",
    "commits_command",
    "generate_command",
    "main_command",
    "release_command",
    "tag_command",
    "tidy_command",
    "update_sources_command",
]

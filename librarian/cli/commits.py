"""Commits command: show the parsed conventional commits of a library."""

import json
from typing import Optional

import typer

from librarian.cli.utils import find_repo_root, load_repo_config
from librarian.config import (
    ConfigError,
    find_library,
    format_tag,
    load_librarian_config,
    load_librarian_state,
    resolve_tag_format,
)
from librarian.git import GitError
from librarian.release import collect_changes, library_paths


def commits_command(
    library: str = typer.Argument(
        ...,
        help="Name of the library",
    ),
    since_tag: Optional[str] = typer.Option(
        None,
        "--since-tag",
        "-t",
        help="List commits after this tag (defaults to the tag of the current version)",
    ),
) -> None:
    """Print the conventional commits of a library as JSON."""
    repo_root = find_repo_root()
    config = load_repo_config(repo_root)

    try:
        lib = find_library(config, library)
        state = load_librarian_state(repo_root)
        library_state = state.library_by_id(lib.name) if state is not None else None
        if not since_tag:
            tag_format = resolve_tag_format(
                config, lib.name, load_librarian_config(repo_root), library_state
            )
            since_tag = format_tag(tag_format, lib.name, lib.version)
        exclude_paths = library_state.release_exclude_paths if library_state is not None else None
        changes = collect_changes(
            repo_root, lib, library_paths(config, lib, library_state), since_tag, exclude_paths
        )
    except (ConfigError, GitError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(json.dumps([c.to_dict() for c in changes], indent=2))

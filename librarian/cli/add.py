"""Add command: register a new library in librarian.yaml."""

from typing import Optional

import typer

from librarian.cli.utils import find_repo_root, load_repo_config
from librarian.config import (
    Channel,
    ConfigError,
    Library,
    derive_library_name,
    format_config,
    get_config_file,
    save_config,
    validate_libraries,
)


def add_command(
    api_path: str = typer.Argument(
        ...,
        help="API path relative to googleapis, e.g. google/cloud/secretmanager/v1",
    ),
    name: Optional[str] = typer.Option(
        None,
        "--name",
        "-n",
        help="Library name (derived from the API path if omitted)",
    ),
) -> None:
    """Add a library for an API to librarian.yaml."""
    repo_root = find_repo_root()
    config = load_repo_config(repo_root)

    library_name = name or derive_library_name(api_path)
    config.libraries.append(Library(name=library_name, channels=[Channel(path=api_path)]))

    try:
        validate_libraries(config)
        format_config(config)
        save_config(get_config_file(repo_root), config)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Added library {library_name} for {api_path}")

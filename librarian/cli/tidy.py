"""Tidy command: validate and canonicalise librarian.yaml."""

import typer

from librarian.cli.utils import find_repo_root, load_repo_config
from librarian.config import (
    ConfigError,
    format_config,
    get_config_file,
    save_config,
    validate_libraries,
)


def tidy_command() -> None:
    """Validate librarian.yaml and rewrite it in canonical order."""
    repo_root = find_repo_root()
    config = load_repo_config(repo_root)

    try:
        validate_libraries(config)
        format_config(config)
        save_config(get_config_file(repo_root), config)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Tidied {len(config.libraries)} libraries")

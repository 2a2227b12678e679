"""Shared utility functions for CLI commands."""

import os
from pathlib import Path
from typing import Optional

import typer

from librarian.config import Config, ConfigError, get_config_file, load_config
from librarian.git import GitError, get_remote_url, get_repo_root
from librarian.github import Repository, parse_remote

GITHUB_TOKEN_ENV = "GITHUB_TOKEN"


def find_repo_root() -> Path:
    """Return the git repository root, or the working directory outside a repo."""
    try:
        return get_repo_root()
    except GitError:
        return Path.cwd()


def load_repo_config(repo_root: Path) -> Config:
    """Load librarian.yaml from the repository root.

    Exits with status 1 if the file is missing or invalid.
    """
    try:
        return load_config(get_config_file(repo_root))
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def check_library_selection(library: Optional[str], all_libraries: bool) -> None:
    """Require exactly one of a library name or --all."""
    if library and all_libraries:
        typer.echo("Error: specify a library or --all, not both", err=True)
        raise typer.Exit(1)
    if not library and not all_libraries:
        typer.echo("Error: specify a library or --all", err=True)
        raise typer.Exit(1)


def get_github_token() -> str:
    """Return the GitHub token from the environment.

    Exits with status 1 if GITHUB_TOKEN is not set.
    """
    token = os.environ.get(GITHUB_TOKEN_ENV, "")
    if not token:
        typer.echo(f"Error: {GITHUB_TOKEN_ENV} environment variable is not set", err=True)
        raise typer.Exit(1)
    return token


def resolve_repository(repo_root: Path, config: Config) -> Repository:
    """Return the GitHub repository of the project.

    The repo field of librarian.yaml ("owner/name") wins over the origin remote.

    Raises:
        GitError: If there is no repo field and the origin remote cannot be read.
        GitHubError: If the origin remote is not a GitHub remote.
    """
    if config.repo and "/" in config.repo:
        owner, name = config.repo.split("/", 1)
        return Repository(owner=owner, name=name)
    return parse_remote(get_remote_url(repo_root))

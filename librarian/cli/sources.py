"""Update-sources command: pin external sources to their latest commit."""

import typer

from librarian.cli.utils import find_repo_root, load_repo_config
from librarian.config import ConfigError, Source, get_config_file, save_config
from librarian.fetch import (
    GITHUB_API,
    GITHUB_DOWNLOAD,
    FetchError,
    Repo,
    latest_commit_url,
    latest_sha,
    sha256_of_url,
    tarball_link,
)

# Upstream repository and branch of each named source.
SOURCE_REPOS = {
    "googleapis": (Repo(org="googleapis", repo="googleapis"), "master"),
    "discovery": (Repo(org="googleapis", repo="discovery-artifact-manager"), "master"),
}


def update_source(source: Source, repo: Repo, branch: str) -> bool:
    """Pin a source to the newest commit of a branch.

    Returns:
        True if the commit changed.

    Raises:
        FetchError: If the commit or tarball cannot be fetched.
    """
    sha = latest_sha(latest_commit_url(GITHUB_API, repo, branch))
    if sha == source.commit:
        return False
    source.sha256 = sha256_of_url(tarball_link(GITHUB_DOWNLOAD, repo, sha))
    source.commit = sha
    return True


def update_sources_command() -> None:
    """Update pinned googleapis and discovery commits in librarian.yaml."""
    repo_root = find_repo_root()
    config = load_repo_config(repo_root)

    if config.sources is None:
        typer.echo("No sources configured.")
        return

    try:
        updated = 0
        for name, (repo, branch) in SOURCE_REPOS.items():
            source = getattr(config.sources, name)
            if source is None:
                continue
            if source.dir:
                typer.echo(f"Skipping {name}: uses local directory {source.dir}")
                continue
            if update_source(source, repo, branch):
                typer.echo(f"✓ {name} -> {source.commit}")
                updated += 1
            else:
                typer.echo(f"{name} is up to date")

        if updated:
            save_config(get_config_file(repo_root), config)
    except (ConfigError, FetchError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

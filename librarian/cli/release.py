"""Release command: stage new library versions and their changelogs."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer

from librarian import __version__
from librarian.cli.utils import (
    check_library_selection,
    find_repo_root,
    get_github_token,
    load_repo_config,
    resolve_repository,
)
from librarian.config import (
    Config,
    ConfigError,
    find_library,
    get_config_file,
    load_librarian_config,
    load_librarian_state,
    resolve_library_output,
    save_config,
)
from librarian.git import GitError, add_all, commit, create_branch, get_branch, push
from librarian.github import GitHubClient, GitHubError, Repository
from librarian.release import (
    ReleaseError,
    ReleasePlan,
    format_library_release_notes,
    format_release_notes,
    plan_release,
    update_changelog,
)

logger = logging.getLogger(__name__)

CHANGELOG_FILE = "CHANGELOG.md"
RELEASE_PR_TITLE = "chore: librarian release pull request"


def changelog_path(repo_root: Path, config: Config, library_name: str) -> Path:
    """Return the CHANGELOG.md path of a library."""
    output = resolve_library_output(config, find_library(config, library_name))
    return repo_root / output / CHANGELOG_FILE if output else repo_root / CHANGELOG_FILE


def _write_release(repo_root: Path, config: Config, plan: ReleasePlan, repo: str) -> None:
    save_config(get_config_file(repo_root), config)
    for release in plan.releases:
        notes = format_library_release_notes(release, repo)
        update_changelog(changelog_path(repo_root, config, release.library), notes)


def _find_repository(repo_root: Path, config: Config, required: bool) -> Optional[Repository]:
    try:
        return resolve_repository(repo_root, config)
    except (GitError, GitHubError) as e:
        if required:
            raise
        logger.warning("No GitHub repository, release notes will have no links: %s", e)
        return None


def _open_pull_request(repo_root: Path, repository: Repository, plan: ReleasePlan) -> str:
    token = get_github_token()
    base_branch = get_branch(repo_root)
    branch = "librarian-release-" + datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")

    create_branch(repo_root, branch)
    add_all(repo_root)
    commit(repo_root, RELEASE_PR_TITLE)
    push(repo_root, branch)

    body = format_release_notes(plan, repository.full_name, librarian_version=__version__)
    with GitHubClient(token, repository) as client:
        pr = client.create_pull_request(branch, base_branch, RELEASE_PR_TITLE, body)
    return pr.url


def release_command(
    library: Optional[str] = typer.Argument(
        None,
        help="Name of the library to release",
    ),
    all_libraries: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Release every library with releasable changes",
    ),
    version: Optional[str] = typer.Option(
        None,
        "--version",
        help="Release this version instead of deriving it from commits",
    ),
    execute: bool = typer.Option(
        False,
        "--execute",
        "-x",
        help="Write new versions and changelogs (default is a dry run)",
    ),
    pull_request: bool = typer.Option(
        False,
        "--pull-request",
        "-p",
        help="Commit the release to a new branch and open a pull request (implies --execute)",
    ),
) -> None:
    """Compute the next release of one library, or all of them with --all."""
    check_library_selection(library, all_libraries)
    if version and all_libraries:
        typer.echo("Error: --version requires a single library", err=True)
        raise typer.Exit(1)

    repo_root = find_repo_root()
    config = load_repo_config(repo_root)

    try:
        librarian_config = load_librarian_config(repo_root)
        librarian_state = load_librarian_state(repo_root)
        plan = plan_release(
            config, repo_root, library, version, librarian_config, librarian_state
        )
    except (ConfigError, GitError, ReleaseError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if plan.is_empty:
        typer.echo("No libraries to release.")
        return

    for release in plan.releases:
        typer.echo(f"{release.library}: {release.previous_version} -> {release.new_version}")

    if not (execute or pull_request):
        typer.echo()
        typer.echo("Dry run. Use --execute to write the release.")
        return

    try:
        repository = _find_repository(repo_root, config, required=pull_request)
        _write_release(repo_root, config, plan, repository.full_name if repository else "")
        typer.echo(f"✓ Staged {len(plan.releases)} releases")

        if pull_request:
            url = _open_pull_request(repo_root, repository, plan)
            typer.echo(f"✓ Opened pull request {url}")
    except (ConfigError, GitError, GitHubError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

"""Tag command: tag released library versions and publish GitHub releases."""

from pathlib import Path
from typing import Optional

import typer

from librarian.cli.release import changelog_path
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
    LibrarianConfig,
    LibrarianState,
    Library,
    find_library,
    format_tag,
    load_librarian_config,
    load_librarian_state,
    resolve_tag_format,
)
from librarian.git import GitError, create_tag, head_hash, push, tag_exists
from librarian.github import GitHubClient, GitHubError
from librarian.release import extract_changelog_section


def _tag_library(
    repo_root: Path,
    config: Config,
    library: Library,
    librarian_config: Optional[LibrarianConfig],
    librarian_state: Optional[LibrarianState],
    push_tag: bool,
) -> Optional[str]:
    """Create the release tag of a library.

    Returns:
        The new tag, or None if the tag already exists.
    """
    library_state = (
        librarian_state.library_by_id(library.name) if librarian_state is not None else None
    )
    tag_format = resolve_tag_format(config, library.name, librarian_config, library_state)
    tag = format_tag(tag_format, library.name, library.version)
    if tag_exists(repo_root, tag):
        typer.echo(f"Tag {tag} already exists, skipping")
        return None

    create_tag(repo_root, tag, message=f"{library.name} {library.version}")
    if push_tag:
        push(repo_root, tag)
    typer.echo(f"✓ Created tag {tag}")
    return tag


def tag_command(
    library: Optional[str] = typer.Argument(
        None,
        help="Name of the library to tag",
    ),
    all_libraries: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Tag every releasable library",
    ),
    push_tags: bool = typer.Option(
        False,
        "--push",
        help="Push new tags to origin",
    ),
    github_release: bool = typer.Option(
        False,
        "--github-release",
        help="Create a GitHub release for each new tag (implies --push)",
    ),
) -> None:
    """Tag the current version of one library, or all of them with --all."""
    check_library_selection(library, all_libraries)
    repo_root = find_repo_root()
    config = load_repo_config(repo_root)

    try:
        librarian_config = load_librarian_config(repo_root)
        librarian_state = load_librarian_state(repo_root)
        if library:
            libraries = [find_library(config, library)]
        else:
            libraries = [lib for lib in config.libraries if not lib.skip_release and lib.version]

        token = get_github_token() if github_release else ""
        commitish = head_hash(repo_root) if github_release else ""
        repository = resolve_repository(repo_root, config) if github_release else None

        for lib in libraries:
            if not lib.version:
                typer.echo(f"Error: library {lib.name} has no version", err=True)
                raise typer.Exit(1)

            push_tag = push_tags or github_release
            tag = _tag_library(
                repo_root, config, lib, librarian_config, librarian_state, push_tag
            )
            if tag is None or repository is None:
                continue

            body = extract_changelog_section(changelog_path(repo_root, config, lib.name), lib.version)
            with GitHubClient(token, repository) as client:
                client.create_release(tag, tag, body, commitish)
            typer.echo(f"✓ Created GitHub release {tag}")
    except (ConfigError, GitError, GitHubError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

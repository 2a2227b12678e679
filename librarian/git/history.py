"""Commit history traversal.

Contains:
- get_commits_for_paths_since_tag: Commits touching paths since a tag
- get_commits_for_paths_since_commit: Commits touching paths since a revision
- head_hash: Full hash of HEAD
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from librarian.commits.models import Commit
from librarian.git.branch import tag_exists
from librarian.git.exceptions import GitError, TagNotFoundError
from librarian.git.runner import _run_git_command

logger = logging.getLogger(__name__)

# Unit and record separators keep multi-line messages intact.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = "--format=%H%x1f%aI%x1f%B%x1e"


def _parse_log_output(output: str) -> list[Commit]:
    """Parse `git log` output produced with _LOG_FORMAT."""
    commits = []
    for record in output.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record:
            continue
        fields = record.split(_FIELD_SEP, 2)
        if len(fields) < 2:
            raise GitError(f"Unexpected git log record: {record!r}")
        # The runner strips output, which eats the separator of a trailing empty message.
        commit_hash, when = fields[0], fields[1]
        message = fields[2] if len(fields) == 3 else ""
        commits.append(
            Commit(
                hash=commit_hash,
                message=message.strip(),
                when=datetime.fromisoformat(when) if when else None,
            )
        )
    return commits


def get_commits_for_paths_since_commit(
    repo_root: Path,
    paths: list[str],
    since: str = "",
    exclude_paths: Optional[list[str]] = None,
) -> list[Commit]:
    """Get commits touching any of paths, newest first.

    Args:
        repo_root: The repository root.
        paths: Paths relative to the root. Empty means the whole repository.
        since: Exclusive lower bound revision. Empty means all history.
        exclude_paths: Paths whose changes alone do not select a commit.

    Returns:
        List of commits reachable from HEAD but not from since.

    Raises:
        GitError: If git fails.
    """
    revision = f"{since}..HEAD" if since else "HEAD"
    args = ["log", _LOG_FORMAT, revision, "--"]
    args.extend(paths)
    for path in exclude_paths or []:
        args.append(f":(exclude){path}")

    commits = _parse_log_output(_run_git_command(args, cwd=repo_root))
    logger.debug("Found %d commits in %s touching %s", len(commits), revision, paths)
    return commits


def get_commits_for_paths_since_tag(
    repo_root: Path,
    paths: list[str],
    tag: str,
    exclude_paths: Optional[list[str]] = None,
) -> list[Commit]:
    """Get commits touching any of paths since a tag, newest first.

    Args:
        repo_root: The repository root.
        paths: Paths relative to the root.
        tag: Tag marking the previous release.
        exclude_paths: Paths whose changes alone do not select a commit.

    Returns:
        List of commits after the tag.

    Raises:
        TagNotFoundError: If the tag does not exist.
        GitError: If git fails.
    """
    if not tag_exists(repo_root, tag):
        raise TagNotFoundError(tag)
    return get_commits_for_paths_since_commit(repo_root, paths, tag, exclude_paths)


def head_hash(repo_root: Path) -> str:
    """Return the full hash of HEAD."""
    return _run_git_command(["rev-parse", "HEAD"], cwd=repo_root)

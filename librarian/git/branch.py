"""Git branch, commit and tag operations.

Contains:
- get_branch: Get the current branch name
- get_remote_url: Get the URL of a remote
- create_branch: Create and switch to a new branch
- add_all: Stage every change
- commit: Create a commit
- tag_exists: Check whether a tag exists
- create_tag: Create an annotated tag
- push: Push a ref to a remote
"""

import logging
from pathlib import Path

from librarian.git.exceptions import GitError
from librarian.git.runner import _run_git_command

logger = logging.getLogger(__name__)


def get_branch(repo_root: Path) -> str:
    """Get the current branch name.

    Returns:
        The current branch name, or 'HEAD' if in detached state.
    """
    branch = _run_git_command(["branch", "--show-current"], cwd=repo_root)
    if not branch:
        # Detached HEAD state
        return "HEAD"
    return branch


def get_remote_url(repo_root: Path, remote: str = "origin") -> str:
    """Get the fetch URL of a remote.

    Raises:
        GitError: If the remote does not exist.
    """
    return _run_git_command(["remote", "get-url", remote], cwd=repo_root)


def create_branch(repo_root: Path, name: str) -> None:
    """Create a new branch at HEAD and check it out."""
    logger.info("Creating branch %s", name)
    _run_git_command(["checkout", "-b", name], cwd=repo_root)


def add_all(repo_root: Path) -> None:
    """Stage all changes, including untracked and deleted files."""
    _run_git_command(["add", "--all"], cwd=repo_root)


def commit(repo_root: Path, message: str) -> str:
    """Commit staged changes.

    Args:
        repo_root: The repository root.
        message: Full commit message.

    Returns:
        The hash of the new commit.

    Raises:
        GitError: If there is nothing to commit or git fails.
    """
    status = _run_git_command(["status", "--porcelain"], cwd=repo_root)
    if not status:
        raise GitError("No changes to commit.")
    _run_git_command(["commit", "-m", message], cwd=repo_root)
    return _run_git_command(["rev-parse", "HEAD"], cwd=repo_root)


def tag_exists(repo_root: Path, tag: str) -> bool:
    """Check whether a tag exists."""
    output = _run_git_command(["tag", "--list", tag], cwd=repo_root)
    return output == tag


def create_tag(repo_root: Path, tag: str, message: str = "", ref: str = "HEAD") -> None:
    """Create an annotated tag.

    Args:
        repo_root: The repository root.
        tag: Tag name.
        message: Tag message. Defaults to the tag name.
        ref: Revision to tag.

    Raises:
        GitError: If the tag already exists or git fails.
    """
    if tag_exists(repo_root, tag):
        raise GitError(f"Tag {tag!r} already exists.")
    logger.info("Creating tag %s at %s", tag, ref)
    _run_git_command(["tag", "-a", tag, "-m", message or tag, ref], cwd=repo_root)


def push(repo_root: Path, ref: str, remote: str = "origin") -> None:
    """Push a branch or tag to a remote."""
    logger.info("Pushing %s to %s", ref, remote)
    _run_git_command(["push", remote, ref], cwd=repo_root)

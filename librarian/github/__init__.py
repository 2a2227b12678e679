"""GitHub integration for librarian.

This package provides:
- client: GitHubClient, Repository, PullRequestMetadata, parse_remote
- exceptions: GitHubError
"""

from librarian.github.client import (
    DEFAULT_PR_BODY,
    GITHUB_API_URL,
    GitHubClient,
    PullRequestMetadata,
    Repository,
    parse_remote,
)
from librarian.github.exceptions import GitHubError


__all__ = [
    "DEFAULT_PR_BODY",
    "GITHUB_API_URL",
    "GitHubClient",
    "GitHubError",
    "PullRequestMetadata",
    "Repository",
    "parse_remote",
]

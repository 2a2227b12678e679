"""GitHub exception classes.

Contains:
- GitHubError: Raised when a GitHub API call fails or a remote is not on GitHub
"""

from typing import Optional


class GitHubError(Exception):
    """Raised when a GitHub operation fails.

    Attributes:
        status_code: HTTP status of the failed call, if any.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)

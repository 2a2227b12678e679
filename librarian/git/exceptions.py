"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Base exception for git-related errors
- TagNotFoundError: Raised when a release tag does not exist
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class TagNotFoundError(GitError):
    """Raised when a tag does not exist in the repository."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"tag {tag!r} not found")

"""Commit parsing exception classes.

Contains:
- CommitParseError: Base exception for commit parsing errors
- EmptyCommitMessageError: Raised when a whole commit message is blank
"""


class CommitParseError(Exception):
    """Raised when a commit message (or part of one) cannot be parsed."""

    pass


class EmptyCommitMessageError(CommitParseError):
    """Raised when the commit message is empty."""

    def __init__(self, message: str = "empty commit message"):
        super().__init__(message)

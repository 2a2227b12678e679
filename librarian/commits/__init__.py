"""Conventional commit parsing for librarian.

This package provides:
- constants: block markers, footer keys and grammar regexes
- exceptions: CommitParseError, EmptyCommitMessageError
- models: Commit, CommitPart, ConventionalCommit
- parser: parse_commits and its building blocks
"""

from librarian.commits.constants import (
    BEGIN_COMMIT,
    BEGIN_COMMIT_OVERRIDE,
    BEGIN_NESTED_COMMIT,
    BREAKING_CHANGE_KEY,
    END_COMMIT,
    END_COMMIT_OVERRIDE,
    END_NESTED_COMMIT,
    LIBRARY_IDS_KEY,
    PIPER_REV_ID_KEY,
    SOURCE_LINK_KEY,
)
from librarian.commits.exceptions import CommitParseError, EmptyCommitMessageError
from librarian.commits.models import Commit, CommitPart, ConventionalCommit
from librarian.commits.parser import (
    ParsedHeader,
    extract_begin_commit_message,
    extract_commit_parts,
    parse_commits,
    parse_footers,
    parse_header,
    parse_simple_commit,
    process_footers,
    separate_body_and_footers,
)


__all__ = [
    # Constants
    "BEGIN_COMMIT",
    "BEGIN_COMMIT_OVERRIDE",
    "BEGIN_NESTED_COMMIT",
    "BREAKING_CHANGE_KEY",
    "END_COMMIT",
    "END_COMMIT_OVERRIDE",
    "END_NESTED_COMMIT",
    "LIBRARY_IDS_KEY",
    "PIPER_REV_ID_KEY",
    "SOURCE_LINK_KEY",
    # Exceptions
    "CommitParseError",
    "EmptyCommitMessageError",
    # Models
    "Commit",
    "CommitPart",
    "ConventionalCommit",
    # Parser
    "ParsedHeader",
    "extract_begin_commit_message",
    "extract_commit_parts",
    "parse_commits",
    "parse_footers",
    "parse_header",
    "parse_simple_commit",
    "process_footers",
    "separate_body_and_footers",
]

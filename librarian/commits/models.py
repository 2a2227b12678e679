"""Data models for the librarian commits module.

Contains:
- Commit: A raw git commit as read from history
- CommitPart: One primary or nested section of a commit message
- ConventionalCommit: A single semantic change extracted from a commit
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from librarian.commits.constants import PIPER_REV_ID_KEY


@dataclass
class Commit:
    """A raw git commit."""

    hash: str
    message: str
    when: Optional[datetime] = None


@dataclass
class CommitPart:
    """Raw text of one commit section and whether it came from a nested block."""

    message: str
    is_nested: bool = False


@dataclass
class ConventionalCommit:
    """A parsed conventional commit.

    See https://www.conventionalcommits.org/en/v1.0.0/ for the format.

    Attributes:
        type: Type of change (e.g., "feat", "fix", "docs").
        subject: Short summary, continuation lines joined with spaces.
        body: Long-form description, lines joined with newlines.
        library_id: Library the change applies to.
        footers: Footer key to value. Repeated keys keep the first value.
        is_breaking: Whether the change is breaking ("!" or BREAKING CHANGE footer).
        is_nested: Whether the change came from a BEGIN_NESTED_COMMIT block.
        commit_hash: Full hash of the originating git commit.
        when: Author timestamp of the originating git commit.
    """

    type: str
    subject: str
    body: str = ""
    library_id: str = ""
    footers: dict[str, str] = field(default_factory=dict)
    is_breaking: bool = False
    is_nested: bool = False
    commit_hash: str = ""
    when: Optional[datetime] = None

    @property
    def piper_cl_number(self) -> Optional[str]:
        """The PiperOrigin-RevId footer, if present."""
        return self.footers.get(PIPER_REV_ID_KEY)

    def to_dict(self) -> dict:
        """Convert to the JSON-friendly form used in command output."""
        data = {
            "type": self.type,
            "subject": self.subject,
            "body": self.body,
        }
        if self.commit_hash:
            data["commit_hash"] = self.commit_hash
        if self.piper_cl_number:
            data["piper_cl_number"] = self.piper_cl_number
        return data

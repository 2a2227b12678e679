"""Conventional commit parser for librarian.

Contains functions for parsing raw commit messages:
- parse_commits: Parse a commit into a list of ConventionalCommit records
- extract_begin_commit_message: Keep only the BEGIN_COMMIT/END_COMMIT block
- extract_commit_parts: Split a message into primary and nested parts
- parse_simple_commit: Parse one part (no override or nested blocks)
- parse_header: Parse a "type(scope)!: description" line
- separate_body_and_footers: Split lines into body and footer sections
- parse_footers: Parse footer lines into a key/value mapping
- process_footers: Normalise the values of well-known footers
"""

import logging
from dataclasses import dataclass
from typing import Optional

from librarian.commits.constants import (
    BEGIN_NESTED_COMMIT,
    BREAKING_CHANGE_KEY,
    COMMIT_BLOCK_MARKERS,
    COMMIT_HEADER_RE,
    END_NESTED_COMMIT,
    FOOTER_RE,
    LIBRARY_ID_RE,
    SOURCE_LINK_KEY,
    SOURCE_LINK_RE,
)
from librarian.commits.exceptions import CommitParseError, EmptyCommitMessageError
from librarian.commits.models import Commit, CommitPart, ConventionalCommit

logger = logging.getLogger(__name__)


@dataclass
class ParsedHeader:
    """Result of parsing a conventional commit header line."""

    type: str
    scope: str
    description: str
    is_breaking: bool = False

    def extract_library_id(self) -> str:
        """Return the text between the first pair of brackets in the description.

        Changes that do not come from a generation pull request usually carry
        no bracketed ID, in which case an empty string is returned.
        """
        match = LIBRARY_ID_RE.search(self.description)
        if not match:
            return ""
        return match.group(1)


def parse_commits(commit: Commit, library_id: str) -> list[ConventionalCommit]:
    """Parse a commit message into a list of ConventionalCommit records.

    A BEGIN_COMMIT/END_COMMIT block (or the deprecated BEGIN_COMMIT_OVERRIDE/
    END_COMMIT_OVERRIDE block) takes precedence: only its content is parsed.
    The message may also carry any number of BEGIN_NESTED_COMMIT/
    END_NESTED_COMMIT blocks, each parsed as its own part.

    Malformed blocks are ignored and parts that fail to parse are logged and
    skipped. Records with the same (subject, library ID) are returned once.

    Args:
        commit: The raw git commit.
        library_id: Library ID used for headers without a "[library-id]" tag.

    Returns:
        Parsed records in message order. Empty if nothing conventional was found.

    Raises:
        EmptyCommitMessageError: If the commit message is blank.
    """
    message = commit.message
    if not message.strip():
        raise EmptyCommitMessageError()
    message = extract_begin_commit_message(message)

    commits: list[ConventionalCommit] = []
    seen: set[tuple[str, str]] = set()
    for part in extract_commit_parts(message):
        try:
            simple_commits = parse_simple_commit(part, commit, library_id)
        except CommitParseError as e:
            logger.warning("Failed to parse commit part %r: %s", part.message, e)
            continue

        for simple_commit in simple_commits:
            key = (simple_commit.subject, simple_commit.library_id)
            if key in seen:
                continue
            seen.add(key)
            commits.append(simple_commit)

    return commits


def extract_begin_commit_message(message: str) -> str:
    """Return the content of the whole-message override block, if any.

    Args:
        message: Raw commit message.

    Returns:
        The stripped text between the first matching begin/end markers, or the
        original message if no complete block is present.
    """
    for begin_marker, end_marker in COMMIT_BLOCK_MARKERS:
        begin_index = message.find(begin_marker)
        if begin_index == -1:
            continue

        after_begin = message[begin_index + len(begin_marker):]
        end_index = after_begin.find(end_marker)
        if end_index == -1:
            return message
        return after_begin[:end_index].strip()

    return message


def extract_commit_parts(message: str) -> list[CommitPart]:
    """Split a message into its primary part and nested parts.

    Args:
        message: Commit message, already stripped of any override block.

    Returns:
        The primary part (if non-blank) followed by every well-formed,
        non-blank nested part.
    """
    pieces = message.split(BEGIN_NESTED_COMMIT)
    parts: list[CommitPart] = []

    # The first piece is the primary commit
    primary = pieces[0].strip()
    if primary:
        parts.append(CommitPart(message=primary, is_nested=False))

    for piece in pieces[1:]:
        end_index = piece.find(END_NESTED_COMMIT)
        if end_index == -1:
            # Malformed, ignore
            continue
        nested = piece[:end_index].strip()
        if not nested:
            continue
        parts.append(CommitPart(message=nested, is_nested=True))

    return parts


def parse_simple_commit(
    part: CommitPart, commit: Commit, library_id: str
) -> list[ConventionalCommit]:
    """Parse a commit part that has no override or nested blocks.

    A part may hold several headers (e.g. three "feat:" lines in one nested
    block); each header becomes its own record sharing the part's footers.
    Non-blank lines directly after a header continue its subject; lines after
    the next blank line form its body.

    Args:
        part: The commit part to parse.
        commit: The raw git commit the part came from.
        library_id: Default library ID for headers without a bracketed ID.

    Returns:
        One record per header found.

    Raises:
        CommitParseError: If the part is blank.
    """
    text = part.message.strip()
    if not text:
        raise CommitParseError("empty commit message")

    lines = text.split("\n")
    body_lines, footer_lines = separate_body_and_footers(lines)
    footers, footer_is_breaking = parse_footers(footer_lines)
    process_footers(footers)

    commits: list[ConventionalCommit] = []
    subjects: list[list[str]] = []
    bodies: list[list[str]] = []
    found_separator = False

    for line in body_lines:
        header = parse_header(line)
        if header is None:
            if not commits:
                logger.warning(
                    "Skipping line that is not part of a conventional commit "
                    "(commit %s): %r",
                    commit.hash,
                    line,
                )
                continue

            line = line.strip()
            if not line:
                found_separator = True
                continue

            if found_separator:
                bodies[-1].append(line)
            else:
                subjects[-1].append(line)
            continue

        subjects.append([])
        bodies.append([])
        found_separator = False

        commits.append(
            ConventionalCommit(
                type=header.type,
                subject=header.description,
                library_id=header.extract_library_id() or library_id,
                footers=dict(footers),
                is_breaking=header.is_breaking or footer_is_breaking,
                is_nested=part.is_nested,
                commit_hash=commit.hash,
                when=commit.when,
            )
        )

    for parsed, subject_lines, body in zip(commits, subjects, bodies):
        parsed.subject = " ".join([parsed.subject, *subject_lines]).strip()
        parsed.body = "\n".join(body)

    return commits


def parse_header(line: str) -> Optional[ParsedHeader]:
    """Parse a conventional commit header line.

    Args:
        line: A single line of a commit message.

    Returns:
        ParsedHeader, or None if the line is not a header.
    """
    match = COMMIT_HEADER_RE.match(line)
    if not match:
        return None

    return ParsedHeader(
        type=match.group("type"),
        scope=match.group("scope") or "",
        description=match.group("description"),
        is_breaking=match.group("breaking") == "!",
    )


def separate_body_and_footers(lines: list[str]) -> tuple[list[str], list[str]]:
    """Split commit lines into body lines and footer lines.

    The footer section starts at the first blank line whose next non-blank
    line matches the footer grammar. The separator itself is dropped.

    Args:
        lines: Lines of a commit part.

    Returns:
        Tuple of (body_lines, footer_lines).
    """
    body_lines: list[str] = []
    footer_lines: list[str] = []
    in_footer_section = False

    for i, line in enumerate(lines):
        if in_footer_section:
            footer_lines.append(line)
            continue

        if not line.strip():
            next_line = next((ln for ln in lines[i + 1:] if ln.strip()), None)
            if next_line is not None and FOOTER_RE.match(next_line):
                in_footer_section = True
                continue

        body_lines.append(line)

    return body_lines, footer_lines


def parse_footers(footer_lines: list[str]) -> tuple[dict[str, str], bool]:
    """Parse footer lines into a key/value mapping.

    Lines that do not start a footer continue the previous footer's value.
    A repeated key keeps its first value, and lines following the repeat are
    dropped rather than attached to the wrong footer.

    Args:
        footer_lines: Lines of the footer section.

    Returns:
        Tuple of (footers, is_breaking) where is_breaking is True when a
        BREAKING CHANGE footer is present.
    """
    footers: dict[str, str] = {}
    last_key = ""
    is_breaking = False

    for line in footer_lines:
        match = FOOTER_RE.match(line)
        if not match:
            if last_key and line.strip():
                footers[last_key] += "\n" + line
            continue

        key = match.group(1).strip()
        if key in footers:
            last_key = ""
            continue

        footers[key] = match.group(2).strip()
        last_key = key
        if key == BREAKING_CHANGE_KEY:
            is_breaking = True

    return {key: value.strip() for key, value in footers.items()}, is_breaking


def process_footers(footers: dict[str, str]) -> None:
    """Rewrite well-known footer values in place.

    A Source-Link of the form "[org/repo@short](https://github.com/org/repo/commit/sha)"
    is replaced by the full commit SHA.
    """
    value = footers.get(SOURCE_LINK_KEY)
    if value is None:
        return
    match = SOURCE_LINK_RE.match(value)
    if match:
        footers[SOURCE_LINK_KEY] = match.group("sha")

"""Semantic version arithmetic.

Contains:
- ChangeLevel: Ordered size of a change (NONE < PATCH < MINOR < MAJOR)
- Version: A parsed semantic version
- parse_version: Parse a version string
- derive_next: Bump a version by a change level
- max_version: The greater of two versions
"""

import re
from dataclasses import dataclass
from enum import IntEnum

from librarian.release.exceptions import InvalidVersionError

SEMVER_RE = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)"
    r"\.(?P<minor>0|[1-9]\d*)"
    r"\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

_TRAILING_NUMBER_RE = re.compile(r"^(?P<prefix>.*?)(?P<number>\d+)$")


class ChangeLevel(IntEnum):
    """Size of a change, ordered so that max() picks the biggest bump."""

    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3


@dataclass(frozen=True)
class Version:
    """A semantic version. Build metadata is not supported."""

    major: int
    minor: int
    patch: int
    prerelease: str = ""

    def __str__(self) -> str:
        core = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            return f"{core}-{self.prerelease}"
        return core

    def sort_key(self) -> tuple:
        """Key ordering versions by semver precedence."""
        if not self.prerelease:
            # A release sorts after all of its prereleases.
            return (self.major, self.minor, self.patch, 1, ())
        identifiers = []
        for ident in self.prerelease.split("."):
            if ident.isdigit():
                identifiers.append((0, int(ident), ""))
            else:
                identifiers.append((1, 0, ident))
        return (self.major, self.minor, self.patch, 0, tuple(identifiers))


def parse_version(version: str) -> Version:
    """Parse a semantic version string, with an optional leading "v".

    Raises:
        InvalidVersionError: If the string is not a valid version.
    """
    match = SEMVER_RE.match(version.strip())
    if not match:
        raise InvalidVersionError(version)
    return Version(
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch")),
        prerelease=match.group("prerelease") or "",
    )


def _bump_prerelease(prerelease: str) -> str:
    match = _TRAILING_NUMBER_RE.match(prerelease)
    if not match:
        return f"{prerelease}.1"
    return f"{match.group('prefix')}{int(match.group('number')) + 1}"


def derive_next(level: ChangeLevel, version: str) -> str:
    """Compute the next version for a change level.

    A prerelease version only bumps its trailing prerelease number
    (1.0.0-preview.1 becomes 1.0.0-preview.2) whatever the level.

    Args:
        level: The highest change since the last release.
        version: The current version.

    Returns:
        The next version. Unchanged when level is NONE.

    Raises:
        InvalidVersionError: If version is not valid.
    """
    current = parse_version(version)
    if level == ChangeLevel.NONE:
        return version

    if current.prerelease:
        return str(
            Version(current.major, current.minor, current.patch, _bump_prerelease(current.prerelease))
        )

    if level == ChangeLevel.MAJOR:
        return str(Version(current.major + 1, 0, 0))
    if level == ChangeLevel.MINOR:
        return str(Version(current.major, current.minor + 1, 0))
    return str(Version(current.major, current.minor, current.patch + 1))


def max_version(a: str, b: str) -> str:
    """Return the greater of two versions. An empty string is the smallest.

    Raises:
        InvalidVersionError: If a non-empty argument is not valid.
    """
    if not a:
        return b
    if not b:
        return a
    if parse_version(b).sort_key() > parse_version(a).sort_key():
        return b
    return a

"""Release planning exception classes.

Contains:
- ReleaseError: Base exception for release errors
- InvalidVersionError: Raised when a version is not valid semver
- NoReleasableChangesError: Raised when a requested library has nothing to release
"""


class ReleaseError(Exception):
    """Base exception for release errors."""

    pass


class InvalidVersionError(ReleaseError):
    """Raised when a version string is not a valid semantic version."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"invalid semantic version: {version!r}")


class NoReleasableChangesError(ReleaseError):
    """Raised when a library was requested explicitly but has no releasable changes."""

    def __init__(self, library: str):
        self.library = library
        super().__init__(f"library {library!r} has no releasable changes")

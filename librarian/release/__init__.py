"""Release version planning for librarian.

This package provides:
- semver: ChangeLevel, parse_version, derive_next, max_version
- planner: plan_release and the version bump rules
- notes: Release notes and changelog rendering
- exceptions: ReleaseError, InvalidVersionError, NoReleasableChangesError
"""

from librarian.release.exceptions import (
    InvalidVersionError,
    NoReleasableChangesError,
    ReleaseError,
)
from librarian.release.notes import (
    COMMIT_TYPE_HEADINGS,
    extract_changelog_section,
    format_library_release_notes,
    format_release_notes,
    short_sha,
    update_changelog,
)
from librarian.release.planner import (
    LibraryRelease,
    ReleasePlan,
    collect_changes,
    filter_commits_by_library_id,
    get_highest_change,
    library_paths,
    next_version,
    plan_release,
)
from librarian.release.semver import (
    ChangeLevel,
    Version,
    derive_next,
    max_version,
    parse_version,
)


__all__ = [
    # Exceptions
    "InvalidVersionError",
    "NoReleasableChangesError",
    "ReleaseError",
    # Notes
    "COMMIT_TYPE_HEADINGS",
    "extract_changelog_section",
    "format_library_release_notes",
    "format_release_notes",
    "short_sha",
    "update_changelog",
    # Planner
    "LibraryRelease",
    "ReleasePlan",
    "filter_commits_by_library_id",
    "get_highest_change",
    "collect_changes",
    "library_paths",
    "next_version",
    "plan_release",
    # Semver
    "ChangeLevel",
    "Version",
    "derive_next",
    "max_version",
    "parse_version",
]

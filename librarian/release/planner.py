"""Release version planning.

Contains:
- LibraryRelease, ReleasePlan: The staged release of one or more libraries
- get_highest_change: Highest change level in a list of commits
- next_version: Next version for a list of commits
- filter_commits_by_library_id: Commits that apply to one library
- library_paths: Repository paths owned by a library
- collect_changes: Parsed commits of a library since its previous tag
- plan_release: Compute and stage the next release of libraries
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from librarian.commits import (
    LIBRARY_IDS_KEY,
    ConventionalCommit,
    EmptyCommitMessageError,
    parse_commits,
)
from librarian.config import (
    Config,
    LibrarianConfig,
    LibrarianState,
    Library,
    LibraryState,
    find_library,
    format_tag,
    resolve_library_output,
    resolve_tag_format,
)
from librarian.git import (
    TagNotFoundError,
    get_commits_for_paths_since_commit,
    get_commits_for_paths_since_tag,
)
from librarian.release.exceptions import NoReleasableChangesError, ReleaseError
from librarian.release.semver import ChangeLevel, derive_next, max_version, parse_version

logger = logging.getLogger(__name__)


@dataclass
class LibraryRelease:
    """The staged release of one library."""

    library: str
    previous_version: str
    new_version: str
    previous_tag: str
    new_tag: str
    changes: list[ConventionalCommit] = field(default_factory=list)


@dataclass
class ReleasePlan:
    """Every library release computed by one planning pass."""

    releases: list[LibraryRelease] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.releases


def get_highest_change(commits: list[ConventionalCommit]) -> ChangeLevel:
    """Determine the highest change level in a list of commits.

    Nested commits always count as MINOR so a generation pull request bumps
    the minor version whatever types it bundles. Otherwise breaking changes
    are MAJOR, feat is MINOR and fix is PATCH. Other types such as chore or
    docs do not warrant a release on their own.
    """
    highest = ChangeLevel.NONE
    for commit in commits:
        if commit.is_nested:
            current = ChangeLevel.MINOR
        elif commit.is_breaking:
            current = ChangeLevel.MAJOR
        elif commit.type == "feat":
            current = ChangeLevel.MINOR
        elif commit.type == "fix":
            current = ChangeLevel.PATCH
        else:
            current = ChangeLevel.NONE
        if current > highest:
            highest = current
    return highest


def next_version(commits: list[ConventionalCommit], current_version: str) -> str:
    """Calculate the next version from a list of commits."""
    return derive_next(get_highest_change(commits), current_version)


def filter_commits_by_library_id(
    commits: list[ConventionalCommit], library_id: str
) -> list[ConventionalCommit]:
    """Return the commits that apply to a library.

    A Library-IDs footer (comma separated) takes precedence over the commit's
    own library_id.
    """
    filtered = []
    for commit in commits:
        library_ids = commit.footers.get(LIBRARY_IDS_KEY)
        if library_ids is not None:
            if library_id in (i.strip() for i in library_ids.split(",")):
                filtered.append(commit)
        elif commit.library_id == library_id:
            filtered.append(commit)
    return filtered


def library_paths(
    config: Config, library: Library, library_state: Optional[LibraryState] = None
) -> list[str]:
    """Return the repository paths owned by a library.

    Source roots recorded in .librarian/state.yaml win. Otherwise this is the
    library output directory. A library with no output owns the whole
    repository.
    """
    if library_state is not None and library_state.source_roots:
        return list(library_state.source_roots)
    output = resolve_library_output(config, library)
    return [output] if output else ["."]


def collect_changes(
    repo_root: Path,
    library: Library,
    paths: list[str],
    previous_tag: str,
    exclude_paths: Optional[list[str]] = None,
) -> list[ConventionalCommit]:
    """Return the conventional commits of a library since a tag.

    Commits touching paths after previous_tag are parsed and filtered to the
    library. A missing tag means the library was never released, so the whole
    history of paths is used. Commits with empty messages are skipped.

    A commit whose changes under paths all fall under exclude_paths is not
    selected.
    """
    try:
        raw_commits = get_commits_for_paths_since_tag(
            repo_root, paths, previous_tag, exclude_paths
        )
    except TagNotFoundError:
        logger.warning(
            "Tag %s for library %s not found, using full history",
            previous_tag,
            library.name,
        )
        raw_commits = get_commits_for_paths_since_commit(
            repo_root, paths, exclude_paths=exclude_paths
        )

    changes = []
    for raw in raw_commits:
        try:
            parsed = parse_commits(raw, library.name)
        except EmptyCommitMessageError:
            logger.warning("Skipping commit %s with an empty message", raw.hash)
            continue
        changes.extend(filter_commits_by_library_id(parsed, library.name))
    return changes


def plan_release(
    config: Config,
    repo_root: Path,
    library_name: Optional[str] = None,
    version_override: Optional[str] = None,
    librarian_config: Optional[LibrarianConfig] = None,
    librarian_state: Optional[LibrarianState] = None,
) -> ReleasePlan:
    """Compute the next release of one or all libraries.

    For each releasable library the previous release tag is found, commits
    touching the library since that tag are parsed and filtered to the library,
    and the next version is derived from the highest change. The new version is
    staged on the library in config.

    Args:
        config: The parsed librarian.yaml. Library versions are updated in place.
        repo_root: The repository root.
        library_name: Release only this library. None releases every library.
        version_override: Use this version instead of deriving one.
        librarian_config: Legacy .librarian/config.yaml, for tag formats and
            next_version pins.
        librarian_state: Legacy .librarian/state.yaml, for source roots,
            release exclude paths and deprecated tag formats.

    Returns:
        The ReleasePlan. Libraries without changes are left out.

    Raises:
        LibraryNotFoundError: If library_name is not configured.
        NoReleasableChangesError: If library_name has no releasable changes.
        ReleaseError: If a requested library has no version, or the override
            is not newer than the current version.
    """
    if library_name:
        libraries = [find_library(config, library_name)]
    else:
        libraries = list(config.libraries)

    plan = ReleasePlan()
    for library in libraries:
        if library.skip_release:
            logger.info("Skipping %s (skip_release is set)", library.name)
            continue
        if not library.version:
            if library_name:
                raise ReleaseError(f"library {library.name!r} has no version")
            logger.warning("Skipping %s: no version configured", library.name)
            continue

        library_state = (
            librarian_state.library_by_id(library.name) if librarian_state is not None else None
        )
        tag_format = resolve_tag_format(config, library.name, librarian_config, library_state)
        previous_tag = format_tag(tag_format, library.name, library.version)
        paths = library_paths(config, library, library_state)
        exclude_paths = library_state.release_exclude_paths if library_state is not None else None
        changes = collect_changes(repo_root, library, paths, previous_tag, exclude_paths)

        if version_override:
            current = parse_version(library.version)
            if parse_version(version_override).sort_key() <= current.sort_key():
                raise ReleaseError(
                    f"version {version_override} is not newer than {library.version} "
                    f"for library {library.name!r}"
                )
            new_version = version_override
        else:
            level = get_highest_change(changes)
            if level == ChangeLevel.NONE:
                if library_name:
                    raise NoReleasableChangesError(library.name)
                logger.info("No releasable changes for %s", library.name)
                continue
            new_version = derive_next(level, library.version)

        if librarian_config is not None:
            library_config = librarian_config.library_config_for(library.name)
            if library_config is not None and library_config.next_version:
                new_version = max_version(new_version, library_config.next_version)

        logger.info("Staging %s: %s -> %s", library.name, library.version, new_version)
        plan.releases.append(
            LibraryRelease(
                library=library.name,
                previous_version=library.version,
                new_version=new_version,
                previous_tag=previous_tag,
                new_tag=format_tag(tag_format, library.name, new_version),
                changes=changes,
            )
        )
        library.version = new_version

    return plan

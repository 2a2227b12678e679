"""Release notes and changelog rendering.

Contains:
- COMMIT_TYPE_HEADINGS: Section heading per commit type, in display order
- short_sha: Abbreviate a commit hash
- format_library_release_notes: Markdown notes for one library release
- format_release_notes: Pull request body for a whole release plan
- update_changelog: Prepend notes to a CHANGELOG.md file
- extract_changelog_section: Notes of one version from a CHANGELOG.md file
"""

from datetime import date
from pathlib import Path
from typing import Optional

from librarian.commits import ConventionalCommit
from librarian.release.planner import LibraryRelease, ReleasePlan

# Only these types appear in release notes, in this order.
COMMIT_TYPE_HEADINGS = {
    "feat": "Features",
    "fix": "Bug Fixes",
    "perf": "Performance Improvements",
    "revert": "Reverts",
    "docs": "Documentation",
}

CHANGELOG_TITLE = "# Changelog"

RELEASE_PR_HEADER = (
    "PR created by the Librarian CLI to initialize a release. "
    "Merging this PR will auto trigger a release."
)


def short_sha(sha: str) -> str:
    """Return the first 8 characters of a commit hash."""
    return sha[:8]


def _format_change(change: ConventionalCommit, repo: str) -> str:
    line = f"* {change.subject}"
    if change.piper_cl_number:
        line += f" (PiperOrigin-RevId: {change.piper_cl_number})"
    if change.commit_hash:
        sha = short_sha(change.commit_hash)
        if repo:
            line += f" ([{sha}](https://github.com/{repo}/commit/{change.commit_hash}))"
        else:
            line += f" ({sha})"
    return line


def format_library_release_notes(
    release: LibraryRelease,
    repo: str = "",
    release_date: Optional[date] = None,
) -> str:
    """Render the markdown release notes for one library.

    Args:
        release: The staged library release.
        repo: GitHub "owner/name", used for compare and commit links.
        release_date: Date shown in the heading. Defaults to today.

    Returns:
        Markdown text starting with a "## <version>" heading.
    """
    release_date = release_date or date.today()
    if repo:
        heading = (
            f"## [{release.new_version}](https://github.com/{repo}/compare/"
            f"{release.previous_tag}...{release.new_tag}) ({release_date.isoformat()})"
        )
    else:
        heading = f"## {release.new_version} ({release_date.isoformat()})"

    lines = [heading]
    for commit_type, title in COMMIT_TYPE_HEADINGS.items():
        changes = [c for c in release.changes if c.type == commit_type]
        if not changes:
            continue
        lines.append("")
        lines.append(f"### {title}")
        lines.append("")
        lines.extend(_format_change(c, repo) for c in changes)

    return "\n".join(lines) + "\n"


def format_release_notes(
    plan: ReleasePlan,
    repo: str = "",
    release_date: Optional[date] = None,
    librarian_version: str = "",
) -> str:
    """Render the pull request body for a release plan.

    Each library gets a collapsible section holding its release notes.
    """
    lines = [RELEASE_PR_HEADER, ""]
    if librarian_version:
        lines.append(f"Librarian Version: {librarian_version}")
        lines.append("")

    for release in plan.releases:
        lines.append(f"<details><summary>{release.library}: {release.new_version}</summary>")
        lines.append("")
        lines.append(format_library_release_notes(release, repo, release_date))
        lines.append("</details>")
        lines.append("")

    return "\n".join(lines)


def update_changelog(path: Path, notes: str) -> None:
    """Insert release notes at the top of a changelog.

    The notes go directly below the "# Changelog" title. A missing file is
    created with that title.

    Args:
        path: Path to CHANGELOG.md.
        notes: Markdown notes for one release.
    """
    existing = path.read_text() if path.exists() else ""

    if existing.startswith(CHANGELOG_TITLE):
        rest = existing[len(CHANGELOG_TITLE):].lstrip("\n")
    else:
        rest = existing.lstrip("\n")

    content = f"{CHANGELOG_TITLE}\n\n{notes.rstrip()}\n"
    if rest:
        content += f"\n{rest}"

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


def extract_changelog_section(path: Path, version: str) -> str:
    """Return the release notes of one version from a changelog.

    The section starts at the "## <version>" or "## [<version>](...)" heading
    and runs up to the next "## " heading.

    Args:
        path: Path to CHANGELOG.md.
        version: The version to look up.

    Returns:
        The section without its heading, or "" if the file or version is missing.
    """
    if not path.exists():
        return ""

    section: list[str] = []
    in_section = False
    for line in path.read_text().splitlines():
        if line.startswith("## "):
            if in_section:
                break
            heading = line[3:]
            in_section = heading.startswith(f"[{version}]") or heading.split(" ")[0] == version
            continue
        if in_section:
            section.append(line)
    return "\n".join(section).strip()

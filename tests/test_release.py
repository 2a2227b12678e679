"""Tests for librarian.release module."""

from datetime import date

import pytest

from librarian.commits import Commit, ConventionalCommit
from librarian.config import (
    LibrarianConfig,
    LibrarianState,
    LibraryConfig,
    LibraryNotFoundError,
    LibraryState,
)
from librarian.git import TagNotFoundError
from librarian.release import (
    ChangeLevel,
    InvalidVersionError,
    LibraryRelease,
    NoReleasableChangesError,
    ReleaseError,
    ReleasePlan,
    derive_next,
    extract_changelog_section,
    filter_commits_by_library_id,
    format_library_release_notes,
    format_release_notes,
    get_highest_change,
    library_paths,
    max_version,
    next_version,
    parse_version,
    plan_release,
    short_sha,
    update_changelog,
)


def _cc(type: str = "fix", subject: str = "x", **kwargs) -> ConventionalCommit:
    return ConventionalCommit(type=type, subject=subject, **kwargs)


class TestParseVersion:
    """Tests for parse_version function."""

    def test_parses_release(self):
        """Test a plain version."""
        version = parse_version("1.2.3")
        assert (version.major, version.minor, version.patch, version.prerelease) == (1, 2, 3, "")

    def test_accepts_v_prefix(self):
        """Test that a leading v is accepted and dropped."""
        assert str(parse_version("v0.4.0")) == "0.4.0"

    def test_prerelease(self):
        """Test a prerelease version."""
        assert parse_version("1.0.0-preview.1").prerelease == "preview.1"

    @pytest.mark.parametrize("value", ["", "1.2", "01.2.3", "1.2.3.4", "latest"])
    def test_invalid(self, value):
        """Test that invalid versions raise InvalidVersionError."""
        with pytest.raises(InvalidVersionError):
            parse_version(value)

    def test_prerelease_sorts_before_release(self):
        """Test semver precedence of prereleases."""
        assert parse_version("1.0.0-alpha").sort_key() < parse_version("1.0.0").sort_key()
        assert parse_version("1.0.0-alpha.2").sort_key() < parse_version("1.0.0-alpha.10").sort_key()


class TestDeriveNext:
    """Tests for derive_next function."""

    @pytest.mark.parametrize(
        "level,version,expected",
        [
            (ChangeLevel.MAJOR, "1.2.3", "2.0.0"),
            (ChangeLevel.MINOR, "1.2.3", "1.3.0"),
            (ChangeLevel.PATCH, "1.2.3", "1.2.4"),
            (ChangeLevel.NONE, "1.2.3", "1.2.3"),
            (ChangeLevel.MAJOR, "1.0.0-preview.1", "1.0.0-preview.2"),
            (ChangeLevel.PATCH, "2.0.0-rc", "2.0.0-rc.1"),
        ],
    )
    def test_bumps(self, level, version, expected):
        """Test bumps for each change level."""
        assert derive_next(level, version) == expected

    def test_invalid_version_raises(self):
        """Test that an invalid current version is an error."""
        with pytest.raises(InvalidVersionError):
            derive_next(ChangeLevel.PATCH, "not-a-version")


class TestMaxVersion:
    """Tests for max_version function."""

    def test_picks_greater(self):
        """Test that the greater version is returned."""
        assert max_version("1.2.3", "1.10.0") == "1.10.0"
        assert max_version("2.0.0", "1.10.0") == "2.0.0"

    def test_empty_is_smallest(self):
        """Test that an empty version loses."""
        assert max_version("", "1.0.0") == "1.0.0"
        assert max_version("1.0.0", "") == "1.0.0"


class TestGetHighestChange:
    """Tests for get_highest_change and next_version."""

    def test_no_commits(self):
        """Test that no commits means no change."""
        assert get_highest_change([]) == ChangeLevel.NONE

    def test_breaking_is_major(self):
        """Test that a breaking change is MAJOR."""
        commits = [_cc("fix"), _cc("feat", is_breaking=True)]
        assert get_highest_change(commits) == ChangeLevel.MAJOR

    def test_feat_is_minor(self):
        """Test that feat is MINOR."""
        assert get_highest_change([_cc("fix"), _cc("feat")]) == ChangeLevel.MINOR

    def test_fix_is_patch(self):
        """Test that fix is PATCH."""
        assert get_highest_change([_cc("docs"), _cc("fix")]) == ChangeLevel.PATCH

    def test_other_types_are_no_change(self):
        """Test that chore and docs alone do not warrant a release."""
        assert get_highest_change([_cc("docs"), _cc("chore")]) == ChangeLevel.NONE

    def test_nested_is_minor_even_if_breaking(self):
        """Test that nested commits always count as MINOR."""
        commits = [_cc("fix", is_nested=True, is_breaking=True)]
        assert get_highest_change(commits) == ChangeLevel.MINOR

    def test_next_version(self):
        """Test next_version combines the level and bump."""
        assert next_version([_cc("feat")], "0.3.1") == "0.4.0"


class TestFilterCommitsByLibraryId:
    """Tests for filter_commits_by_library_id function."""

    def test_matches_library_id(self):
        """Test filtering by the record's library_id."""
        commits = [_cc(subject="a", library_id="foo"), _cc(subject="b", library_id="bar")]

        result = filter_commits_by_library_id(commits, "foo")

        assert [c.subject for c in result] == ["a"]

    def test_library_ids_footer_takes_precedence(self):
        """Test that the Library-IDs footer overrides library_id."""
        commits = [
            _cc(subject="a", library_id="foo", footers={"Library-IDs": "bar, baz"}),
            _cc(subject="b", library_id="other", footers={"Library-IDs": "foo,bar"}),
        ]

        result = filter_commits_by_library_id(commits, "foo")

        assert [c.subject for c in result] == ["b"]


class TestLibraryPaths:
    """Tests for library_paths function."""

    def test_output_path(self, sample_config):
        """Test that a library owns its output directory."""
        storage = sample_config.libraries[1]
        assert library_paths(sample_config, storage) == ["src/storage"]

    def test_whole_repo_without_output(self):
        """Test that a library without output owns the repository."""
        from librarian.config import Config, Library

        config = Config(libraries=[Library(name="foo")])
        assert library_paths(config, config.libraries[0]) == ["."]

    def test_state_source_roots_win(self, sample_config):
        """Test that source roots from state.yaml replace the output directory."""
        storage = sample_config.libraries[1]
        state = LibraryState(id="google-cloud-storage", source_roots=["storage", "storage-v2"])

        assert library_paths(sample_config, storage, state) == ["storage", "storage-v2"]

    def test_empty_state_source_roots(self, sample_config):
        """Test that a state entry without source roots keeps the output directory."""
        storage = sample_config.libraries[1]
        state = LibraryState(id="google-cloud-storage")

        assert library_paths(sample_config, storage, state) == ["src/storage"]


class TestPlanRelease:
    """Tests for plan_release function."""

    def _mock_history(self, mocker, by_path):
        def fake_since_tag(repo_root, paths, tag, exclude_paths=None):
            return by_path.get(paths[0], [])

        return mocker.patch(
            "librarian.release.planner.get_commits_for_paths_since_tag",
            side_effect=fake_since_tag,
        )

    def test_plans_all_libraries(self, mocker, sample_config, temp_dir):
        """Test a plan across libraries with different change levels."""
        mock_history = self._mock_history(
            mocker,
            {
                "src/generated/cloud/secretmanager/v1": [
                    Commit(hash="a" * 40, message="feat: add rotation"),
                ],
                "src/storage": [Commit(hash="b" * 40, message="fix: retry uploads")],
            },
        )

        plan = plan_release(sample_config, temp_dir)

        assert [(r.library, r.previous_version, r.new_version) for r in plan.releases] == [
            ("google-cloud-secretmanager-v1", "1.2.0", "1.3.0"),
            ("google-cloud-storage", "0.5.0", "0.5.1"),
        ]
        assert plan.releases[0].previous_tag == "google-cloud-secretmanager-v1-v1.2.0"
        assert plan.releases[0].new_tag == "google-cloud-secretmanager-v1-v1.3.0"
        assert sample_config.libraries[0].version == "1.3.0"
        assert sample_config.libraries[1].version == "0.5.1"
        mock_history.assert_any_call(
            temp_dir, ["src/storage"], "google-cloud-storage-v0.5.0", None
        )

    def test_skips_libraries_without_changes(self, mocker, sample_config, temp_dir):
        """Test that unchanged libraries are left out of the plan."""
        self._mock_history(
            mocker, {"src/storage": [Commit(hash="b" * 40, message="fix: retry uploads")]}
        )

        plan = plan_release(sample_config, temp_dir)

        assert [r.library for r in plan.releases] == ["google-cloud-storage"]
        assert sample_config.libraries[0].version == "1.2.0"

    def test_requested_library_without_changes_raises(self, mocker, sample_config, temp_dir):
        """Test that an explicitly requested library must have changes."""
        self._mock_history(mocker, {})

        with pytest.raises(NoReleasableChangesError):
            plan_release(sample_config, temp_dir, "google-cloud-storage")

    def test_unknown_library_raises(self, sample_config, temp_dir):
        """Test that an unknown library name raises."""
        with pytest.raises(LibraryNotFoundError):
            plan_release(sample_config, temp_dir, "nope")

    def test_skip_release(self, mocker, sample_config, temp_dir):
        """Test that skip_release libraries are not planned."""
        sample_config.libraries[1].skip_release = True
        mock_history = self._mock_history(mocker, {})

        plan_release(sample_config, temp_dir)

        paths = [call.args[1] for call in mock_history.call_args_list]
        assert ["src/storage"] not in paths

    def test_filters_commits_for_other_libraries(self, mocker, sample_config, temp_dir):
        """Test that commits tagged for another library are ignored."""
        self._mock_history(
            mocker,
            {
                "src/storage": [
                    Commit(hash="c" * 40, message="feat: [google-cloud-pubsub] unrelated"),
                ]
            },
        )

        plan = plan_release(sample_config, temp_dir)

        assert plan.is_empty

    def test_missing_tag_uses_full_history(self, mocker, sample_config, temp_dir):
        """Test the fallback when the previous tag does not exist."""
        mocker.patch(
            "librarian.release.planner.get_commits_for_paths_since_tag",
            side_effect=TagNotFoundError("google-cloud-storage-v0.5.0"),
        )
        mock_full = mocker.patch(
            "librarian.release.planner.get_commits_for_paths_since_commit",
            return_value=[Commit(hash="d" * 40, message="feat!: new API")],
        )

        plan = plan_release(sample_config, temp_dir, "google-cloud-storage")

        assert plan.releases[0].new_version == "1.0.0"
        mock_full.assert_called_once_with(temp_dir, ["src/storage"], exclude_paths=None)

    def test_skips_empty_commit_messages(self, mocker, sample_config, temp_dir):
        """Test that commits with empty messages are ignored."""
        self._mock_history(
            mocker,
            {
                "src/storage": [
                    Commit(hash="e" * 40, message="   "),
                    Commit(hash="f" * 40, message="fix: real"),
                ]
            },
        )

        plan = plan_release(sample_config, temp_dir, "google-cloud-storage")

        assert [c.subject for c in plan.releases[0].changes] == ["real"]

    def test_chore_only_library_not_released(self, mocker, sample_config, temp_dir):
        """Test that chore and docs commits alone do not cut a release."""
        self._mock_history(
            mocker,
            {
                "src/generated/cloud/secretmanager/v1": [
                    Commit(hash="a" * 40, message="chore: bump deps"),
                    Commit(hash="b" * 40, message="docs: fix typo"),
                ],
                "src/storage": [Commit(hash="c" * 40, message="fix: retry uploads")],
            },
        )

        plan = plan_release(sample_config, temp_dir)

        assert [r.library for r in plan.releases] == ["google-cloud-storage"]
        assert sample_config.libraries[0].version == "1.2.0"

    def test_chore_only_requested_library_raises(self, mocker, sample_config, temp_dir):
        """Test that a requested library with only chore commits has nothing to release."""
        self._mock_history(
            mocker, {"src/storage": [Commit(hash="a" * 40, message="chore: bump deps")]}
        )

        with pytest.raises(NoReleasableChangesError):
            plan_release(sample_config, temp_dir, "google-cloud-storage")

    def test_state_source_roots_and_exclude_paths(self, mocker, sample_config, temp_dir):
        """Test that state.yaml source roots and release exclude paths select commits."""
        mock_history = self._mock_history(
            mocker, {"storage": [Commit(hash="a" * 40, message="fix: retry uploads")]}
        )
        librarian_state = LibrarianState(
            libraries=[
                LibraryState(
                    id="google-cloud-storage",
                    source_roots=["storage"],
                    release_exclude_paths=["storage/CHANGELOG.md"],
                )
            ]
        )

        plan = plan_release(
            sample_config, temp_dir, "google-cloud-storage", librarian_state=librarian_state
        )

        assert plan.releases[0].new_version == "0.5.1"
        mock_history.assert_called_once_with(
            temp_dir, ["storage"], "google-cloud-storage-v0.5.0", ["storage/CHANGELOG.md"]
        )

    def test_state_tag_format_without_default(self, mocker, sample_config, temp_dir):
        """Test that the deprecated state.yaml tag_format applies without default.tag_format."""
        sample_config.default.tag_format = ""
        mock_history = self._mock_history(
            mocker, {"src/storage": [Commit(hash="a" * 40, message="fix: x")]}
        )
        librarian_state = LibrarianState(
            libraries=[LibraryState(id="google-cloud-storage", tag_format="storage/v{version}")]
        )

        plan = plan_release(
            sample_config, temp_dir, "google-cloud-storage", librarian_state=librarian_state
        )

        assert plan.releases[0].previous_tag == "storage/v0.5.0"
        assert plan.releases[0].new_tag == "storage/v0.5.1"
        assert mock_history.call_args.args[2] == "storage/v0.5.0"

    def test_version_override(self, mocker, sample_config, temp_dir):
        """Test that an explicit version replaces the derived one."""
        self._mock_history(mocker, {})

        plan = plan_release(sample_config, temp_dir, "google-cloud-storage", "1.0.0")

        assert plan.releases[0].new_version == "1.0.0"

    def test_version_override_must_be_newer(self, mocker, sample_config, temp_dir):
        """Test that an override not newer than the current version fails."""
        self._mock_history(mocker, {})

        with pytest.raises(ReleaseError):
            plan_release(sample_config, temp_dir, "google-cloud-storage", "0.4.0")

    def test_legacy_next_version_pin(self, mocker, sample_config, temp_dir):
        """Test that next_version in config.yaml raises the derived version."""
        self._mock_history(mocker, {"src/storage": [Commit(hash="b" * 40, message="fix: x")]})
        librarian_config = LibrarianConfig(
            libraries=[LibraryConfig(library_id="google-cloud-storage", next_version="0.7.0")]
        )

        plan = plan_release(
            sample_config, temp_dir, "google-cloud-storage", librarian_config=librarian_config
        )

        assert plan.releases[0].new_version == "0.7.0"

    def test_library_without_version_raises_when_requested(self, sample_config, temp_dir):
        """Test that a requested library needs a version."""
        sample_config.libraries[1].version = ""

        with pytest.raises(ReleaseError):
            plan_release(sample_config, temp_dir, "google-cloud-storage")


def _release(changes=None) -> LibraryRelease:
    return LibraryRelease(
        library="google-cloud-storage",
        previous_version="0.5.0",
        new_version="0.6.0",
        previous_tag="google-cloud-storage-v0.5.0",
        new_tag="google-cloud-storage-v0.6.0",
        changes=changes or [],
    )


class TestReleaseNotes:
    """Tests for release notes rendering."""

    def test_short_sha(self):
        """Test hash abbreviation."""
        assert short_sha("0123456789abcdef") == "01234567"

    def test_library_notes_grouped_by_type(self):
        """Test sections in type order with commit links."""
        release = _release(
            [
                _cc("fix", "fix uploads", commit_hash="1234567890ab"),
                _cc("feat", "add buckets", commit_hash="abcdef123456",
                    footers={"PiperOrigin-RevId": "42"}),
                _cc("chore", "bump deps"),
            ]
        )

        notes = format_library_release_notes(
            release, "googleapis/google-cloud-rust", date(2024, 6, 1)
        )

        assert notes.startswith(
            "## [0.6.0](https://github.com/googleapis/google-cloud-rust/compare/"
            "google-cloud-storage-v0.5.0...google-cloud-storage-v0.6.0) (2024-06-01)\n"
        )
        assert notes.index("### Features") < notes.index("### Bug Fixes")
        assert (
            "* add buckets (PiperOrigin-RevId: 42) "
            "([abcdef12](https://github.com/googleapis/google-cloud-rust/commit/abcdef123456))"
        ) in notes
        assert "bump deps" not in notes

    def test_library_notes_without_repo(self):
        """Test notes without GitHub links."""
        release = _release([_cc("fix", "a fix", commit_hash="1234567890ab")])

        notes = format_library_release_notes(release, "", date(2024, 6, 1))

        assert notes == "## 0.6.0 (2024-06-01)\n\n### Bug Fixes\n\n* a fix (12345678)\n"

    def test_pull_request_body(self):
        """Test the pull request body wraps each library in details."""
        plan = ReleasePlan(releases=[_release([_cc("feat", "x")])])

        body = format_release_notes(plan, "", date(2024, 6, 1), librarian_version="1.0.0")

        assert "Librarian Version: 1.0.0" in body
        assert "<details><summary>google-cloud-storage: 0.6.0</summary>" in body
        assert "</details>" in body


class TestChangelog:
    """Tests for update_changelog and extract_changelog_section."""

    def test_creates_file(self, temp_dir):
        """Test that a missing changelog is created."""
        path = temp_dir / "pkg" / "CHANGELOG.md"

        update_changelog(path, "## 0.6.0 (2024-06-01)\n\n* a fix\n")

        assert path.read_text() == "# Changelog\n\n## 0.6.0 (2024-06-01)\n\n* a fix\n"

    def test_prepends_below_title(self, temp_dir):
        """Test that new notes go above older releases."""
        path = temp_dir / "CHANGELOG.md"
        path.write_text("# Changelog\n\n## 0.5.0 (2024-01-01)\n\n* old\n")

        update_changelog(path, "## 0.6.0 (2024-06-01)\n\n* new\n")

        assert path.read_text() == (
            "# Changelog\n\n## 0.6.0 (2024-06-01)\n\n* new\n\n## 0.5.0 (2024-01-01)\n\n* old\n"
        )

    def test_extract_section(self, temp_dir):
        """Test extracting the notes of one version."""
        path = temp_dir / "CHANGELOG.md"
        path.write_text(
            "# Changelog\n\n"
            "## [0.6.0](https://example.com) (2024-06-01)\n\n### Features\n\n* new\n\n"
            "## 0.5.0 (2024-01-01)\n\n* old\n"
        )

        assert extract_changelog_section(path, "0.6.0") == "### Features\n\n* new"
        assert extract_changelog_section(path, "0.5.0") == "* old"
        assert extract_changelog_section(path, "0.4.0") == ""

    def test_extract_section_missing_file(self, temp_dir):
        """Test that a missing changelog gives empty notes."""
        assert extract_changelog_section(temp_dir / "CHANGELOG.md", "1.0.0") == ""

"""Tests for librarian.github module."""

import json

import httpx
import pytest

from librarian.github import (
    DEFAULT_PR_BODY,
    GitHubClient,
    GitHubError,
    Repository,
    parse_remote,
)

REPO = Repository(owner="googleapis", name="google-cloud-rust")


class TestParseRemote:
    """Tests for parse_remote function."""

    @pytest.mark.parametrize(
        "remote",
        [
            "https://github.com/googleapis/google-cloud-rust",
            "https://github.com/googleapis/google-cloud-rust.git",
            "git@github.com:googleapis/google-cloud-rust.git",
        ],
    )
    def test_github_remotes(self, remote):
        """Test HTTPS and SSH remotes."""
        assert parse_remote(remote) == REPO

    @pytest.mark.parametrize(
        "remote",
        [
            "https://gitlab.com/googleapis/google-cloud-rust",
            "https://github.com/googleapis",
            "/local/path/repo",
        ],
    )
    def test_non_github_remotes(self, remote):
        """Test that other remotes raise GitHubError."""
        with pytest.raises(GitHubError):
            parse_remote(remote)

    def test_full_name(self):
        """Test the owner/name form."""
        assert REPO.full_name == "googleapis/google-cloud-rust"


class TestGitHubClient:
    """Tests for GitHubClient."""

    def test_create_pull_request(self):
        """Test the pull request payload and result."""
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                201, json={"number": 7, "html_url": "https://github.com/pr/7"}
            )

        with GitHubClient("token123", REPO, transport=httpx.MockTransport(handler)) as client:
            pr = client.create_pull_request("release-branch", "main", "chore: release", "notes")

        assert pr.number == 7
        assert pr.url == "https://github.com/pr/7"
        assert pr.repo == REPO
        assert seen["method"] == "POST"
        assert seen["path"] == "/repos/googleapis/google-cloud-rust/pulls"
        assert seen["auth"] == "Bearer token123"
        assert seen["body"]["head"] == "release-branch"
        assert seen["body"]["base"] == "main"
        assert seen["body"]["body"] == "notes"
        assert seen["body"]["draft"] is False

    def test_empty_body_uses_default(self):
        """Test that an empty PR body is replaced."""
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content)["body"])
            return httpx.Response(201, json={"number": 1})

        with GitHubClient("t", REPO, transport=httpx.MockTransport(handler)) as client:
            client.create_pull_request("b", "main", "title")

        assert bodies == [DEFAULT_PR_BODY]

    def test_create_release(self):
        """Test the release payload."""
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"id": 1, "tag_name": "foo-1.0.0"})

        with GitHubClient("t", REPO, transport=httpx.MockTransport(handler)) as client:
            result = client.create_release("foo-1.0.0", "foo-1.0.0", "notes", "abc123")

        assert result["id"] == 1
        assert seen["path"] == "/repos/googleapis/google-cloud-rust/releases"
        assert seen["body"] == {
            "tag_name": "foo-1.0.0",
            "name": "foo-1.0.0",
            "body": "notes",
            "target_commitish": "abc123",
        }

    def test_http_error(self):
        """Test that an error status raises GitHubError with the API message."""
        def handler(request):
            return httpx.Response(422, json={"message": "Validation Failed"})

        with GitHubClient("t", REPO, transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(GitHubError) as exc_info:
                client.create_release("foo-1.0.0", "foo-1.0.0", "", "main")

        assert exc_info.value.status_code == 422
        assert "Validation Failed" in str(exc_info.value)

    def test_requires_context_manager(self):
        """Test that calls outside the context manager fail."""
        client = GitHubClient("t", REPO)

        with pytest.raises(GitHubError):
            client.create_release("foo-1.0.0", "foo-1.0.0", "", "main")

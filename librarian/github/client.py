"""Thin GitHub REST client.

Contains:
- Repository: A GitHub owner and repository name
- PullRequestMetadata: Identifies a created pull request
- parse_remote: Parse a git remote URL into a Repository
- GitHubClient: Create pull requests and releases
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from librarian.github.exceptions import GitHubError

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
GITHUB_HTTPS_PREFIX = "https://github.com/"
DEFAULT_PR_BODY = "Regenerated all changed APIs. See individual commits for details."


@dataclass(frozen=True)
class Repository:
    """A GitHub repository."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class PullRequestMetadata:
    """A pull request within a repository."""

    repo: Repository
    number: int
    url: str = ""


def parse_remote(remote: str) -> Repository:
    """Parse a GitHub remote URL.

    Both "https://github.com/owner/name(.git)" and "git@github.com:owner/name(.git)"
    are accepted.

    Raises:
        GitHubError: If the remote is not a GitHub remote.
    """
    if remote.startswith(GITHUB_HTTPS_PREFIX):
        parts = remote[len(GITHUB_HTTPS_PREFIX):].split("/")
        if len(parts) < 2 or not parts[0] or not parts[1]:
            raise GitHubError(f"remote {remote!r} is not a GitHub remote")
        return Repository(owner=parts[0], name=parts[1].removesuffix(".git"))

    if remote.startswith("git@"):
        host_path = remote.split(":")
        if len(host_path) != 2:
            raise GitHubError(f"remote {remote!r} is not a GitHub remote")
        owner_name = host_path[1].split("/")
        if len(owner_name) != 2:
            raise GitHubError(f"remote {remote!r} is not a GitHub remote")
        return Repository(owner=owner_name[0], name=owner_name[1].removesuffix(".git"))

    raise GitHubError(f"remote {remote!r} is not a GitHub remote")


class GitHubClient:
    """GitHub REST client bound to one repository.

    Must be used as a context manager so the underlying httpx client is
    opened and closed.

    Example::

        with GitHubClient(token, repo) as client:
            client.create_release("v1.0.0", "v1.0.0", "notes", "main")
    """

    def __init__(
        self,
        token: str,
        repo: Repository,
        base_url: str = GITHUB_API_URL,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = 30.0,
    ) -> None:
        self._token = token
        self.repo = repo
        self._base_url = base_url
        self._transport = transport
        self._timeout = timeout
        self._client: Optional[httpx.Client] = None

    def __enter__(self) -> "GitHubClient":
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        self._client = httpx.Client(
            base_url=self._base_url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    def _request(self, method: str, path: str, json_body: Optional[dict] = None) -> Any:
        if self._client is None:
            raise GitHubError("client not initialised, use it as a context manager")
        try:
            response = self._client.request(method, path, json=json_body)
        except httpx.HTTPError as e:
            raise GitHubError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            try:
                detail = response.json().get("message", response.text)
            except ValueError:
                detail = response.text
            raise GitHubError(
                f"{method} {path} failed with {response.status_code}: {detail}",
                status_code=response.status_code,
            )
        return response.json()

    def create_pull_request(
        self,
        remote_branch: str,
        base_branch: str,
        title: str,
        body: str = "",
        draft: bool = False,
    ) -> PullRequestMetadata:
        """Create a pull request.

        Args:
            remote_branch: Branch with the changes.
            base_branch: Branch to merge into.
            title: Pull request title.
            body: Pull request body. A default is used when empty.
            draft: Open the pull request as a draft.

        Returns:
            PullRequestMetadata for the new pull request.

        Raises:
            GitHubError: If the API call fails.
        """
        if not body:
            logger.warning("Provided PR body is empty, setting default.")
            body = DEFAULT_PR_BODY
        logger.info("Creating PR from %s into %s: %s", remote_branch, base_branch, title)
        logger.debug("PR body: %s", body)

        data = self._request(
            "POST",
            f"/repos/{self.repo.owner}/{self.repo.name}/pulls",
            {
                "title": title,
                "head": remote_branch,
                "base": base_branch,
                "body": body,
                "maintainer_can_modify": True,
                "draft": draft,
            },
        )
        pr = PullRequestMetadata(repo=self.repo, number=data["number"], url=data.get("html_url", ""))
        logger.info("PR created: %s", pr.url)
        return pr

    def create_release(self, tag_name: str, name: str, body: str, commitish: str) -> dict:
        """Create a GitHub release for an existing or new tag.

        Args:
            tag_name: Tag to release.
            name: Release title.
            body: Release notes.
            commitish: Branch or commit the tag points at when it is created.

        Returns:
            The release as returned by the API.

        Raises:
            GitHubError: If the API call fails.
        """
        logger.info("Creating release %s", tag_name)
        return self._request(
            "POST",
            f"/repos/{self.repo.owner}/{self.repo.name}/releases",
            {
                "tag_name": tag_name,
                "name": name,
                "body": body,
                "target_commitish": commitish,
            },
        )

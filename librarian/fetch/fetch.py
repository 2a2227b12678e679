"""Source tarball download and extraction.

Contains:
- RetryPolicy: Attempt count and backoff for downloads
- Repo: A GitHub organization and repository
- repo_from_tarball_link / tarball_link: Convert between tarball URLs and repos
- latest_commit_url / latest_sha: Find the newest commit on a branch
- sha256_of_url: Checksum of remote content
- compute_sha256: Checksum of a local file
- download_tarball: Download and verify a tarball, with retries
- extract_tarball: Extract a GitHub tarball without its top-level directory
"""

import hashlib
import logging
import os
import tarfile
import tempfile
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

import httpx

from librarian.fetch.exceptions import (
    ChecksumMismatchError,
    DownloadCancelledError,
    FetchError,
)

logger = logging.getLogger(__name__)

GITHUB_DOWNLOAD = "https://github.com"
GITHUB_API = "https://api.github.com"

DEFAULT_TIMEOUT = 60.0
_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class RetryPolicy:
    """How often and how patiently to retry a download.

    Attributes:
        attempts: Total number of attempts, including the first.
        initial_backoff: Seconds to wait before the first retry.
        multiplier: Factor applied to the wait after each retry.
    """

    attempts: int = 3
    initial_backoff: float = 10.0
    multiplier: float = 2.0

    def backoffs(self) -> Iterator[float]:
        """Yield the wait before each retry."""
        delay = self.initial_backoff
        for _ in range(self.attempts - 1):
            yield delay
            delay *= self.multiplier


DEFAULT_RETRY_POLICY = RetryPolicy()


@dataclass(frozen=True)
class Repo:
    """A GitHub repository."""

    org: str
    repo: str


@contextmanager
def _http_client(client: Optional[httpx.Client]):
    """Yield the given client, or a short-lived default one."""
    if client is not None:
        yield client
        return
    with httpx.Client(timeout=DEFAULT_TIMEOUT, follow_redirects=True) as default_client:
        yield default_client


def repo_from_tarball_link(github_download: str, tarball_link: str) -> Repo:
    """Extract the organization and repository from a tarball link.

    Args:
        github_download: Download endpoint, e.g. "https://github.com".
        tarball_link: e.g. "https://github.com/googleapis/googleapis/archive/abc.tar.gz".

    Returns:
        The Repo.

    Raises:
        FetchError: If the link has fewer than two path components.
    """
    url_path = tarball_link
    if url_path.startswith(github_download):
        url_path = url_path[len(github_download):]
    components = url_path.lstrip("/").split("/")
    if len(components) < 2:
        raise FetchError("url path for tarball link is missing components")
    return Repo(org=components[0], repo=components[1])


def tarball_link(github_download: str, repo: Repo, sha: str) -> str:
    """Return the tarball download URL for a commit."""
    return f"{github_download}/{repo.org}/{repo.repo}/archive/{sha}.tar.gz"


def latest_commit_url(github_api: str, repo: Repo, branch: str) -> str:
    """Return the GitHub API URL for the newest commit on a branch."""
    return f"{github_api}/repos/{repo.org}/{repo.repo}/commits/{branch}"


def latest_sha(query: str, client: Optional[httpx.Client] = None) -> str:
    """Fetch the newest commit SHA from the GitHub API.

    Args:
        query: A commits URL, see latest_commit_url.
        client: HTTP client to use.

    Returns:
        The commit SHA.

    Raises:
        FetchError: On network or HTTP errors.
    """
    headers = {"Accept": "application/vnd.github.VERSION.sha"}
    with _http_client(client) as http:
        try:
            response = http.get(query, headers=headers)
        except httpx.HTTPError as e:
            raise FetchError(f"request to {query} failed: {e}") from e
    if response.status_code >= 300:
        raise FetchError(f"http error in download {response.status_code} {response.reason_phrase}")
    return response.text.strip()


def sha256_of_url(query: str, client: Optional[httpx.Client] = None) -> str:
    """Download content and return its SHA-256 as a hex string.

    Raises:
        FetchError: On network or HTTP errors.
    """
    hasher = hashlib.sha256()
    with _http_client(client) as http:
        try:
            with http.stream("GET", query) as response:
                if response.status_code >= 300:
                    raise FetchError(
                        f"http error in download {response.status_code} {response.reason_phrase}"
                    )
                for chunk in response.iter_bytes(_CHUNK_SIZE):
                    hasher.update(chunk)
        except httpx.HTTPError as e:
            raise FetchError(f"request to {query} failed: {e}") from e
    return hasher.hexdigest()


def compute_sha256(path: Path) -> str:
    """Return the SHA-256 of a file as a hex string."""
    hasher = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def download_tarball(
    target: Path,
    url: str,
    expected_sha256: str,
    retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    cancel: Optional[threading.Event] = None,
    client: Optional[httpx.Client] = None,
) -> None:
    """Download a tarball to target and verify its checksum.

    The content is written to a temporary file next to target and only renamed
    into place once the checksum matches. An existing target is left alone.

    Args:
        target: Destination path.
        url: Tarball URL.
        expected_sha256: Expected SHA-256 hex digest.
        retry_policy: Attempts and backoff.
        cancel: Set to abort the download during a request or a backoff wait.
        client: HTTP client to use.

    Raises:
        ChecksumMismatchError: If the download does not match expected_sha256.
        DownloadCancelledError: If cancel was set.
        FetchError: If every attempt failed.
    """
    if target.is_file():
        return

    target.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(prefix="temp-", dir=target.parent)
    temp_path = Path(temp_name)
    try:
        os.close(fd)
        _download_with_retry(temp_path, url, retry_policy, cancel, client)

        sha = compute_sha256(temp_path)
        if sha != expected_sha256:
            raise ChecksumMismatchError(expected_sha256, sha)
        temp_path.replace(target)
    finally:
        temp_path.unlink(missing_ok=True)


def _download_with_retry(
    target: Path,
    url: str,
    retry_policy: RetryPolicy,
    cancel: Optional[threading.Event],
    client: Optional[httpx.Client],
) -> None:
    backoffs = retry_policy.backoffs()
    last_error: Optional[Exception] = None
    with _http_client(client) as http:
        for attempt in range(retry_policy.attempts):
            if attempt > 0:
                delay = next(backoffs)
                logger.debug(
                    "Download of %s failed, retrying in %ss (attempt %d/%d)",
                    url,
                    delay,
                    attempt + 1,
                    retry_policy.attempts,
                )
                if cancel is not None:
                    if cancel.wait(delay):
                        raise DownloadCancelledError()
                else:
                    time.sleep(delay)

            try:
                _download_attempt(http, target, url, cancel)
                return
            except DownloadCancelledError:
                raise
            except (httpx.HTTPError, FetchError, OSError) as e:
                logger.warning("Download attempt %d of %s failed: %s", attempt + 1, url, e)
                last_error = e

    raise FetchError(
        f"download failed after {retry_policy.attempts} attempts, last error={last_error}"
    )


def _download_attempt(
    http: httpx.Client, target: Path, url: str, cancel: Optional[threading.Event]
) -> None:
    if cancel is not None and cancel.is_set():
        raise DownloadCancelledError()
    with http.stream("GET", url) as response:
        if response.status_code >= 300:
            raise FetchError(
                f"http error in download {response.status_code} {response.reason_phrase}"
            )
        with open(target, "wb") as f:
            for chunk in response.iter_bytes(_CHUNK_SIZE):
                if cancel is not None and cancel.is_set():
                    raise DownloadCancelledError()
                f.write(chunk)


def extract_tarball(tarball_path: Path, dest_dir: Path) -> None:
    """Extract a gzipped tarball, dropping the top-level directory.

    GitHub wraps every file of a repository archive in a "{repo}-{commit}/"
    directory. Entries outside such a directory are skipped, as are entries
    that are neither directories nor regular files.

    Args:
        tarball_path: Path to the .tar.gz file.
        dest_dir: Directory to extract into.

    Raises:
        FetchError: If the archive is invalid or an entry escapes dest_dir.
    """
    dest_dir = dest_dir.resolve()
    try:
        with tarfile.open(tarball_path, "r:gz") as tar:
            for member in tar:
                parts = member.name.split("/", 1)
                if len(parts) != 2 or not parts[1]:
                    continue

                target = (dest_dir / parts[1]).resolve()
                if dest_dir not in target.parents and target != dest_dir:
                    raise FetchError(f"tarball entry {member.name!r} escapes {dest_dir}")

                if member.isdir():
                    target.mkdir(parents=True, exist_ok=True)
                elif member.isfile():
                    target.parent.mkdir(parents=True, exist_ok=True)
                    source = tar.extractfile(member)
                    with source, open(target, "wb") as out:
                        for chunk in iter(lambda: source.read(_CHUNK_SIZE), b""):
                            out.write(chunk)
                    target.chmod(member.mode & 0o777)
    except tarfile.TarError as e:
        raise FetchError(f"failed to extract {tarball_path}: {e}") from e

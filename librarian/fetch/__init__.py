"""Source download and caching for librarian.

This package provides:
- fetch: RetryPolicy, download_tarball, extract_tarball, latest_sha, ...
- cache: repo_dir and the on-disk cache layout
- exceptions: FetchError, ChecksumMismatchError, DownloadCancelledError
"""

from librarian.fetch.cache import (
    ENV_LIBRARIAN_CACHE,
    cache_dir,
    extracted_dir,
    repo_dir,
    tarball_path,
)
from librarian.fetch.exceptions import (
    ChecksumMismatchError,
    DownloadCancelledError,
    FetchError,
)
from librarian.fetch.fetch import (
    DEFAULT_RETRY_POLICY,
    GITHUB_API,
    GITHUB_DOWNLOAD,
    Repo,
    RetryPolicy,
    compute_sha256,
    download_tarball,
    extract_tarball,
    latest_commit_url,
    latest_sha,
    repo_from_tarball_link,
    sha256_of_url,
    tarball_link,
)


__all__ = [
    # Cache
    "ENV_LIBRARIAN_CACHE",
    "cache_dir",
    "extracted_dir",
    "repo_dir",
    "tarball_path",
    # Exceptions
    "ChecksumMismatchError",
    "DownloadCancelledError",
    "FetchError",
    # Fetch
    "DEFAULT_RETRY_POLICY",
    "GITHUB_API",
    "GITHUB_DOWNLOAD",
    "Repo",
    "RetryPolicy",
    "compute_sha256",
    "download_tarball",
    "extract_tarball",
    "latest_commit_url",
    "latest_sha",
    "repo_from_tarball_link",
    "sha256_of_url",
    "tarball_link",
]

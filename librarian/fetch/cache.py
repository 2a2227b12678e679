"""On-disk cache of source repositories.

Contains:
- cache_dir: Root of the librarian cache
- tarball_path: Cached tarball location for a repo and commit
- extracted_dir: Extracted source location, if already populated
- repo_dir: Download, verify and extract a repository, reusing the cache

Layout, where $repo is e.g. github.com/googleapis/googleapis:

    $LIBRARIAN_CACHE/
    ├── download/
    │   └── $repo@$commit.tar.gz
    └── $repo@$commit/
        └── {files...}
"""

import logging
import os
import threading
from pathlib import Path
from typing import Optional

import httpx

from librarian.fetch.exceptions import FetchError
from librarian.fetch.fetch import (
    DEFAULT_RETRY_POLICY,
    RetryPolicy,
    compute_sha256,
    download_tarball,
    extract_tarball,
)

logger = logging.getLogger(__name__)

ENV_LIBRARIAN_CACHE = "LIBRARIAN_CACHE"


def cache_dir() -> Path:
    """Return the root cache directory.

    $LIBRARIAN_CACHE if set, else $XDG_CACHE_HOME/librarian, else
    ~/.cache/librarian.
    """
    cache = os.environ.get(ENV_LIBRARIAN_CACHE)
    if cache:
        return Path(cache)
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache) / "librarian"
    return Path.home() / ".cache" / "librarian"


def tarball_path(root: Path, repo: str, commit: str) -> Path:
    """Return $root/download/$repo@$commit.tar.gz."""
    repo_path = Path(repo)
    return root / "download" / repo_path.parent / f"{repo_path.name}@{commit}.tar.gz"


def extracted_dir(root: Path, repo: str, commit: str) -> Optional[Path]:
    """Return $root/$repo@$commit if it exists and is not empty."""
    directory = root / f"{repo}@{commit}"
    if directory.is_dir() and any(directory.iterdir()):
        return directory
    return None


def repo_dir(
    repo: str,
    commit: str,
    expected_sha256: str,
    retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    cancel: Optional[threading.Event] = None,
    client: Optional[httpx.Client] = None,
) -> Path:
    """Return a directory holding the sources of repo at commit.

    Lookup order:
    1. An extracted, non-empty directory is returned as is.
    2. A cached tarball whose checksum matches is extracted. A mismatching or
       unreadable tarball is deleted.
    3. The tarball is downloaded, verified and extracted.

    Args:
        repo: Repository path, e.g. "github.com/googleapis/googleapis".
        commit: Commit hash.
        expected_sha256: Expected SHA-256 of the tarball.
        retry_policy: Attempts and backoff for the download.
        cancel: Set to abort the download.
        client: HTTP client to use.

    Returns:
        Path to the extracted sources.

    Raises:
        FetchError: If the sources cannot be obtained.
    """
    root = cache_dir()
    tgz = tarball_path(root, repo, commit)
    out_dir = root / f"{repo}@{commit}"

    cached = extracted_dir(root, repo, commit)
    if cached is not None:
        logger.debug("Using cached sources in %s", cached)
        return cached

    if tgz.exists():
        try:
            if compute_sha256(tgz) == expected_sha256:
                out_dir.mkdir(parents=True, exist_ok=True)
                extract_tarball(tgz, out_dir)
                return out_dir
        except (FetchError, OSError) as e:
            logger.debug("Failed to reuse cached tarball %s: %s", tgz, e)
        tgz.unlink(missing_ok=True)

    url = f"https://{repo}/archive/{commit}.tar.gz"
    logger.info("Downloading %s", url)
    out_dir.mkdir(parents=True, exist_ok=True)
    download_tarball(tgz, url, expected_sha256, retry_policy, cancel, client)
    try:
        extract_tarball(tgz, out_dir)
    except OSError as e:
        raise FetchError(f"failed to extract tarball: {e}") from e
    return out_dir

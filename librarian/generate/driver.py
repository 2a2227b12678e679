"""Library generation driver.

Contains:
- GOOGLEAPIS_REPO: Cache key of the googleapis repository
- fetch_googleapis_dir: Local googleapis sources for a config
- clean_output: Delete generated files, honouring a keep list
- prepare_library: Effective library settings for generation
- generate_library: Generate one library
- generate_all: Generate every library
"""

import logging
from pathlib import Path
from typing import Optional

import httpx

from librarian.config import (
    Config,
    Library,
    Sources,
    fill_defaults,
    find_library,
    resolve_library_output,
)
from librarian.fetch import DEFAULT_RETRY_POLICY, RetryPolicy, repo_dir
from librarian.generate.docker import run_generate
from librarian.generate.exceptions import GenerateError
from librarian.generate.serviceconfig import find_service_config

logger = logging.getLogger(__name__)

GOOGLEAPIS_REPO = "github.com/googleapis/googleapis"

# Rust crates keep their hand-maintained manifest.
RUST_ALWAYS_KEEP = ["Cargo.toml"]


def fetch_googleapis_dir(
    sources: Optional[Sources],
    retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    client: Optional[httpx.Client] = None,
) -> Path:
    """Return a local directory with the googleapis sources.

    A configured dir is used as is. Otherwise the pinned commit is fetched
    through the cache.

    Raises:
        GenerateError: If no googleapis source is configured.
        FetchError: If the download fails.
    """
    if sources is None or sources.googleapis is None:
        raise GenerateError("googleapis source is required")
    if sources.googleapis.dir:
        return Path(sources.googleapis.dir)
    return repo_dir(
        GOOGLEAPIS_REPO,
        sources.googleapis.commit,
        sources.googleapis.sha256,
        retry_policy=retry_policy,
        client=client,
    )


def clean_output(directory: Path, keep: list[str]) -> None:
    """Remove every file under directory except those in keep.

    Directories are left in place.

    Args:
        directory: The output directory.
        keep: Paths relative to directory to preserve.

    Raises:
        GenerateError: If directory is missing or not a directory, or an entry
            in keep does not exist.
    """
    if not directory.exists():
        raise GenerateError(
            f"output directory {str(directory)!r} does not exist; "
            "check that the output field in librarian.yaml is correct"
        )
    if not directory.is_dir():
        raise GenerateError(f"output path {str(directory)!r} is not a directory")

    keep_set = set()
    for entry in keep:
        if not (directory / entry).exists():
            raise GenerateError(f"{directory}: file {entry!r} in keep list does not exist")
        keep_set.add(Path(entry).as_posix())

    for path in sorted(directory.rglob("*")):
        if path.is_dir():
            continue
        if path.relative_to(directory).as_posix() in keep_set:
            continue
        path.unlink()


def prepare_library(config: Config, library: Library, googleapis_dir: Path) -> Library:
    """Return a copy of library ready for generation.

    Defaults are filled in, the output directory is resolved and missing
    service configs are looked up in the googleapis sources.

    Raises:
        GenerateError: If an API directory does not exist.
    """
    output = resolve_library_output(config, library)
    prepared = fill_defaults(library.model_copy(deep=True), config.default)
    prepared.output = output
    for channel in prepared.channels:
        if not channel.service_config:
            channel.service_config = find_service_config(googleapis_dir, channel.path)
    return prepared


def generate_library(
    config: Config,
    repo_root: Path,
    library_name: str,
    image: str,
    googleapis_dir: Optional[Path] = None,
) -> bool:
    """Generate one library.

    Args:
        config: The parsed librarian.yaml.
        repo_root: The repository root.
        library_name: Library to generate.
        image: Language container image.
        googleapis_dir: Local googleapis sources. Fetched when None.

    Returns:
        False if the library has skip_generate set, True once generated.

    Raises:
        LibraryNotFoundError: If the library is not configured.
        GenerateError: If generation fails.
        FetchError: If the sources cannot be fetched.
    """
    library = find_library(config, library_name)
    if library.skip_generate:
        logger.info("Skipping %s (skip_generate is set)", library.name)
        return False

    if googleapis_dir is None:
        googleapis_dir = fetch_googleapis_dir(config.sources)

    prepared = prepare_library(config, library, googleapis_dir)
    if not prepared.output:
        raise GenerateError(f"library {library.name!r} has no output directory")

    keep = list(prepared.keep)
    if config.language == "rust":
        keep.extend(RUST_ALWAYS_KEEP)

    output = repo_root / prepared.output
    clean_output(output, keep)
    run_generate(image, repo_root, prepared, output, googleapis_dir)
    logger.info("Generated %s", library.name)
    return True


def generate_all(config: Config, repo_root: Path, image: str) -> list[str]:
    """Generate every library in order, stopping at the first failure.

    Returns:
        Names of the libraries that were generated.
    """
    googleapis_dir = fetch_googleapis_dir(config.sources)
    generated = []
    for library in config.libraries:
        if generate_library(config, repo_root, library.name, image, googleapis_dir):
            generated.append(library.name)
    return generated

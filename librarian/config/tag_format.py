"""Git tag format resolution.

Contains:
- DEFAULT_TAG_FORMAT: Format used when nothing is configured
- determine_tag_format: Resolve a library's tag format from the legacy files
- resolve_tag_format: Resolve a library's tag format for librarian.yaml
- format_tag: Expand {id} and {version} in a tag format
"""

import logging
import re
from typing import Optional

from librarian.config.legacy import LibrarianConfig, LibraryState
from librarian.config.models import Config

logger = logging.getLogger(__name__)

DEFAULT_TAG_FORMAT = "{id}-{version}"

_TAG_TOKEN_RE = re.compile(r"\{id\}|\{version\}")


def _legacy_config_tag_format(
    library_id: str, librarian_config: Optional[LibrarianConfig]
) -> str:
    """Return the tag format from .librarian/config.yaml, or "" to fall back."""
    if librarian_config is None:
        logger.warning(
            "No config.yaml, skipping per-library and top-level tag_format for %s",
            library_id,
        )
        return ""

    library_config = librarian_config.library_config_for(library_id)
    if library_config is not None and library_config.tag_format:
        return library_config.tag_format
    logger.warning(
        "Library %s has no tag_format in config.yaml, trying top-level tag_format",
        library_id,
    )
    if librarian_config.tag_format:
        return librarian_config.tag_format
    logger.warning("config.yaml has no top-level tag_format for %s", library_id)
    return ""


def _state_tag_format(library_id: str, library_state: Optional[LibraryState]) -> str:
    """Return the deprecated state.yaml tag format, or DEFAULT_TAG_FORMAT."""
    if library_state is not None and library_state.tag_format:
        return library_state.tag_format

    logger.warning(
        "Library %s did not configure tag_format, using default %s",
        library_id,
        DEFAULT_TAG_FORMAT,
    )
    return DEFAULT_TAG_FORMAT


def determine_tag_format(
    library_id: str,
    library_state: Optional[LibraryState] = None,
    librarian_config: Optional[LibrarianConfig] = None,
) -> str:
    """Find the tag format for a library.

    Order of preference:
    1. per-library entry in .librarian/config.yaml
    2. top-level tag_format in .librarian/config.yaml
    3. per-library tag_format in .librarian/state.yaml (deprecated)
    4. DEFAULT_TAG_FORMAT

    A warning is logged at each fallback.

    Args:
        library_id: The library ID.
        library_state: The library's entry in state.yaml, if any.
        librarian_config: The parsed config.yaml, if any.

    Returns:
        The tag format string.
    """
    tag_format = _legacy_config_tag_format(library_id, librarian_config)
    if tag_format:
        return tag_format
    logger.warning("Trying state.yaml tag_format for %s", library_id)
    return _state_tag_format(library_id, library_state)


def resolve_tag_format(
    config: Config,
    library_id: str,
    librarian_config: Optional[LibrarianConfig] = None,
    library_state: Optional[LibraryState] = None,
) -> str:
    """Find the tag format for a library configured in librarian.yaml.

    Same as determine_tag_format, with default.tag_format from librarian.yaml
    checked between .librarian/config.yaml and the deprecated state.yaml entry.

    Args:
        config: The parsed librarian.yaml.
        library_id: The library name.
        librarian_config: The parsed .librarian/config.yaml, if any.
        library_state: The library's entry in .librarian/state.yaml, if any.

    Returns:
        The tag format string.
    """
    tag_format = _legacy_config_tag_format(library_id, librarian_config)
    if tag_format:
        return tag_format

    if config.default is not None and config.default.tag_format:
        return config.default.tag_format
    logger.warning(
        "librarian.yaml has no default tag_format, trying state.yaml for %s", library_id
    )
    return _state_tag_format(library_id, library_state)


def format_tag(tag_format: str, library_id: str, version: str) -> str:
    """Return the git tag for a library version.

    {id} and {version} are replaced literally. No other tokens are supported
    and braces cannot be escaped.

    Args:
        tag_format: Tag template. Empty means DEFAULT_TAG_FORMAT.
        library_id: Value for {id}.
        version: Value for {version}.

    Returns:
        The tag name.
    """
    if not tag_format:
        logger.warning("No tag format specified, using default %s", DEFAULT_TAG_FORMAT)
        tag_format = DEFAULT_TAG_FORMAT

    values = {"{id}": library_id, "{version}": version}
    return _TAG_TOKEN_RE.sub(lambda m: values[m.group(0)], tag_format)

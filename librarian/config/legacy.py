"""Legacy state and config files under .librarian/.

Contains:
- API, LibraryState, LibrarianState: Models for .librarian/state.yaml
- LibraryConfig, LibrarianConfig: Models for .librarian/config.yaml
- load_librarian_state: Load state.yaml from a repository
- load_librarian_config: Load config.yaml from a repository, if present
"""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from librarian.config.exceptions import ConfigError

logger = logging.getLogger(__name__)

LIBRARIAN_DIR = ".librarian"
LIBRARIAN_STATE_FILE = "state.yaml"
LIBRARIAN_CONFIG_FILE = "config.yaml"


class API(BaseModel):
    """An API tracked by a legacy library entry."""

    path: str
    service_config: str = ""


class LibraryState(BaseModel):
    """State of one library in state.yaml.

    Attributes:
        id: Library identifier.
        version: Last released version.
        tag_format: Deprecated. Use LibrarianConfig instead.
        source_roots: Paths that belong to the library.
        release_exclude_paths: Paths ignored when looking for releasable changes.
        apis: APIs the library is generated from.
    """

    id: str
    version: str = ""
    tag_format: str = ""
    source_roots: list[str] = []
    release_exclude_paths: list[str] = []
    apis: list[API] = []

    @field_validator("source_roots", "release_exclude_paths", "apis", mode="before")
    @classmethod
    def ensure_lists(cls, v):
        """Ensure list fields are lists."""
        if v is None:
            return []
        return v


class LibrarianState(BaseModel):
    """The contents of .librarian/state.yaml."""

    image: str = ""
    libraries: list[LibraryState] = []

    @field_validator("libraries", mode="before")
    @classmethod
    def ensure_libraries_list(cls, v):
        """Ensure libraries is a list."""
        if v is None:
            return []
        return v

    def library_by_id(self, library_id: str) -> Optional[LibraryState]:
        """Return the state entry for a library, or None."""
        for library in self.libraries:
            if library.id == library_id:
                return library
        return None


class LibraryConfig(BaseModel):
    """Per-library settings in .librarian/config.yaml."""

    library_id: str
    tag_format: str = ""
    next_version: str = ""


class LibrarianConfig(BaseModel):
    """The contents of .librarian/config.yaml."""

    tag_format: str = ""
    libraries: list[LibraryConfig] = []

    @field_validator("libraries", mode="before")
    @classmethod
    def ensure_libraries_list(cls, v):
        """Ensure libraries is a list."""
        if v is None:
            return []
        return v

    def library_config_for(self, library_id: str) -> Optional[LibraryConfig]:
        """Return the settings for a library, or None if it has none."""
        for library in self.libraries:
            if library.library_id == library_id:
                return library
        return None


def _read_yaml(path: Path) -> dict:
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"expected a mapping at the top level of {path}")
    return data


def load_librarian_state(repo_root: Path) -> Optional[LibrarianState]:
    """Load .librarian/state.yaml.

    Args:
        repo_root: The root directory of the repository.

    Returns:
        The parsed state, or None if the file does not exist.

    Raises:
        ConfigError: If the file is invalid.
    """
    path = repo_root / LIBRARIAN_DIR / LIBRARIAN_STATE_FILE
    if not path.exists():
        logger.info("%s not found, skipping state loading", path)
        return None

    try:
        return LibrarianState.model_validate(_read_yaml(path))
    except ValidationError as e:
        raise ConfigError(f"validating librarian state: {e}") from e


def load_librarian_config(repo_root: Path) -> Optional[LibrarianConfig]:
    """Load .librarian/config.yaml.

    Args:
        repo_root: The root directory of the repository.

    Returns:
        The parsed config, or None if the file does not exist.

    Raises:
        ConfigError: If the file is invalid.
    """
    path = repo_root / LIBRARIAN_DIR / LIBRARIAN_CONFIG_FILE
    if not path.exists():
        logger.info("%s not found, proceeding", path)
        return None

    try:
        return LibrarianConfig.model_validate(_read_yaml(path))
    except ValidationError as e:
        raise ConfigError(f"invalid librarian config: {e}") from e

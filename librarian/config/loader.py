"""Reading and writing librarian.yaml.

Contains:
- get_config_file: Path to librarian.yaml in a repository
- config_from_yaml / config_to_yaml: Convert between YAML text and Config
- load_config / save_config: Read and write the file
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from librarian.config.exceptions import ConfigError
from librarian.config.models import Config

logger = logging.getLogger(__name__)

LIBRARIAN_CONFIG_FILE = "librarian.yaml"


def get_config_file(repo_root: Path) -> Path:
    """Return the path to librarian.yaml.

    Args:
        repo_root: The root directory of the repository.

    Returns:
        Path to <repo_root>/librarian.yaml.
    """
    return repo_root / LIBRARIAN_CONFIG_FILE


def config_from_yaml(text: str) -> Config:
    """Parse YAML text into a Config.

    Args:
        text: Contents of a librarian.yaml file.

    Returns:
        The parsed Config.

    Raises:
        ConfigError: If the text is not valid YAML or does not match the schema.
    """
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("expected a mapping at the top level of librarian.yaml")

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid librarian.yaml: {e}") from e


def config_to_yaml(config: Config) -> str:
    """Serialize a Config to YAML, omitting empty fields.

    Args:
        config: The configuration to serialize.

    Returns:
        YAML text with keys in declaration order.
    """
    return yaml.dump(
        config.model_dump(exclude_defaults=True),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


def load_config(path: Path) -> Config:
    """Load a librarian.yaml file.

    Args:
        path: Path to the file.

    Returns:
        The parsed Config.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if not path.exists():
        raise ConfigError(f"{path} not found")

    logger.debug("Loading config from %s", path)
    return config_from_yaml(path.read_text())


def save_config(path: Path, config: Config) -> None:
    """Write a Config to a librarian.yaml file.

    Args:
        path: Path to the file.
        config: The configuration to write.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(config_to_yaml(config))
    logger.debug("Wrote config to %s", path)

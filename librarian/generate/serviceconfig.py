"""Service config discovery.

Contains:
- find_service_config: Locate the google.api.Service YAML of an API
"""

import logging
from itertools import islice
from pathlib import Path

from librarian.generate.exceptions import GenerateError

logger = logging.getLogger(__name__)

SERVICE_CONFIG_MARKER = "type: google.api.Service"

# The type line sits in the file header.
_HEADER_LINES = 20


def find_service_config(googleapis_dir: Path, api_path: str) -> str:
    """Find the service config of an API.

    A service config is a *.yaml file (not *_gapic.yaml) in the API directory
    with a "type: google.api.Service" line near the top. Files are checked in
    name order.

    Args:
        googleapis_dir: Root of the googleapis sources.
        api_path: API directory relative to the root, e.g. "google/cloud/secretmanager/v1".

    Returns:
        The config path relative to the root, or "" for proto-only APIs.

    Raises:
        GenerateError: If the API directory does not exist.
    """
    api_dir = googleapis_dir / api_path
    if not api_dir.is_dir():
        raise GenerateError(f"API directory {api_dir} does not exist")

    for entry in sorted(api_dir.iterdir()):
        if not entry.is_file() or entry.suffix != ".yaml" or entry.name.endswith("_gapic.yaml"):
            continue
        with open(entry) as f:
            for line in islice(f, _HEADER_LINES):
                if line.strip() == SERVICE_CONFIG_MARKER:
                    return f"{api_path}/{entry.name}"

    logger.info("No service config found in %s, assuming proto-only package", api_dir)
    return ""

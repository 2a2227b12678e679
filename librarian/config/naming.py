"""Library name and path derivation.

Contains:
- derive_library_name: Library name for an API path
- derive_default_rust_output: Default Rust output directory for a channel
- resolve_library_output: Effective output directory of a library
"""

import posixpath

from librarian.config.models import Config, Library

# Only api/apikeys/ loses its api/ segment. Other api/* paths keep it.
_API_PREFIX_EXCEPTIONS = ("api/apikeys/",)


def _strip_prefix(value: str, prefix: str) -> str:
    if value.startswith(prefix):
        return value[len(prefix):]
    return value


def derive_library_name(api_path: str) -> str:
    """Derive the conventional library name for an API path.

    Examples:
        google/cloud/secretmanager/v1 -> google-cloud-secretmanager-v1
        google/api/apikeys/v1         -> google-cloud-apikeys-v1
        google/api/servicecontrol/v1  -> google-cloud-api-servicecontrol-v1

    Args:
        api_path: API path relative to the googleapis root.

    Returns:
        The library name.
    """
    trimmed = _strip_prefix(api_path, "google/")
    trimmed = _strip_prefix(trimmed, "cloud/")
    trimmed = _strip_prefix(trimmed, "devtools/")
    if trimmed.startswith(_API_PREFIX_EXCEPTIONS):
        trimmed = _strip_prefix(trimmed, "api/")

    return "google-cloud-" + trimmed.replace("/", "-")


def derive_default_rust_output(channel_path: str, default_output: str) -> str:
    """Return the default output directory of a Rust library.

    The "google/" prefix is stripped from the first channel path and the rest is
    joined to the default output, so google/cloud/secretmanager/v1 maps to
    src/generated/cloud/secretmanager/v1.

    Args:
        channel_path: Path of the library's first channel.
        default_output: Default.output from librarian.yaml.

    Returns:
        The output directory.
    """
    return posixpath.join(default_output, _strip_prefix(channel_path, "google/"))


def resolve_library_output(config: Config, library: Library) -> str:
    """Return the effective output directory of a library.

    An explicit library output wins. Rust libraries without one derive it from
    their first channel. Other libraries use the default output.

    Args:
        config: The parsed librarian.yaml.
        library: The library.

    Returns:
        The output directory, or "" if none is configured.
    """
    if library.output:
        return library.output
    default_output = config.default.output if config.default is not None else ""
    if config.language == "rust" and library.channels:
        return derive_default_rust_output(library.channels[0].path, default_output)
    return default_output

"""Configuration model and merge engine for librarian.

This package provides:
- models: Pydantic models for librarian.yaml
- loader: YAML load/save
- merge: Default-filling of library settings
- tag_format: Tag format resolution and expansion
- naming: Library name and output path derivation
- validation: Uniqueness checks and canonical ordering
- legacy: .librarian/state.yaml and .librarian/config.yaml
- exceptions: Configuration errors
"""

from librarian.config.exceptions import (
    ConfigError,
    DuplicateChannelPathError,
    DuplicateLibraryNameError,
    LibraryNotFoundError,
    LibraryValidationError,
)
from librarian.config.legacy import (
    API,
    LibrarianConfig,
    LibrarianState,
    LibraryConfig,
    LibraryState,
    load_librarian_config,
    load_librarian_state,
)
from librarian.config.loader import (
    LIBRARIAN_CONFIG_FILE,
    config_from_yaml,
    config_to_yaml,
    get_config_file,
    load_config,
    save_config,
)
from librarian.config.merge import fill_defaults, fill_rust, merge_package_dependencies
from librarian.config.models import (
    Channel,
    Config,
    Default,
    Library,
    RustCrate,
    RustDefault,
    RustDiscovery,
    RustDocumentationOverride,
    RustPackageDependency,
    RustPaginationOverride,
    RustPoller,
    Source,
    Sources,
)
from librarian.config.naming import (
    derive_default_rust_output,
    derive_library_name,
    resolve_library_output,
)
from librarian.config.tag_format import (
    DEFAULT_TAG_FORMAT,
    determine_tag_format,
    format_tag,
    resolve_tag_format,
)
from librarian.config.validation import find_library, format_config, validate_libraries


__all__ = [
    # Exceptions
    "ConfigError",
    "DuplicateChannelPathError",
    "DuplicateLibraryNameError",
    "LibraryNotFoundError",
    "LibraryValidationError",
    # Legacy files
    "API",
    "LibrarianConfig",
    "LibrarianState",
    "LibraryConfig",
    "LibraryState",
    "load_librarian_config",
    "load_librarian_state",
    # Loader
    "LIBRARIAN_CONFIG_FILE",
    "config_from_yaml",
    "config_to_yaml",
    "get_config_file",
    "load_config",
    "save_config",
    # Merge
    "fill_defaults",
    "fill_rust",
    "merge_package_dependencies",
    # Models
    "Channel",
    "Config",
    "Default",
    "Library",
    "RustCrate",
    "RustDefault",
    "RustDiscovery",
    "RustDocumentationOverride",
    "RustPackageDependency",
    "RustPaginationOverride",
    "RustPoller",
    "Source",
    "Sources",
    # Naming
    "derive_default_rust_output",
    "derive_library_name",
    "resolve_library_output",
    # Tag format
    "DEFAULT_TAG_FORMAT",
    "determine_tag_format",
    "format_tag",
    "resolve_tag_format",
    # Validation
    "find_library",
    "format_config",
    "validate_libraries",
]

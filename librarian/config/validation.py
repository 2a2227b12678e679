"""Validation and canonical formatting of librarian.yaml.

Contains:
- validate_libraries: Check name and channel path uniqueness
- format_config: Sort a config into canonical order
- find_library: Look up a library by name
"""

from collections import Counter

from librarian.config.exceptions import (
    ConfigError,
    DuplicateChannelPathError,
    DuplicateLibraryNameError,
    LibraryNotFoundError,
    LibraryValidationError,
)
from librarian.config.models import Config, Library


def validate_libraries(config: Config) -> None:
    """Check that library names and channel paths are unique.

    Every violation is collected before raising, so one pass reports
    everything that is wrong. Empty names and paths are not counted.

    Args:
        config: The configuration to check.

    Raises:
        LibraryValidationError: If any name or channel path is duplicated.
    """
    name_count: Counter[str] = Counter()
    path_count: Counter[str] = Counter()
    for library in config.libraries:
        if library.name:
            name_count[library.name] += 1
        for channel in library.channels:
            if channel.path:
                path_count[channel.path] += 1

    errors: list[ConfigError] = []
    for name, count in name_count.items():
        if count > 1:
            errors.append(DuplicateLibraryNameError(name, count))
    for path, count in path_count.items():
        if count > 1:
            errors.append(DuplicateChannelPathError(path, count))

    if errors:
        raise LibraryValidationError(errors)


def format_config(config: Config) -> Config:
    """Sort a config into canonical order.

    Libraries are sorted by name, channels by path, and Rust package
    dependencies (default and per-library) by name.

    Args:
        config: The configuration to format. Modified in place.

    Returns:
        The same config, for chaining.
    """
    if config.default is not None and config.default.rust is not None:
        config.default.rust.package_dependencies.sort(key=lambda d: d.name)

    config.libraries.sort(key=lambda lib: lib.name)
    for library in config.libraries:
        library.channels.sort(key=lambda c: c.path)
        if library.rust is not None:
            library.rust.package_dependencies.sort(key=lambda d: d.name)
    return config


def find_library(config: Config, name: str) -> Library:
    """Return the library with the given name.

    Args:
        config: The configuration to search.
        name: Library name.

    Returns:
        The matching Library.

    Raises:
        LibraryNotFoundError: If no library has that name.
    """
    for library in config.libraries:
        if library.name == name:
            return library
    raise LibraryNotFoundError(name)

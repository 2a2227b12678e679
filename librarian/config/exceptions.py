"""Configuration exception classes.

Contains:
- ConfigError: Base exception for librarian.yaml errors
- LibraryNotFoundError: Raised when a named library is not configured
- DuplicateLibraryNameError: One duplicated library name
- DuplicateChannelPathError: One duplicated channel path
- LibraryValidationError: Every violation found by a validation pass
"""


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class LibraryNotFoundError(ConfigError):
    """Raised when a library is not present in librarian.yaml."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"library {name!r} not found")


class DuplicateLibraryNameError(ConfigError):
    """A library name that appears more than once."""

    def __init__(self, name: str, count: int):
        self.name = name
        self.count = count
        super().__init__(f"duplicate library name: {name} (appears {count} times)")


class DuplicateChannelPathError(ConfigError):
    """A channel path that appears more than once, possibly across libraries."""

    def __init__(self, path: str, count: int):
        self.path = path
        self.count = count
        super().__init__(f"duplicate channel path: {path} (appears {count} times)")


class LibraryValidationError(ConfigError):
    """Raised when validation finds one or more violations.

    Attributes:
        errors: Every violation found, in the order they were detected.
    """

    def __init__(self, errors: list[ConfigError]):
        self.errors = errors
        super().__init__("\n".join(str(e) for e in errors))

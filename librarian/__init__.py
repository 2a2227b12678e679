"""Librarian: generate, configure and release Google API client libraries."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("librarian")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"

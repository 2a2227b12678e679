"""Fetch exception classes.

Contains:
- FetchError: Base exception for download errors
- ChecksumMismatchError: Raised when a download does not match its checksum
- DownloadCancelledError: Raised when a download is cancelled
"""


class FetchError(Exception):
    """Base exception for fetch errors."""

    pass


class ChecksumMismatchError(FetchError):
    """Raised when the SHA-256 of a download differs from the expected value."""

    def __init__(self, expected: str, got: str):
        self.expected = expected
        self.got = got
        super().__init__(f"checksum mismatch: expected={expected}, got={got}")


class DownloadCancelledError(FetchError):
    """Raised when a download is cancelled before it completes."""

    def __init__(self, message: str = "download cancelled"):
        super().__init__(message)

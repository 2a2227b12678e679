"""Generation exception classes.

Contains:
- GenerateError: Raised when a library cannot be generated
"""


class GenerateError(Exception):
    """Raised when code generation fails."""

    pass

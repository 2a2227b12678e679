"""Markers and grammar for conventional commit parsing.

Contains:
- Block markers (BEGIN_COMMIT, BEGIN_NESTED_COMMIT, ...)
- COMMIT_BLOCK_MARKERS: Ordered (begin, end) pairs for whole-message override blocks
- Footer keys with special handling (BREAKING CHANGE, Source-Link, ...)
- Compiled regexes for headers, footers, source links and library IDs
"""

import re

BEGIN_COMMIT = "BEGIN_COMMIT"
END_COMMIT = "END_COMMIT"
# Deprecated: use BEGIN_COMMIT / END_COMMIT instead.
BEGIN_COMMIT_OVERRIDE = "BEGIN_COMMIT_OVERRIDE"
END_COMMIT_OVERRIDE = "END_COMMIT_OVERRIDE"

BEGIN_NESTED_COMMIT = "BEGIN_NESTED_COMMIT"
END_NESTED_COMMIT = "END_NESTED_COMMIT"

# Tried in order. BEGIN_COMMIT is a prefix of BEGIN_COMMIT_OVERRIDE, so the
# deprecated pair must come first.
COMMIT_BLOCK_MARKERS = [
    (BEGIN_COMMIT_OVERRIDE, END_COMMIT_OVERRIDE),
    (BEGIN_COMMIT, END_COMMIT),
]

BREAKING_CHANGE_KEY = "BREAKING CHANGE"
SOURCE_LINK_KEY = "Source-Link"
LIBRARY_IDS_KEY = "Library-IDs"
PIPER_REV_ID_KEY = "PiperOrigin-RevId"

# type(scope)!: description, with ASCII-only word characters
COMMIT_HEADER_RE = re.compile(
    r"^(?P<type>\w+)"                 # type (e.g., feat, fix, chore)
    r"(?:\((?P<scope>.*)\))?"         # optional (scope)
    r"(?P<breaking>!)?"               # optional breaking marker
    r":\s(?P<description>.*)",        # colon, whitespace, description
    re.ASCII,
)

# "Reviewed-by: G. Gemini" or "BREAKING CHANGE: an API was changed"
FOOTER_RE = re.compile(r"^([A-Za-z-]+|" + BREAKING_CHANGE_KEY + r"):(.*)")

# [org/repo@shortsha](https://github.com/org/repo/commit/fullsha)
SOURCE_LINK_RE = re.compile(
    r"^\[(?P<repo>[^/\]]+/[^@\]]+)@(?P<short_sha>[^\]]*)\]"
    r"\(https://github\.com/[^/)]+/[^/)]+/commit/(?P<sha>[^)]+)\)$"
)

# The library ID of a generated change is written in brackets, e.g. "[secretmanager]".
LIBRARY_ID_RE = re.compile(r"\[([^\]]+)\]")

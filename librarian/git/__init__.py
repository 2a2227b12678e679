"""Git operations for librarian.

This package provides:
- exceptions: GitError, TagNotFoundError
- runner: _run_git_command, get_repo_root
- history: get_commits_for_paths_since_tag, get_commits_for_paths_since_commit,
           head_hash
- branch: get_branch, get_remote_url, create_branch, add_all, commit,
          tag_exists, create_tag, push
"""

# Exceptions
from librarian.git.exceptions import (
    GitError,
    TagNotFoundError,
)

# Runner utilities
from librarian.git.runner import (
    _run_git_command,
    get_repo_root,
)

# Branch, commit and tag operations
from librarian.git.branch import (
    add_all,
    commit,
    create_branch,
    create_tag,
    get_branch,
    get_remote_url,
    push,
    tag_exists,
)

# History traversal
from librarian.git.history import (
    get_commits_for_paths_since_commit,
    get_commits_for_paths_since_tag,
    head_hash,
)


__all__ = [
    # Exceptions
    "GitError",
    "TagNotFoundError",
    # Runner
    "_run_git_command",
    "get_repo_root",
    # Branch
    "add_all",
    "commit",
    "create_branch",
    "create_tag",
    "get_branch",
    "get_remote_url",
    "push",
    "tag_exists",
    # History
    "get_commits_for_paths_since_commit",
    "get_commits_for_paths_since_tag",
    "head_hash",
]

"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Base exception for git-related errors
- NotARepositoryError: Raised when not inside a git work tree
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class NotARepositoryError(GitError):
    """Raised when the current directory is not inside a git repository."""

    pass

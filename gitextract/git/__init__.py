"""Git adapter module for git-extract.

This package provides thin wrappers around the git binary:
- exceptions: GitError, NotARepositoryError
- runner: _run_git_command, _run_git_command_bytes, _git_succeeds, get_repo_root, get_git_dir
- branch: get_branch, get_head_sha, branch_exists, create_branch, checkout,
          delete_branch, commit, reset_hard
- status: has_unstaged_changes, has_staged_changes, is_working_tree_clean,
          get_staged_files
- diff: get_paths_diff, apply_patch_to_index
- rebase: is_rebase_in_progress, rebase_with_strategy,
          get_conflicted_files
"""

# Exceptions
from gitextract.git.exceptions import (
    GitError,
    NotARepositoryError,
)

# Runner utilities
from gitextract.git.runner import (
    _run_git_command,
    _run_git_command_bytes,
    _git_succeeds,
    get_repo_root,
    get_git_dir,
)

# Branch utilities
from gitextract.git.branch import (
    get_branch,
    get_head_sha,
    branch_exists,
    create_branch,
    checkout,
    delete_branch,
    commit,
    reset_hard,
)

# Status utilities
from gitextract.git.status import (
    has_unstaged_changes,
    has_staged_changes,
    is_working_tree_clean,
    get_staged_files,
)

# Diff utilities
from gitextract.git.diff import (
    get_paths_diff,
    apply_patch_to_index,
)

# Rebase utilities
from gitextract.git.rebase import (
    is_rebase_in_progress,
    rebase_with_strategy,
    get_conflicted_files,
)


__all__ = [
    # Exceptions
    "GitError",
    "NotARepositoryError",
    # Runner
    "_run_git_command",
    "_run_git_command_bytes",
    "_git_succeeds",
    "get_repo_root",
    "get_git_dir",
    # Branch
    "get_branch",
    "get_head_sha",
    "branch_exists",
    "create_branch",
    "checkout",
    "delete_branch",
    "commit",
    "reset_hard",
    # Status
    "has_unstaged_changes",
    "has_staged_changes",
    "is_working_tree_clean",
    "get_staged_files",
    # Diff
    "get_paths_diff",
    "apply_patch_to_index",
    # Rebase
    "is_rebase_in_progress",
    "rebase_with_strategy",
    "get_conflicted_files",
]

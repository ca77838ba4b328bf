"""Git status utilities.

Contains:
- has_unstaged_changes: Check for modifications not yet staged
- has_staged_changes: Check for changes staged in the index
- is_working_tree_clean: Check that nothing is staged or modified
- get_staged_files: Get list of staged file paths
"""

from pathlib import Path

from gitextract.git.runner import _run_git_command, _git_succeeds


def has_unstaged_changes(cwd: Path = None) -> bool:
    """Return True if tracked files differ from the index."""
    return not _git_succeeds(["diff", "--quiet"], cwd=cwd)


def has_staged_changes(cwd: Path = None) -> bool:
    """Return True if the index differs from HEAD."""
    return not _git_succeeds(["diff", "--cached", "--quiet"], cwd=cwd)


def is_working_tree_clean(cwd: Path = None) -> bool:
    """Return True if there are no staged or unstaged changes.

    Untracked files are ignored, matching ``git diff --quiet``.
    """
    return not has_unstaged_changes(cwd) and not has_staged_changes(cwd)


def get_staged_files(cwd: Path = None) -> list[str]:
    """Get list of staged file paths.

    Returns:
        List of staged file paths.
    """
    output = _run_git_command(["diff", "--cached", "--name-only"], cwd=cwd)
    if not output:
        return []
    return output.split("\n")

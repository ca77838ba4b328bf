"""Git rebase utilities.

Contains functions for running and detecting rebases:
- is_rebase_in_progress: Check if a rebase is currently in progress
- rebase_with_strategy: Rebase the current branch with a strategy option
- get_conflicted_files: Get list of files with unresolved conflicts
"""

import subprocess
from pathlib import Path

from gitextract.git.runner import _run_git_command, get_git_dir
from gitextract.git.exceptions import GitError


def is_rebase_in_progress(cwd: Path = None) -> bool:
    """Check if a rebase is currently in progress.

    A rebase is in progress when rebase-merge/ or rebase-apply/ exists
    in the git directory.

    Args:
        cwd: Directory inside the repository (optional).

    Returns:
        True if a rebase is in progress, False otherwise.
    """
    try:
        git_dir = get_git_dir(cwd)
    except GitError:
        return False

    return (git_dir / "rebase-merge").exists() or (git_dir / "rebase-apply").exists()


def rebase_with_strategy(upstream: str, strategy_option: str = "ours", cwd: Path = None) -> bool:
    """Rebase the current branch onto upstream using ``-X <strategy_option>``.

    During a rebase "ours" is the upstream being rebased onto, so the
    default resolves conflicting hunks in favor of upstream's content.

    Args:
        upstream: Branch or commit to rebase onto.
        strategy_option: Merge strategy option passed through ``-X``.
        cwd: Directory to run git in.

    Returns:
        True if the rebase completed, False if it stopped (conflicts).
        A stopped rebase is left in place for the user to continue or abort.

    Raises:
        GitError: If git is not installed.
    """
    try:
        result = subprocess.run(
            ["git", "rebase", "-X", strategy_option, upstream],
            capture_output=True,
            text=True,
            cwd=cwd,
        )
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")
    return result.returncode == 0


def get_conflicted_files(cwd: Path = None) -> list[str]:
    """Get list of files with unresolved conflicts.

    Returns:
        List of file paths with conflicts.
    """
    conflicted = []
    try:
        status = _run_git_command(["status", "--porcelain=v1"], cwd=cwd)
    except GitError:
        return conflicted
    for line in status.split("\n"):
        if len(line) >= 3:
            xy = line[:2]
            # Unmerged states: UU, AA, DD, AU, UA, DU, UD
            if "U" in xy or xy in ("AA", "DD"):
                conflicted.append(line[3:])
    return conflicted

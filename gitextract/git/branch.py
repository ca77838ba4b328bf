"""Git branch and commit utilities.

Contains:
- get_branch: Get the current branch name
- get_head_sha: Get the commit SHA of HEAD
- branch_exists: Check whether a local branch exists
- create_branch: Create a branch from a start point and switch to it
- checkout: Switch to an existing branch
- delete_branch: Force-delete a local branch
- commit: Commit the staged changes
- reset_hard: Discard index and work tree changes
"""

from pathlib import Path

from gitextract.git.runner import _run_git_command, _git_succeeds


def get_branch(cwd: Path = None) -> str:
    """Get the current branch name.

    Returns:
        The current branch name, or an empty string if HEAD is detached.
    """
    return _run_git_command(["branch", "--show-current"], cwd=cwd)


def get_head_sha(cwd: Path = None) -> str:
    """Get the full commit SHA that HEAD points to."""
    return _run_git_command(["rev-parse", "HEAD"], cwd=cwd)


def branch_exists(name: str, cwd: Path = None) -> bool:
    """Check whether a local branch with the given name exists."""
    return _git_succeeds(
        ["show-ref", "--verify", "--quiet", f"refs/heads/{name}"], cwd=cwd
    )


def create_branch(name: str, start_point: str, cwd: Path = None) -> None:
    """Create a new branch at start_point and check it out.

    Raises:
        GitError: If the branch cannot be created.
    """
    _run_git_command(["checkout", "-b", name, start_point], cwd=cwd)


def checkout(name: str, cwd: Path = None) -> None:
    """Switch to an existing branch.

    Raises:
        GitError: If the checkout fails.
    """
    _run_git_command(["checkout", name], cwd=cwd)


def delete_branch(name: str, cwd: Path = None) -> None:
    """Force-delete a local branch.

    Raises:
        GitError: If the branch cannot be deleted.
    """
    _run_git_command(["branch", "-D", name], cwd=cwd)


def commit(message: str, no_verify: bool = True, cwd: Path = None) -> None:
    """Commit the staged changes with the given message.

    Args:
        message: The commit message.
        no_verify: Skip pre-commit and commit-msg hooks.
        cwd: Directory to run git in.

    Raises:
        GitError: If the commit fails.
    """
    args = ["commit", "-m", message]
    if no_verify:
        args.insert(1, "--no-verify")
    _run_git_command(args, cwd=cwd)


def reset_hard(ref: str = "HEAD", cwd: Path = None) -> None:
    """Reset the index and work tree to ref, discarding local changes.

    Raises:
        GitError: If the reset fails.
    """
    _run_git_command(["reset", "--hard", ref], cwd=cwd)

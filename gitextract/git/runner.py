"""Git command runner and repository utilities.

Contains:
- _run_git_command: Run a git command and return its output
- _run_git_command_bytes: Run a git command and return its raw stdout
- _git_succeeds: Run a git command and report whether it exited cleanly
- get_repo_root: Get the root directory of the current git repository
- get_git_dir: Get the .git directory of the current repository
"""

import subprocess
from pathlib import Path

from gitextract.git.exceptions import GitError, NotARepositoryError


def _run_git_command(args: list[str], cwd: Path = None) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run git in (defaults to the process cwd).

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails.
    """
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            check=True,
            cwd=cwd,
        )
        return result.stdout.strip()
    except subprocess.CalledProcessError as e:
        raise GitError(f"Git command failed: git {' '.join(args)}\n{(e.stderr or '').strip()}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")


def _run_git_command_bytes(args: list[str], cwd: Path = None) -> bytes:
    """Run a git command and return its stdout as raw bytes.

    Used for patch output, which must reach git apply byte for byte
    (any encoding, CRLF line endings included).

    Raises:
        GitError: If the command fails.
    """
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            check=True,
            cwd=cwd,
        )
        return result.stdout
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or b"").decode("utf-8", errors="replace").strip()
        raise GitError(f"Git command failed: git {' '.join(args)}\n{stderr}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")


def _git_succeeds(args: list[str], cwd: Path = None) -> bool:
    """Run a git command and return True if it exited with status 0.

    Used for commands that signal their answer through the exit code,
    such as ``git diff --quiet``.

    Raises:
        GitError: If git is not installed.
    """
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            cwd=cwd,
        )
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")
    return result.returncode == 0


def get_repo_root(cwd: Path = None) -> Path:
    """Get the root directory of the current git repository.

    Returns:
        Path to the repository root.

    Raises:
        NotARepositoryError: If not in a git repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"], cwd=cwd)
        return Path(root)
    except GitError:
        raise NotARepositoryError(
            "Not in a git repository. Please run this command from within a git repo."
        )


def get_git_dir(cwd: Path = None) -> Path:
    """Get the absolute path of the repository's git directory.

    Works for linked worktrees, where .git is a file rather than a directory.
    """
    git_dir = Path(_run_git_command(["rev-parse", "--git-dir"], cwd=cwd))
    if not git_dir.is_absolute():
        git_dir = (cwd or Path.cwd()) / git_dir
    return git_dir

"""Git diff and patch utilities.

Contains:
- get_paths_diff: Get the diff between two revisions restricted to paths
- apply_patch_to_index: Apply a patch file to the index and work tree
"""

from pathlib import Path

from gitextract.git.runner import _run_git_command, _run_git_command_bytes


def get_paths_diff(base: str, paths: list[str], head: str = "HEAD", cwd: Path = None) -> bytes:
    """Get the unified diff of ``base..head`` restricted to the given paths.

    Args:
        base: Revision to diff against.
        paths: Files or directories to restrict the diff to.
        head: Revision holding the changes.
        cwd: Directory to run git in.

    Returns:
        The diff exactly as git produced it, undecoded so that file
        encodings and CRLF line endings survive. Empty if the paths
        have no changes.

    Raises:
        GitError: If a revision cannot be resolved.
    """
    return _run_git_command_bytes(
        ["diff", f"{base}..{head}", "--"] + list(paths),
        cwd=cwd,
    )


def apply_patch_to_index(patch_file: Path, cwd: Path = None) -> None:
    """Apply a patch to both the index and the working tree.

    Raises:
        GitError: If the patch does not apply cleanly.
    """
    _run_git_command(["apply", "--index", str(patch_file)], cwd=cwd)

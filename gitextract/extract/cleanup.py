"""Cleanup utilities for the extract pipeline.

Contains:
- get_tmp_dir: Directory holding transient patch files
- remove_patch_file: Delete the patch artifact
- remove_temp_branch: Delete the temporary branch
"""

from pathlib import Path
from typing import Optional

from gitextract.git import GitError
from gitextract.extract.repository import Repository


def get_tmp_dir(repo_root: Path) -> tuple[Path, bool]:
    """Return the directory for transient files, creating it if needed.

    Returns:
        Tuple of (directory, created), where created is True only if this
        call made the directory.
    """
    tmp_dir = repo_root / ".tmp"
    try:
        tmp_dir.mkdir()
    except FileExistsError:
        return tmp_dir, False
    return tmp_dir, True


def remove_patch_file(patch_file: Path, remove_dir: bool = False) -> Optional[str]:
    """Delete the patch artifact if it exists.

    Args:
        patch_file: Path of the patch artifact.
        remove_dir: Also remove the parent directory once it is empty.
            Only set this when the run created the directory itself.

    Returns:
        None on success, otherwise a warning with a manual recovery hint.
    """
    try:
        patch_file.unlink(missing_ok=True)
    except OSError as e:
        return f"Could not delete patch file {patch_file}: {e}\n  Remove it manually: rm {patch_file}"

    if remove_dir:
        try:
            patch_file.parent.rmdir()
        except OSError:
            # Still holds other files
            pass
    return None


def remove_temp_branch(repo: Repository, branch: str) -> Optional[str]:
    """Delete the temporary branch if it exists.

    Returns:
        None on success, otherwise a warning with a manual recovery hint.
    """
    try:
        if repo.branch_exists(branch):
            repo.delete_branch(branch)
    except GitError as e:
        return f"Could not delete temporary branch {branch}: {e}\n  Remove it manually: git branch -D {branch}"
    return None

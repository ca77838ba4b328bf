"""Repository capabilities used by the extract pipeline.

The pipeline only talks to a Repository, so it can be driven by the real
git binary (GitRepository) or by an in-memory fake in tests.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from gitextract import git


class Repository(ABC):
    """Abstract set of repository operations the pipeline needs."""

    @property
    @abstractmethod
    def root(self) -> Path:
        """Root directory of the work tree."""
        pass

    @abstractmethod
    def is_clean(self) -> bool:
        """Return True if nothing is staged or modified."""
        pass

    @abstractmethod
    def current_branch(self) -> str:
        """Return the checked-out branch name, or "" when HEAD is detached."""
        pass

    @abstractmethod
    def head_sha(self) -> str:
        pass

    @abstractmethod
    def is_rebase_in_progress(self) -> bool:
        pass

    @abstractmethod
    def diff_paths(self, base: str, paths: list[str]) -> bytes:
        """Return the raw diff of ``base..HEAD`` restricted to paths.

        Raises:
            GitError: If the diff cannot be computed.
        """
        pass

    @abstractmethod
    def create_branch(self, name: str, start_point: str) -> None:
        """Create a branch at start_point and switch to it.

        Raises:
            GitError: If the branch cannot be created.
        """
        pass

    @abstractmethod
    def checkout(self, name: str) -> None:
        pass

    @abstractmethod
    def apply_patch(self, patch_file: Path) -> None:
        """Apply a patch to the index and work tree.

        Raises:
            GitError: If the patch does not apply.
        """
        pass

    @abstractmethod
    def discard_changes(self) -> None:
        """Reset the index and work tree of the current branch to its HEAD."""
        pass

    @abstractmethod
    def has_staged_changes(self) -> bool:
        pass

    @abstractmethod
    def staged_files(self) -> list[str]:
        pass

    @abstractmethod
    def commit(self, message: str, no_verify: bool = True) -> None:
        pass

    @abstractmethod
    def rebase_with_strategy(self, upstream: str, strategy_option: str) -> bool:
        """Rebase the current branch onto upstream.

        Returns:
            True if the rebase completed, False if it stopped on conflicts.
        """
        pass

    @abstractmethod
    def branch_exists(self, name: str) -> bool:
        pass

    @abstractmethod
    def delete_branch(self, name: str) -> None:
        pass

    def conflicted_files(self) -> list[str]:
        """Files left unmerged by a stopped rebase."""
        return []


class GitRepository(Repository):
    """Repository backed by the git binary.

    Args:
        repo_root: Root of the work tree. All mutating commands run here.
        workdir: Directory the user invoked the tool from. Path filters are
            interpreted relative to it, the same way git itself does.
    """

    def __init__(self, repo_root: Path, workdir: Path = None):
        self._root = repo_root
        self._workdir = workdir or repo_root

    @classmethod
    def discover(cls, workdir: Path = None) -> "GitRepository":
        """Open the repository containing workdir (defaults to cwd).

        Raises:
            NotARepositoryError: If workdir is not inside a git repository.
        """
        workdir = workdir or Path.cwd()
        return cls(git.get_repo_root(cwd=workdir), workdir)

    @property
    def root(self) -> Path:
        return self._root

    def is_clean(self) -> bool:
        return git.is_working_tree_clean(cwd=self._root)

    def current_branch(self) -> str:
        return git.get_branch(cwd=self._root)

    def head_sha(self) -> str:
        return git.get_head_sha(cwd=self._root)

    def is_rebase_in_progress(self) -> bool:
        return git.is_rebase_in_progress(cwd=self._root)

    def diff_paths(self, base: str, paths: list[str]) -> bytes:
        return git.get_paths_diff(base, paths, cwd=self._workdir)

    def create_branch(self, name: str, start_point: str) -> None:
        git.create_branch(name, start_point, cwd=self._root)

    def checkout(self, name: str) -> None:
        git.checkout(name, cwd=self._root)

    def apply_patch(self, patch_file: Path) -> None:
        git.apply_patch_to_index(patch_file, cwd=self._root)

    def discard_changes(self) -> None:
        git.reset_hard("HEAD", cwd=self._root)

    def has_staged_changes(self) -> bool:
        return git.has_staged_changes(cwd=self._root)

    def staged_files(self) -> list[str]:
        return git.get_staged_files(cwd=self._root)

    def commit(self, message: str, no_verify: bool = True) -> None:
        git.commit(message, no_verify=no_verify, cwd=self._root)

    def rebase_with_strategy(self, upstream: str, strategy_option: str) -> bool:
        return git.rebase_with_strategy(upstream, strategy_option, cwd=self._root)

    def branch_exists(self, name: str) -> bool:
        return git.branch_exists(name, cwd=self._root)

    def delete_branch(self, name: str) -> None:
        git.delete_branch(name, cwd=self._root)

    def conflicted_files(self) -> list[str]:
        return git.get_conflicted_files(cwd=self._root)

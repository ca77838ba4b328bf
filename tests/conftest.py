"""Shared test fixtures and configuration."""

import subprocess
import tempfile
from pathlib import Path

import pytest

from gitextract.git import GitError
from gitextract.extract import Repository


SAMPLE_DIFF = """diff --git a/src/a.txt b/src/a.txt
index 1234567..abcdefg 100644
--- a/src/a.txt
+++ b/src/a.txt
@@ -1 +1 @@
-alpha
+alpha changed
"""


def _run_git(repo: Path, *args: str) -> str:
    """Run git in repo and return stripped stdout; fail the test on error."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, f"git {' '.join(args)} failed: {result.stderr}"
    return result.stdout.strip()


def _commit_files(repo: Path, files: dict, message: str) -> None:
    """Write files (str or bytes content, None to delete) and commit them."""
    for name, content in files.items():
        path = repo / name
        if content is None:
            _run_git(repo, "rm", "-q", name)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)
        _run_git(repo, "add", name)
    _run_git(repo, "commit", "-q", "-m", message)


@pytest.fixture
def run_git():
    """Run git in a repository and return its stdout."""
    return _run_git


@pytest.fixture
def commit_files():
    """Write files into a repository and commit them."""
    return _commit_files


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_repo(tmp_path, monkeypatch):
    """Create a temporary git repository on branch main with one commit."""
    # Keep git from discovering an enclosing repository
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))

    repo_dir = tmp_path / "test_repo"
    repo_dir.mkdir()

    _run_git(repo_dir, "init", "-q")
    _run_git(repo_dir, "symbolic-ref", "HEAD", "refs/heads/main")
    _run_git(repo_dir, "config", "user.email", "test@example.com")
    _run_git(repo_dir, "config", "user.name", "Test User")
    _run_git(repo_dir, "config", "commit.gpgsign", "false")

    _commit_files(repo_dir, {"README.md": "# Test Repo\n"}, "Initial commit")
    return repo_dir


@pytest.fixture
def feature_repo(temp_repo):
    """Repository with src/a.txt and src/b.txt changed on branch feature."""
    _commit_files(
        temp_repo,
        {"src/a.txt": "alpha\n", "src/b.txt": "beta\n"},
        "Add sources",
    )
    _run_git(temp_repo, "checkout", "-q", "-b", "feature")
    _commit_files(
        temp_repo,
        {"src/a.txt": "alpha changed\n", "src/b.txt": "beta changed\n"},
        "Change sources",
    )
    return temp_repo


class FakeRepository(Repository):
    """In-memory repository recording every operation the pipeline performs."""

    def __init__(
        self,
        root: Path,
        branch: str = "feature",
        diff: str = SAMPLE_DIFF,
        clean: bool = True,
        rebase_in_progress: bool = False,
        apply_error: str = None,
        stages_changes: bool = True,
        commit_error: str = None,
        rebase_completes: bool = True,
    ):
        self._root = root
        self.branches = {"main": "base000", "feature": "head111"}
        if branch:
            self.branches.setdefault(branch, "head111")
        self.current = branch
        self.diff = diff.encode() if isinstance(diff, str) else diff
        self.clean = clean
        self.rebase_in_progress = rebase_in_progress
        self.apply_error = apply_error
        self.stages_changes = stages_changes
        self.commit_error = commit_error
        self.rebase_completes = rebase_completes
        self.staged = False
        self.commits = []
        self.calls = []

    @property
    def root(self) -> Path:
        return self._root

    def is_clean(self) -> bool:
        return self.clean

    def current_branch(self) -> str:
        return self.current

    def head_sha(self) -> str:
        return self.branches.get(self.current, "detached999")

    def is_rebase_in_progress(self) -> bool:
        return self.rebase_in_progress

    def diff_paths(self, base: str, paths: list[str]) -> bytes:
        self.calls.append(("diff", base, list(paths)))
        if base not in self.branches:
            raise GitError(f"Git command failed: git diff {base}..HEAD")
        return self.diff

    def create_branch(self, name: str, start_point: str) -> None:
        self.calls.append(("create_branch", name, start_point))
        if start_point not in self.branches:
            raise GitError(f"invalid reference: {start_point}")
        self.branches[name] = self.branches[start_point]
        self.current = name

    def checkout(self, name: str) -> None:
        self.calls.append(("checkout", name))
        if name not in self.branches:
            raise GitError(f"pathspec '{name}' did not match")
        self.current = name

    def apply_patch(self, patch_file: Path) -> None:
        self.calls.append(("apply", patch_file.read_text()))
        if self.apply_error:
            raise GitError(self.apply_error)
        self.staged = self.stages_changes

    def discard_changes(self) -> None:
        self.calls.append(("discard",))
        self.staged = False

    def has_staged_changes(self) -> bool:
        return self.staged

    def staged_files(self) -> list[str]:
        return ["src/a.txt"] if self.staged else []

    def commit(self, message: str, no_verify: bool = True) -> None:
        self.calls.append(("commit", message, no_verify))
        if self.commit_error:
            raise GitError(self.commit_error)
        self.commits.append(message)
        self.branches[self.current] = f"commit{len(self.commits)}"
        self.staged = False

    def rebase_with_strategy(self, upstream: str, strategy_option: str) -> bool:
        self.calls.append(("rebase", upstream, strategy_option))
        if self.rebase_completes:
            self.branches[self.current] = "rebased222"
            return True
        self.rebase_in_progress = True
        self.current = ""
        return False

    def branch_exists(self, name: str) -> bool:
        return name in self.branches

    def delete_branch(self, name: str) -> None:
        self.calls.append(("delete_branch", name))
        if name == self.current:
            raise GitError(f"Cannot delete branch '{name}' checked out")
        del self.branches[name]

    def conflicted_files(self) -> list[str]:
        return ["src/a.txt"] if self.rebase_in_progress else []


@pytest.fixture
def make_fake_repo(tmp_path):
    """Factory for FakeRepository instances rooted in a temporary directory."""

    def _make(**kwargs) -> FakeRepository:
        return FakeRepository(tmp_path, **kwargs)

    return _make

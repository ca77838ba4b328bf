"""Extraction pipeline: diff, branch, apply, commit, rebase.

Each step returns None on success or a StepFailure. A failure before the
rebase runs the rollback, which puts the original branch back and removes
the temporary branch and patch file. A rebase that stops on conflicts is
left in place for the user and only the temporary artifacts are removed.
"""

import time
from typing import Callable, Optional

import typer

from gitextract.git import GitError
from gitextract.user_config import ExtractConfig
from gitextract.extract.cleanup import get_tmp_dir, remove_patch_file, remove_temp_branch
from gitextract.extract.message import build_commit_message
from gitextract.extract.models import (
    ExtractRequest,
    ExtractResult,
    ExtractSession,
    ExtractStatus,
    FailureKind,
    StepFailure,
)
from gitextract.extract.repository import Repository


def _echo_err(message: str) -> None:
    typer.echo(message, err=True)


class ExtractPipeline:
    """Runs one extraction against a repository.

    Args:
        repo: Repository to operate on.
        config: Repository configuration (defaults when omitted).
        echo: Callback receiving one status line at a time.
        debug: Print patch and index diagnostics.
        clock: Source of the timestamp used in temporary names.
    """

    def __init__(
        self,
        repo: Repository,
        config: Optional[ExtractConfig] = None,
        echo: Optional[Callable[[str], None]] = None,
        debug: bool = False,
        clock: Callable[[], float] = time.time,
    ):
        self.repo = repo
        self.config = config or ExtractConfig()
        self.echo = echo or _echo_err
        self.debug = debug
        self._clock = clock

    def run(self, request: ExtractRequest) -> ExtractResult:
        """Run the whole pipeline for a request."""
        failure = self.check_preconditions()
        if failure is not None:
            return ExtractResult(
                status=ExtractStatus.FAILED,
                message=failure.message,
                failure=failure.kind,
            )

        session = self.start_session(request)

        steps = (
            self.create_diff,
            self.create_temp_branch,
            self.apply_diff,
            self.commit_changes,
            self.switch_back,
        )
        for step in steps:
            try:
                failure = step(session)
            except GitError as e:
                failure = StepFailure(FailureKind.GIT, str(e))
            if failure is not None:
                return self._fail(session, failure)

        return self.rebase(session)

    # ------------------------------------------------------------------
    # Preconditions
    # ------------------------------------------------------------------

    def check_preconditions(self) -> Optional[StepFailure]:
        """Refuse to run unless the repository is in a state we can restore."""
        self.echo("Checking working directory status...")

        if self.repo.is_rebase_in_progress():
            return StepFailure(
                FailureKind.PRECONDITION,
                "A rebase is already in progress.\n"
                "Finish it with 'git rebase --continue' or cancel it with 'git rebase --abort' first.",
            )

        if not self.repo.is_clean():
            return StepFailure(
                FailureKind.PRECONDITION,
                "You have uncommitted changes (staged or unstaged). "
                "Please commit or stash them first.\n"
                "Run: git add . && git commit -m 'Your message' or git stash",
            )

        branch = self.repo.current_branch()
        if not branch:
            return StepFailure(
                FailureKind.PRECONDITION,
                "HEAD is detached. Check out the branch to extract from first.",
            )

        self.echo("Working directory is clean")

        if branch.startswith(f"{self.config.temp_branch_prefix}-"):
            self.echo(
                f"Warning: current branch '{branch}' looks like a leftover temporary "
                "branch from an interrupted run."
            )
        return None

    def start_session(self, request: ExtractRequest) -> ExtractSession:
        """Capture the original branch and commit, and pick temporary names."""
        stamp = int(self._clock())
        temp_branch = f"{self.config.temp_branch_prefix}-{stamp}"
        suffix = 1
        while self.repo.branch_exists(temp_branch):
            temp_branch = f"{self.config.temp_branch_prefix}-{stamp}-{suffix}"
            suffix += 1

        session = ExtractSession(
            request=request,
            original_branch=self.repo.current_branch(),
            original_commit=self.repo.head_sha(),
            temp_branch=temp_branch,
            patch_file=self.repo.root / ".tmp" / f"extract-{stamp}.diff",
        )

        self.echo("Starting extraction and rebase process...")
        self.echo(f"Current branch: {session.original_branch}")
        self.echo(f"Base branch: {request.base}")
        self.echo(f"Paths to extract: {' '.join(request.paths)}")
        return session

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def create_diff(self, session: ExtractSession) -> Optional[StepFailure]:
        """Write the path-scoped diff of base..HEAD to the patch file."""
        self.echo("Creating diff for specified paths...")
        request = session.request
        diff = self.repo.diff_paths(request.base, request.paths)

        if not diff.strip():
            return StepFailure(FailureKind.EMPTY_DIFF, "No changes found in specified paths")

        # git apply requires the patch to end with a newline
        if not diff.endswith(b"\n"):
            diff += b"\n"

        _, session.created_tmp_dir = get_tmp_dir(self.repo.root)
        session.patch_file.write_bytes(diff)
        session.diff_lines = len(diff.splitlines())

        self.echo(f"Diff created: {session.patch_file} ({session.diff_lines} lines)")
        if self.debug:
            self.echo(f"  Patch size: {len(diff)} bytes")
        return None

    def create_temp_branch(self, session: ExtractSession) -> Optional[StepFailure]:
        base = session.request.base
        self.echo(f"Creating clean branch from {base}...")
        try:
            self.repo.create_branch(session.temp_branch, base)
        except GitError as e:
            return StepFailure(
                FailureKind.BRANCH,
                f"Failed to create branch {session.temp_branch} from {base}: {e}",
            )
        return None

    def apply_diff(self, session: ExtractSession) -> Optional[StepFailure]:
        self.echo("Applying diff...")
        try:
            self.repo.apply_patch(session.patch_file)
        except GitError as e:
            return StepFailure(FailureKind.APPLY, f"Failed to apply diff: {e}")

        self.echo("Diff applied successfully")
        if self.debug:
            staged = self.repo.staged_files()
            self.echo(f"  Staged files: {len(staged)}")
            for path in staged:
                self.echo(f"    {path}")
        return None

    def commit_changes(self, session: ExtractSession) -> Optional[StepFailure]:
        if not self.repo.has_staged_changes():
            return StepFailure(
                FailureKind.NOTHING_TO_COMMIT,
                "No changes to commit after applying diff",
            )

        message = build_commit_message(
            session.request.paths,
            session.original_branch,
            override=session.request.message,
            template=self.config.message_template,
        )
        try:
            self.repo.commit(message, no_verify=self.config.no_verify)
        except GitError as e:
            return StepFailure(FailureKind.COMMIT, f"Failed to commit extracted changes: {e}")

        session.commit_message = message
        self.echo(f"Changes committed: {message}")
        return None

    def switch_back(self, session: ExtractSession) -> Optional[StepFailure]:
        self.echo(f"Switching back to {session.original_branch}...")
        try:
            self.repo.checkout(session.original_branch)
        except GitError as e:
            return StepFailure(
                FailureKind.CHECKOUT,
                f"Failed to switch back to {session.original_branch}: {e}",
            )
        return None

    def rebase(self, session: ExtractSession) -> ExtractResult:
        """Rebase the original branch onto the temporary branch, then clean up.

        Conflicts are reported, not rolled back: the rebase stays in progress.
        """
        self.echo(f"Rebasing {session.original_branch} onto {session.temp_branch}...")
        completed = self.repo.rebase_with_strategy(
            session.temp_branch, self.config.strategy_option
        )

        if completed:
            status = ExtractStatus.SUCCESS
            message = "Rebase completed successfully!"
            self.echo(message)
        else:
            status = ExtractStatus.REBASE_CONFLICT
            message = "Rebase had conflicts."
            self.echo(f"Warning: {message}")
            for path in self.repo.conflicted_files():
                self.echo(f"  conflict: {path}")
            self.echo(
                "The specified paths should auto-resolve to your extracted version "
                f"due to the -X {self.config.strategy_option} strategy."
            )
            self.echo("Resolve any remaining conflicts and run 'git rebase --continue'")
            self.echo("Or run 'git rebase --abort' to cancel")
            self.echo(f"To completely revert all changes, run: {session.revert_command}")

        self.echo("Cleaning up...")
        warnings = self._remove_artifacts(session)
        return ExtractResult(
            status=status,
            message=message,
            session=session,
            cleanup_warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Rollback
    # ------------------------------------------------------------------

    def rollback(self, session: ExtractSession) -> list[str]:
        """Restore the original branch and remove temporary artifacts.

        Safe to call more than once.

        Returns:
            Warnings for anything that could not be undone automatically.
        """
        warnings = []

        try:
            current = self.repo.current_branch()
            if current == session.temp_branch:
                # Only the temp branch is ever reset; it was built from a clean tree
                self.repo.discard_changes()
            if current != session.original_branch:
                self.repo.checkout(session.original_branch)
        except GitError as e:
            warnings.append(
                f"Could not switch back to {session.original_branch}: {e}\n"
                f"  Switch manually: git checkout -f {session.original_branch}"
            )

        warnings.extend(self._remove_artifacts(session))

        try:
            if self.repo.head_sha() != session.original_commit:
                warnings.append(
                    f"HEAD is not at the original commit. Restore it with: {session.revert_command}"
                )
        except GitError as e:
            warnings.append(f"Could not verify HEAD ({e}). Restore it with: {session.revert_command}")

        return warnings

    def _remove_artifacts(self, session: ExtractSession) -> list[str]:
        warnings = []
        for warning in (
            remove_temp_branch(self.repo, session.temp_branch),
            remove_patch_file(session.patch_file, remove_dir=session.created_tmp_dir),
        ):
            if warning:
                warnings.append(warning)
        return warnings

    def _fail(self, session: ExtractSession, failure: StepFailure) -> ExtractResult:
        warnings = self.rollback(session)
        return ExtractResult(
            status=ExtractStatus.FAILED,
            message=failure.message,
            failure=failure.kind,
            session=session,
            cleanup_warnings=warnings,
        )

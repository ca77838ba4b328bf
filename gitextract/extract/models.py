"""Data models for the extract pipeline.

Contains:
- ExtractRequest: Validated user input (base branch, paths, message)
- ExtractSession: Repository state captured for a single run
- FailureKind: Tag for each way the pipeline can fail
- ExtractStatus: Final status of a run
- StepFailure: Tagged failure returned by a pipeline step
- ExtractResult: Outcome returned by the pipeline
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator


def parse_paths(raw: str) -> list[str]:
    """Split a comma-separated path list.

    Whitespace around items is stripped, empty items are dropped and
    duplicates are removed keeping the first occurrence.
    """
    items = [item.strip() for item in raw.split(",")]
    return list(dict.fromkeys(item for item in items if item))


class ExtractRequest(BaseModel):
    """What to extract and where to put it."""

    base: str
    paths: list[str]
    message: Optional[str] = None

    @field_validator("base")
    @classmethod
    def _base_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Base branch is required")
        return value

    @field_validator("paths")
    @classmethod
    def _paths_required(cls, value: list[str]) -> list[str]:
        value = list(dict.fromkeys(p.strip() for p in value if p.strip()))
        if not value:
            raise ValueError("At least one path is required")
        return value

    @field_validator("message")
    @classmethod
    def _blank_message_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


class FailureKind(str, Enum):
    """Why a run stopped before the rebase."""

    PRECONDITION = "precondition"
    EMPTY_DIFF = "empty_diff"
    BRANCH = "branch"
    APPLY = "apply"
    NOTHING_TO_COMMIT = "nothing_to_commit"
    COMMIT = "commit"
    CHECKOUT = "checkout"
    GIT = "git"


class ExtractStatus(str, Enum):
    """Final status of a run."""

    SUCCESS = "success"
    REBASE_CONFLICT = "rebase_conflict"
    FAILED = "failed"


@dataclass
class StepFailure:
    """A pipeline step that did not succeed."""

    kind: FailureKind
    message: str


@dataclass
class ExtractSession:
    """Repository state captured before any mutation."""

    request: ExtractRequest
    original_branch: str
    original_commit: str
    temp_branch: str
    patch_file: Path
    # True when this run created the patch directory and must remove it
    created_tmp_dir: bool = False
    diff_lines: int = 0
    commit_message: Optional[str] = None

    @property
    def revert_command(self) -> str:
        return f"git reset --hard {self.original_commit}"


@dataclass
class ExtractResult:
    """Outcome of a pipeline run."""

    status: ExtractStatus
    message: str
    failure: Optional[FailureKind] = None
    session: Optional[ExtractSession] = None
    # Problems hit while rolling back or cleaning up, with recovery hints
    cleanup_warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True unless the run failed. A rebase conflict is not a failure."""
        return self.status != ExtractStatus.FAILED

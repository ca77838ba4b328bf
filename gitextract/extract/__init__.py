"""Extraction workflow for git-extract.

This package provides:
- models: ExtractRequest, ExtractSession, ExtractResult, ExtractStatus,
          FailureKind, StepFailure, parse_paths
- repository: Repository, GitRepository
- message: build_commit_message
- cleanup: get_tmp_dir, remove_patch_file, remove_temp_branch
- pipeline: ExtractPipeline
"""

# Models
from gitextract.extract.models import (
    ExtractRequest,
    ExtractResult,
    ExtractSession,
    ExtractStatus,
    FailureKind,
    StepFailure,
    parse_paths,
)

# Repository adapter
from gitextract.extract.repository import (
    GitRepository,
    Repository,
)

# Commit message
from gitextract.extract.message import (
    build_commit_message,
)

# Cleanup
from gitextract.extract.cleanup import (
    get_tmp_dir,
    remove_patch_file,
    remove_temp_branch,
)

# Pipeline
from gitextract.extract.pipeline import (
    ExtractPipeline,
)


__all__ = [
    # Models
    "ExtractRequest",
    "ExtractResult",
    "ExtractSession",
    "ExtractStatus",
    "FailureKind",
    "StepFailure",
    "parse_paths",
    # Repository
    "Repository",
    "GitRepository",
    # Message
    "build_commit_message",
    # Cleanup
    "get_tmp_dir",
    "remove_patch_file",
    "remove_temp_branch",
    # Pipeline
    "ExtractPipeline",
]

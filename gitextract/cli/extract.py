"""CLI command that extracts path-scoped changes and rebases onto them."""

from typing import Optional

import typer
from pydantic import ValidationError

from gitextract.git import GitError
from gitextract.extract import (
    ExtractPipeline,
    ExtractRequest,
    ExtractStatus,
    GitRepository,
    parse_paths,
)
from gitextract.user_config import ConfigError, load_config
from gitextract.cli.utils import (
    format_validation_error,
    print_usage,
    report_completion,
    report_failure,
    version_callback,
)


def extract_command(
    ctx: typer.Context,
    base: str = typer.Option(
        ...,
        "--base",
        "-b",
        help="Base branch to rebase from (e.g., staging, main)",
    ),
    paths: str = typer.Option(
        ...,
        "--paths",
        "-p",
        help="Comma-separated list of files/folders to extract changes from",
    ),
    message: Optional[str] = typer.Option(
        None,
        "--message",
        "-m",
        help="Optional commit message (default: auto-generated)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Print diagnostics (patch size, staged files)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Extract changes to specific paths into a clean commit and rebase onto it.

    Diffs the given paths between BASE and HEAD, commits that diff on a
    temporary branch created from BASE, then rebases the current branch
    onto it with -X ours so the extracted version wins on conflicts.
    """
    try:
        request = ExtractRequest(base=base, paths=parse_paths(paths), message=message)
    except ValidationError as e:
        typer.echo(f"Error: {format_validation_error(e)}", err=True)
        print_usage(ctx)
        raise typer.Exit(1)

    try:
        repo = GitRepository.discover()
        config = load_config(repo.root)
        pipeline = ExtractPipeline(repo, config, debug=debug)
        result = pipeline.run(request)

        if result.status == ExtractStatus.FAILED:
            report_failure(result)
            raise typer.Exit(1)

        report_completion(result, repo.current_branch())

    except ConfigError as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(1)
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)


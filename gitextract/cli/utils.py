"""Shared utility functions for the CLI."""

import typer
from pydantic import ValidationError

from gitextract import __version__
from gitextract.extract import ExtractResult, ExtractStatus


USAGE_EXAMPLES = """Examples:

git-extract --base staging --paths browser-host,workers/core

git-extract -b main -p src/components,src/utils,package.json -m 'feat: update components'"""


def version_callback(value: bool) -> None:
    """Print the version and exit when --version is given."""
    if value:
        typer.echo(f"git-extract {__version__}")
        raise typer.Exit()


def print_usage(ctx: typer.Context) -> None:
    """Print the full help text: syntax, options and examples."""
    typer.echo(ctx.get_help())


def format_validation_error(error: ValidationError) -> str:
    """Turn a pydantic validation error into one readable line per problem."""
    lines = []
    for item in error.errors():
        message = item.get("msg", "")
        # pydantic prefixes messages from ValueError raised in validators
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        lines.append(message)
    return "\n".join(lines)


def report_failure(result: ExtractResult) -> None:
    """Print why a run failed and how to recover."""
    typer.echo(f"Error: {result.message}", err=True)

    if result.session is None:
        return

    if result.cleanup_warnings:
        for warning in result.cleanup_warnings:
            typer.echo(f"Warning: {warning}", err=True)
        typer.echo("\nAutomatic restore was incomplete. Manual recovery may be needed.", err=True)
    else:
        typer.echo("Your repository is back to its original state", err=True)

    typer.echo(f"To return to the state before this run: {result.session.revert_command}", err=True)


def report_completion(result: ExtractResult, current_branch: str) -> None:
    """Print the summary of a run that reached the rebase step."""
    session = result.session

    for warning in result.cleanup_warnings:
        typer.echo(f"Warning: {warning}", err=True)

    if not current_branch and result.status == ExtractStatus.REBASE_CONFLICT:
        current_branch = f"{session.original_branch} (rebase in progress)"

    typer.echo("Process complete!")
    typer.echo(f"You are now on branch: {current_branch}")
    typer.echo("Review the changes with: git log --oneline -10")
    typer.echo("")
    typer.echo("To revert all changes made by this script, run:")
    typer.echo(f"   {session.revert_command}")
    typer.echo("This will restore your branch to its original state before running this script")

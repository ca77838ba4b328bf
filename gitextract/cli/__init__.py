"""CLI entry point for git-extract.

The application has a single command, so typer runs it directly:
``git-extract --base main --paths src/a.txt``.
"""

import typer

from gitextract.cli.extract import extract_command
from gitextract.cli.utils import USAGE_EXAMPLES


app = typer.Typer(
    name="git-extract",
    help="git-extract: move path-scoped changes into a clean commit on the base branch",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command(
    "extract",
    epilog=USAGE_EXAMPLES,
    context_settings={"help_option_names": ["-h", "--help"]},
)(extract_command)


__all__ = [
    "app",
    "extract_command",
]

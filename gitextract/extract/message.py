"""Commit message rendering for extract commits."""

from typing import Optional

from gitextract.user_config import DEFAULT_MESSAGE_TEMPLATE


def build_commit_message(
    paths: list[str],
    source_branch: str,
    override: Optional[str] = None,
    template: str = DEFAULT_MESSAGE_TEMPLATE,
) -> str:
    """Build the message for the extract commit.

    Args:
        paths: Extracted paths, in the order the user gave them.
        source_branch: Branch the changes were extracted from.
        override: User supplied message; used verbatim when set.
        template: Format string with {paths} and {branch} placeholders.

    Returns:
        The commit message.
    """
    if override:
        return override
    return template.format(paths=" ".join(paths), branch=source_branch)

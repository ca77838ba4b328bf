"""Repository configuration for git-extract.

Reads the optional .gitextract/config.yaml file in the repository root.
The file is never created automatically; without it every setting keeps
its default.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError, field_validator


CONFIG_DIR_NAME = ".gitextract"
CONFIG_FILE_NAME = "config.yaml"

DEFAULT_MESSAGE_TEMPLATE = "Extract: Apply changes from {paths} (from {branch})"


class ConfigError(Exception):
    """Raised when the repository configuration cannot be read."""

    pass


class ExtractConfig(BaseModel):
    """Settings that tune the extraction pipeline."""

    strategy_option: str = "ours"
    temp_branch_prefix: str = "temp-extract"
    no_verify: bool = True
    message_template: str = DEFAULT_MESSAGE_TEMPLATE

    @field_validator("strategy_option", "temp_branch_prefix")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("message_template")
    @classmethod
    def _known_placeholders(cls, value: str) -> str:
        try:
            value.format(paths="", branch="")
        except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
            raise ValueError(f"invalid placeholder in template: {e}")
        return value


def get_config_file(repo_root: Path) -> Path:
    """Return path to the config.yaml file.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to .gitextract/config.yaml.
    """
    return repo_root / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_config(repo_root: Path) -> ExtractConfig:
    """Load the git-extract configuration from config.yaml.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        The parsed configuration, or defaults if the file does not exist.

    Raises:
        ConfigError: If the file is unreadable or holds invalid values.
    """
    config_file = get_config_file(repo_root)

    if not config_file.exists():
        return ExtractConfig()

    try:
        with open(config_file, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {config_file}")

    try:
        return ExtractConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {config_file}:\n{e}")

"""
Configuration management for Repo Timeline.

Loads selection settings from:
1. .repo-timeline.toml (local config)
2. pyproject.toml (project-level config)
"""

import os
import tomllib
from pathlib import Path
from typing import Any, NamedTuple

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# project_root is the parent directory of repo_timeline/
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Global configuration for SSL verification
# Default: True (verify SSL certificates)
# Can be set to False by CLI --insecure flag
VERIFY_SSL = True

EMPTY_COMMIT_POLICIES = ("none", "fallback")


class SelectionConfig(NamedTuple):
    """Tunable constants of the evaluation and selection pipeline."""

    min_size_kb: int = 100
    inactivity_gap_days: int = 30
    ongoing_threshold_days: int = 60
    candidate_pool_size: int = 8
    max_per_language: int = 2
    max_repos_limit: int = 10
    default_max_repos: int = 5
    # "none": no commits -> no active blocks
    # "fallback": no commits -> one block spanning created..pushed
    empty_commit_policy: str = "none"
    max_concurrency: int = 8


_ENV_OVERRIDES = {
    "REPO_TIMELINE_MIN_SIZE_KB": "min_size_kb",
    "REPO_TIMELINE_GAP_DAYS": "inactivity_gap_days",
}


def load_config_file(config_path: Path) -> dict:
    """Load a TOML configuration file."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def _load_tool_section() -> dict[str, Any]:
    """
    Return the [tool.repo-timeline] table.

    Priority:
    1. .repo-timeline.toml (local config, highest priority)
    2. pyproject.toml (project-level config, fallback)
    """
    local_config_path = PROJECT_ROOT / ".repo-timeline.toml"
    if local_config_path.exists():
        config = load_config_file(local_config_path)
        section = config.get("tool", {}).get("repo-timeline", {})
        if section:
            return section

    pyproject_path = PROJECT_ROOT / "pyproject.toml"
    if pyproject_path.exists():
        config = load_config_file(pyproject_path)
        return config.get("tool", {}).get("repo-timeline", {})

    return {}


def _validate(config: SelectionConfig) -> SelectionConfig:
    for field, default in SelectionConfig._field_defaults.items():
        value = getattr(config, field)
        # bool is an int subclass but never a valid count
        if isinstance(value, bool) or not isinstance(value, type(default)):
            raise ValueError(
                f"{field} must be of type {type(default).__name__}, got {value!r}"
            )
    if config.empty_commit_policy not in EMPTY_COMMIT_POLICIES:
        raise ValueError(
            f"Unknown empty_commit_policy: {config.empty_commit_policy!r}. "
            f"Expected one of: {', '.join(EMPTY_COMMIT_POLICIES)}"
        )
    for field in (
        "inactivity_gap_days",
        "candidate_pool_size",
        "max_per_language",
        "max_repos_limit",
        "default_max_repos",
        "max_concurrency",
    ):
        if getattr(config, field) < 1:
            raise ValueError(f"{field} must be a positive integer")
    if config.min_size_kb < 0:
        raise ValueError("min_size_kb must not be negative")
    return config


def get_selection_config() -> SelectionConfig:
    """
    Build the selection configuration.

    Priority:
    1. REPO_TIMELINE_* environment variables
    2. [tool.repo-timeline] in .repo-timeline.toml / pyproject.toml
    3. SelectionConfig defaults

    Returns:
        Validated SelectionConfig.

    Raises:
        ValueError: If a value is unknown or out of range.
    """
    values: dict[str, Any] = {}
    section = _load_tool_section()
    for key, value in section.items():
        normalized = key.replace("-", "_")
        if normalized in SelectionConfig._fields:
            values[normalized] = value

    for env_name, field in _ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw:
            try:
                values[field] = int(raw)
            except ValueError as e:
                raise ValueError(f"{env_name} must be an integer, got {raw!r}") from e

    return _validate(SelectionConfig(**values))


def get_github_token() -> str | None:
    """Return the GitHub token from the environment, if any."""
    token = os.getenv("GITHUB_TOKEN")
    return token or None


def set_verify_ssl(verify: bool) -> None:
    """
    Set the SSL verification setting globally.

    Args:
        verify: Whether to verify SSL certificates.
    """
    global VERIFY_SSL
    VERIFY_SSL = verify


def get_verify_ssl() -> bool:
    """
    Get the current SSL verification setting.

    Returns:
        Whether SSL verification is enabled.
    """
    return VERIFY_SSL

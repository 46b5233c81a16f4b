"""
Tests for the configuration module.
"""

import tempfile
from pathlib import Path

import pytest

from repo_timeline.config import (
    SelectionConfig,
    get_github_token,
    get_selection_config,
    get_verify_ssl,
    set_verify_ssl,
)


@pytest.fixture
def temp_project_root(monkeypatch):
    """Create a temporary project root for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir_path = Path(tmpdir)

        # Patch PROJECT_ROOT
        import repo_timeline.config

        monkeypatch.setattr(repo_timeline.config, "PROJECT_ROOT", tmpdir_path)
        monkeypatch.delenv("REPO_TIMELINE_MIN_SIZE_KB", raising=False)
        monkeypatch.delenv("REPO_TIMELINE_GAP_DAYS", raising=False)

        yield tmpdir_path


def test_defaults_without_config_files(temp_project_root):
    assert get_selection_config() == SelectionConfig()


def test_load_from_local_config(temp_project_root):
    """Test loading settings from .repo-timeline.toml."""
    config_file = temp_project_root / ".repo-timeline.toml"
    config_file.write_text(
        """
[tool.repo-timeline]
min-size-kb = 50
max_per_language = 3
empty-commit-policy = "fallback"
"""
    )

    config = get_selection_config()
    assert config.min_size_kb == 50
    assert config.max_per_language == 3
    assert config.empty_commit_policy == "fallback"
    assert config.inactivity_gap_days == 30


def test_load_from_pyproject(temp_project_root):
    """Test loading settings from pyproject.toml."""
    pyproject = temp_project_root / "pyproject.toml"
    pyproject.write_text(
        """
[tool.repo-timeline]
candidate-pool-size = 12
"""
    )

    assert get_selection_config().candidate_pool_size == 12


def test_local_config_takes_priority(temp_project_root):
    """Test that .repo-timeline.toml takes priority over pyproject.toml."""
    pyproject = temp_project_root / "pyproject.toml"
    pyproject.write_text(
        """
[tool.repo-timeline]
min-size-kb = 10
"""
    )

    local_config = temp_project_root / ".repo-timeline.toml"
    local_config.write_text(
        """
[tool.repo-timeline]
min-size-kb = 200
"""
    )

    assert get_selection_config().min_size_kb == 200


def test_unknown_keys_are_ignored(temp_project_root):
    local_config = temp_project_root / ".repo-timeline.toml"
    local_config.write_text(
        """
[tool.repo-timeline]
theme = "dark"
"""
    )

    assert get_selection_config() == SelectionConfig()


def test_environment_overrides(temp_project_root, monkeypatch):
    local_config = temp_project_root / ".repo-timeline.toml"
    local_config.write_text(
        """
[tool.repo-timeline]
min-size-kb = 200
"""
    )
    monkeypatch.setenv("REPO_TIMELINE_MIN_SIZE_KB", "0")
    monkeypatch.setenv("REPO_TIMELINE_GAP_DAYS", "45")

    config = get_selection_config()
    assert config.min_size_kb == 0
    assert config.inactivity_gap_days == 45


def test_invalid_environment_value(temp_project_root, monkeypatch):
    monkeypatch.setenv("REPO_TIMELINE_GAP_DAYS", "soon")
    with pytest.raises(ValueError, match="REPO_TIMELINE_GAP_DAYS"):
        get_selection_config()


def test_invalid_policy(temp_project_root):
    local_config = temp_project_root / ".repo-timeline.toml"
    local_config.write_text(
        """
[tool.repo-timeline]
empty-commit-policy = "guess"
"""
    )

    with pytest.raises(ValueError, match="empty_commit_policy"):
        get_selection_config()


def test_non_positive_cap(temp_project_root):
    local_config = temp_project_root / ".repo-timeline.toml"
    local_config.write_text(
        """
[tool.repo-timeline]
max-per-language = 0
"""
    )

    with pytest.raises(ValueError, match="max_per_language"):
        get_selection_config()


def test_malformed_toml(temp_project_root):
    (temp_project_root / ".repo-timeline.toml").write_text("[tool.repo-timeline\n")
    with pytest.raises(ValueError, match="Failed to load config"):
        get_selection_config()


def test_github_token(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
    assert get_github_token() == "ghp_test"
    monkeypatch.setenv("GITHUB_TOKEN", "")
    assert get_github_token() is None


def test_verify_ssl_toggle():
    original = get_verify_ssl()
    try:
        set_verify_ssl(False)
        assert get_verify_ssl() is False
    finally:
        set_verify_ssl(original)


@pytest.mark.parametrize(
    "line,field",
    [
        ('max-per-language = "2"', "max_per_language"),
        ("inactivity-gap-days = true", "inactivity_gap_days"),
        ("min-size-kb = 1.5", "min_size_kb"),
        ("empty-commit-policy = 1", "empty_commit_policy"),
    ],
)
def test_wrongly_typed_value(temp_project_root, line, field):
    """Test that mistyped TOML values raise ValueError naming the field."""
    (temp_project_root / ".repo-timeline.toml").write_text(
        f"[tool.repo-timeline]\n{line}\n"
    )

    with pytest.raises(ValueError, match=field):
        get_selection_config()

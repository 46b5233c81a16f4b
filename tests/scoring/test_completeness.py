"""
Tests for the completeness factor.
"""

import pytest

from repo_timeline.scoring.completeness import score_completeness


class TestCompletenessFactor:
    """Test the score_completeness factor function."""

    def test_all_checks_present(self):
        files = {"package.json", ".gitignore", ".env.example"}
        dirs = {".github"}
        assert score_completeness(files, dirs) == 1.0

    def test_nothing_present(self):
        assert score_completeness(set(), set()) == 0.0

    def test_manifest_only(self):
        assert score_completeness({"requirements.txt"}, set()) == pytest.approx(0.25)

    def test_dockerfile_counts_as_build_config(self):
        assert score_completeness({"dockerfile"}, set()) == pytest.approx(0.25)

    def test_config_file_name_counts_as_config_artifact(self):
        assert score_completeness({"tsconfig.json"}, set()) == pytest.approx(0.25)

    def test_config_directory(self):
        assert score_completeness(set(), {"settings"}) == pytest.approx(0.25)

    def test_checks_are_independent(self):
        files = {"go.mod", "makefile", ".gitignore"}
        assert score_completeness(files, {"cmd"}) == pytest.approx(0.75)

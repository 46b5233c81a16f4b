"""
Tests for the documentation factor.
"""

import pytest

from repo_timeline.scoring.documentation import readme_length_score, score_documentation


class TestDocumentationFactor:
    """Test the score_documentation factor function."""

    def test_full_documentation(self):
        assert score_documentation(True, 2500, True, True) == pytest.approx(1.0)

    def test_no_documentation(self):
        assert score_documentation(False, 0, False, False) == 0.0

    def test_license_only(self):
        assert score_documentation(False, 0, False, True) == pytest.approx(0.1)

    def test_short_readme(self):
        """A README under 200 characters earns existence credit only."""
        assert score_documentation(True, 199, False, False) == pytest.approx(0.4)
        assert score_documentation(True, 200, False, False) == pytest.approx(0.49)

    def test_medium_readme_with_usage(self):
        assert score_documentation(True, 600, True, False) == pytest.approx(0.78)

    @pytest.mark.parametrize(
        "length,expected",
        [(0, 0.0), (200, 0.3), (499, 0.3), (500, 0.6), (1000, 0.8), (2000, 1.0)],
    )
    def test_length_buckets(self, length, expected):
        assert readme_length_score(length) == expected

"""
Tests for the maintenance factor.
"""

from datetime import timedelta

import pytest

from repo_timeline.scoring.maintenance import (
    issue_health_score,
    recency_score,
    score_maintenance,
)


class TestMaintenanceFactor:
    """Test the score_maintenance factor function."""

    def test_recent_and_healthy(self, now):
        pushed = now - timedelta(days=10)
        assert score_maintenance(pushed, True, 5, now) == pytest.approx(1.0)

    def test_stale_with_issues_disabled(self, now):
        pushed = now - timedelta(days=400)
        assert score_maintenance(pushed, False, 0, now) == pytest.approx(0.12)

    def test_moderate(self, now):
        pushed = now - timedelta(days=100)
        assert score_maintenance(pushed, True, 20, now) == pytest.approx(0.6)

    def test_unknown_push_date_is_stale(self, now):
        assert score_maintenance(None, False, 0, now) == pytest.approx(0.12)

    @pytest.mark.parametrize(
        "days,expected",
        [(0, 1.0), (29, 1.0), (30, 0.8), (89, 0.8), (90, 0.6), (180, 0.4), (365, 0.2)],
    )
    def test_recency_buckets(self, now, days, expected):
        assert recency_score(now - timedelta(days=days), now) == expected

    @pytest.mark.parametrize(
        "has_issues,open_issues,expected",
        [(False, 0, 0.0), (True, 0, 1.0), (True, 10, 1.0), (True, 11, 0.6),
         (True, 50, 0.6), (True, 51, 0.3)],
    )
    def test_issue_health(self, has_issues, open_issues, expected):
        assert issue_health_score(has_issues, open_issues) == expected

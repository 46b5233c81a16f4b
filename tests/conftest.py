"""
Shared fixtures for the test suite.
"""

from datetime import datetime, timedelta, timezone

import pytest

from repo_timeline.models import (
    ComplexityResult,
    QualityBreakdown,
    RepositorySnapshot,
    ScoredRepository,
)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """Fixed reference time for recency-dependent checks."""
    return NOW


@pytest.fixture
def make_snapshot():
    """Factory for RepositorySnapshot with sensible defaults."""

    def _make(name="project", **overrides):
        fields = {
            "name": name,
            "created_at": NOW - timedelta(days=730),
            "updated_at": NOW - timedelta(days=5),
            "pushed_at": NOW - timedelta(days=5),
            "size_kb": 500,
            "url": f"https://github.com/octocat/{name}",
        }
        fields.update(overrides)
        return RepositorySnapshot(**fields)

    return _make


@pytest.fixture
def make_scored(make_snapshot):
    """Factory for ScoredRepository with a given language and final score."""

    def _make(name, language, score):
        return ScoredRepository(
            snapshot=make_snapshot(name),
            primary_language=language,
            secondary_language=None,
            active_blocks=[],
            active_days=0.0,
            commit_count=0,
            is_ongoing=False,
            start_date=None,
            end_date=None,
            quality=QualityBreakdown(0, 0, 0, 0, 0, 0, 0, final_score=score),
            complexity=ComplexityResult(0, "Low"),
        )

    return _make

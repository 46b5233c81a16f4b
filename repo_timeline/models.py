"""
Data structures shared across the evaluation pipeline.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, NamedTuple


class RepositorySnapshot(NamedTuple):
    """Repository metadata as listed for an account."""

    name: str
    created_at: datetime | None
    updated_at: datetime | None
    pushed_at: datetime | None
    is_fork: bool = False
    is_archived: bool = False
    has_issues: bool = False
    has_projects: bool = False
    has_wiki: bool = False
    size_kb: int = 0
    stars: int = 0
    forks: int = 0
    open_issues: int = 0
    has_license: bool = False
    description: str | None = None
    url: str = ""


class CommitRecord(NamedTuple):
    """A single commit: raw ISO timestamp and full message."""

    date: str
    message: str


class ReadmeInfo(NamedTuple):
    exists: bool = False
    length: int = 0
    has_usage_section: bool = False


class RootListing(NamedTuple):
    """Lowercase names found at the repository root."""

    files: frozenset[str] = frozenset()
    dirs: frozenset[str] = frozenset()


class EnrichmentBundle(NamedTuple):
    """Best-effort signals fetched per repository. Every field has a safe default."""

    # Defaults are shared by every instance and must stay immutable
    languages: Mapping[str, int] = MappingProxyType({})
    commits: tuple[CommitRecord, ...] = ()
    tags_count: int = 0
    readme: ReadmeInfo = ReadmeInfo()
    root: RootListing = RootListing()


class ActiveBlock(NamedTuple):
    """A contiguous span of commit activity."""

    start: datetime
    end: datetime
    duration_days: float


class ActivityTimeline(NamedTuple):
    blocks: list[ActiveBlock]
    active_days: float


class QualityBreakdown(NamedTuple):
    """The seven [0, 1] quality sub-scores and their weighted total."""

    documentation: float
    completeness: float
    code_quality: float
    commit_quality: float
    maintenance: float
    stars: float
    forks: float
    final_score: float  # 0-100, two decimals


class ComplexityResult(NamedTuple):
    score: int  # 0-100
    label: str  # "Low", "Medium", "High", "Very High"


class ScoredRepository(NamedTuple):
    """The evaluated form of a repository. Built once per run, never mutated."""

    snapshot: RepositorySnapshot
    primary_language: str
    secondary_language: str | None
    active_blocks: list[ActiveBlock]
    active_days: float
    commit_count: int
    is_ongoing: bool
    start_date: datetime | None
    end_date: datetime | None
    quality: QualityBreakdown
    complexity: ComplexityResult

    @property
    def name(self) -> str:
        return self.snapshot.name

    @property
    def final_score(self) -> float:
        return self.quality.final_score

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        snapshot = self.snapshot
        return {
            "name": snapshot.name,
            "url": snapshot.url,
            "description": snapshot.description,
            "stars": snapshot.stars,
            "forks": snapshot.forks,
            "primary_language": self.primary_language,
            "secondary_language": self.secondary_language,
            "start_date": _isoformat(self.start_date),
            "end_date": _isoformat(self.end_date),
            "is_ongoing": self.is_ongoing,
            "active_days": round(self.active_days, 2),
            "commit_count": self.commit_count,
            "active_blocks": [
                {
                    "start": _isoformat(block.start),
                    "end": _isoformat(block.end),
                    "duration_days": round(block.duration_days, 2),
                }
                for block in self.active_blocks
            ],
            "scores": self.quality._asdict(),
            "complexity": self.complexity._asdict(),
        }


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse an ISO 8601 timestamp into an aware UTC datetime.

    Returns None for missing or unparsable values. Naive values are taken as UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)

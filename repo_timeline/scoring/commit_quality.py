"""Commit quality factor."""

import re
from collections.abc import Sequence

from repo_timeline.models import CommitRecord, parse_timestamp
from repo_timeline.scoring.base import FactorContext, FactorSpec

NOISE_MESSAGE_PATTERN = re.compile(
    r"^(\.+|x+|a+|test\d*|wip|tmp|asdf|qwer|aaa|bbb|zzz)$", re.IGNORECASE
)

# (minimum distinct commit days, score), checked from the top
TIME_SPREAD_BUCKETS = [
    (30, 1.0),
    (14, 0.8),
    (7, 0.6),
    (3, 0.4),
]
MIN_TIME_SPREAD_SCORE = 0.2


def is_meaningful_message(message: str) -> bool:
    """
    Judge whether a commit message carries information.

    Only the first line counts. It must be at least 3 characters, must not be
    noise ("...", "xxx", "wip", "tmp", "test1", ...) and must be either 10+
    characters long or contain a colon or a space.
    """
    lines = message.split("\n") if message else [""]
    first_line = lines[0].strip()
    if len(first_line) < 3:
        return False
    if NOISE_MESSAGE_PATTERN.match(first_line):
        return False
    return len(first_line) >= 10 or ":" in first_line or " " in first_line


def time_spread_score(commits: Sequence[CommitRecord]) -> float:
    """Score how many distinct UTC calendar days the commits touch."""
    dates = [parse_timestamp(c.date) for c in commits]
    valid = [d for d in dates if d is not None]
    if len(valid) < 2:
        return 0.0

    unique_days = len({d.date() for d in valid})
    for threshold, score in TIME_SPREAD_BUCKETS:
        if unique_days >= threshold:
            return score
    return MIN_TIME_SPREAD_SCORE


def score_commit_quality(commits: Sequence[CommitRecord], tags_count: int) -> float:
    """
    Scores commit hygiene on a 0-1 scale. Commit count is not rewarded.

    Scoring:
    - Share of meaningful messages: 0.5
    - Time spread over distinct days (3/7/14/30+ -> 0.4/0.6/0.8/1.0, else 0.2): 0.3
    - At least one tag: 0.2

    No commits score 0.
    """
    if not commits:
        return 0.0

    meaningful = sum(1 for c in commits if is_meaningful_message(c.message))
    meaningful_ratio = meaningful / len(commits)
    releases = 1.0 if tags_count > 0 else 0.0

    return meaningful_ratio * 0.5 + time_spread_score(commits) * 0.3 + releases * 0.2


def _score(context: FactorContext) -> float:
    bundle = context.bundle
    return score_commit_quality(bundle.commits, bundle.tags_count)


FACTORS = [FactorSpec(key="commit_quality", name="Commit Quality", scorer=_score)]

"""Maintenance and health factor."""

from datetime import datetime

from repo_timeline.scoring.base import FactorContext, FactorSpec

# (days since last push strictly below, score), checked from the top
RECENCY_BUCKETS = [
    (30, 1.0),
    (90, 0.8),
    (180, 0.6),
    (365, 0.4),
]
STALE_RECENCY_SCORE = 0.2


def recency_score(pushed_at: datetime | None, now: datetime) -> float:
    if pushed_at is None:
        return STALE_RECENCY_SCORE
    days_since_push = (now - pushed_at).total_seconds() / 86400
    for threshold, score in RECENCY_BUCKETS:
        if days_since_push < threshold:
            return score
    return STALE_RECENCY_SCORE


def issue_health_score(has_issues: bool, open_issues: int) -> float:
    """Issues disabled -> 0; <=10 open -> 1.0; <=50 -> 0.6; more -> 0.3."""
    if not has_issues:
        return 0.0
    if open_issues <= 10:
        return 1.0
    if open_issues <= 50:
        return 0.6
    return 0.3


def score_maintenance(
    pushed_at: datetime | None,
    has_issues: bool,
    open_issues: int,
    now: datetime,
) -> float:
    """
    Scores maintenance health on a 0-1 scale.

    Scoring:
    - Recency of last push (<30/<90/<180/<365 days -> 1.0/0.8/0.6/0.4, else 0.2): 0.6
    - Open issue health: 0.4
    """
    return (
        recency_score(pushed_at, now) * 0.6
        + issue_health_score(has_issues, open_issues) * 0.4
    )


def _score(context: FactorContext) -> float:
    snapshot = context.snapshot
    return score_maintenance(
        snapshot.pushed_at, snapshot.has_issues, snapshot.open_issues, context.now
    )


FACTORS = [FactorSpec(key="maintenance", name="Maintenance", scorer=_score)]

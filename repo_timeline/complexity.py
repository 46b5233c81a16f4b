"""
Complexity estimate used for display labels only.

The estimate never feeds ranking or elimination.
"""

import math
from collections.abc import Sequence

from repo_timeline.models import CommitRecord, ComplexityResult

COMPLEXITY_KEYWORDS = ("refactor", "optimize", "restructure", "performance")

# (minimum score, label), checked from the top
COMPLEXITY_LABELS = [
    (75, "Very High"),
    (50, "High"),
    (25, "Medium"),
]
LOWEST_LABEL = "Low"


def has_complexity_keywords(commits: Sequence[CommitRecord]) -> bool:
    return any(
        keyword in (c.message or "").lower()
        for c in commits
        for keyword in COMPLEXITY_KEYWORDS
    )


def complexity_label(score: int) -> str:
    for threshold, label in COMPLEXITY_LABELS:
        if score >= threshold:
            return label
    return LOWEST_LABEL


def compute_complexity(
    total_bytes: int,
    num_languages: int,
    commits_per_active_day: float,
    keyword_hit: bool,
    active_days: float,
    active_block_count: int,
    has_issues: bool,
    has_projects: bool,
    has_wiki: bool,
) -> ComplexityResult:
    """
    Estimate repository complexity on a 0-100 scale.

    Components:
    - Size (0-30): log10(bytes + 1) / 7 x 30, so 10 MB of code saturates
    - Breadth (0-20): 4 per language
    - Commit structure (0-20): density x 5 (max 10) + 10 for refactor-style messages
    - Longevity (0-20): active_days / 365 x 15 + 1 per active block
    - Maturity (0-10): issues, projects and wiki enabled, about 3.33 each
    """
    size = min(30.0, math.log10(total_bytes + 1) / 7 * 30)
    breadth = min(20.0, num_languages * 4.0)
    density = min(10.0, commits_per_active_day * 5)
    commit_structure = min(20.0, density + (10.0 if keyword_hit else 0.0))
    longevity = min(20.0, active_days / 365 * 15 + active_block_count * 1)

    maturity = 0.0
    if has_issues:
        maturity += 3.33
    if has_projects:
        maturity += 3.33
    if has_wiki:
        maturity += 3.34

    raw = size + breadth + commit_structure + longevity + maturity
    score = int(round(min(100.0, max(0.0, raw))))
    return ComplexityResult(score, complexity_label(score))

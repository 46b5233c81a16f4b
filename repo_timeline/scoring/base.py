"""
Shared factor types and context helpers.
"""

from datetime import datetime
from typing import Callable, NamedTuple

from repo_timeline.models import EnrichmentBundle, RepositorySnapshot


class FactorContext(NamedTuple):
    """Inputs available to every quality factor.

    ``max_stars`` and ``max_forks`` are run-wide maxima over all surviving
    candidates, floored at 1.
    """

    snapshot: RepositorySnapshot
    bundle: EnrichmentBundle
    max_stars: int
    max_forks: int
    now: datetime


class FactorSpec(NamedTuple):
    """Specification for a quality factor."""

    key: str  # QualityBreakdown field name
    name: str  # Display name
    scorer: Callable[[FactorContext], float]


def clamp_unit(value: float) -> float:
    """Clamp a value to [0, 1]."""
    return min(1.0, max(0.0, value))

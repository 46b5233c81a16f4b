"""Star and fork bonus factors."""

import math

from repo_timeline.scoring.base import FactorContext, FactorSpec, clamp_unit


def log_scaled_bonus(value: int, maximum: int) -> float:
    """
    Log-scaled share of the run-wide maximum: log(value+1) / log(maximum+1).

    Zero value or zero maximum scores 0, so outliers cannot dominate and
    repositories without any signal get nothing.
    """
    if value <= 0 or maximum <= 0:
        return 0.0
    return clamp_unit(math.log(value + 1) / math.log(maximum + 1))


def _score_stars(context: FactorContext) -> float:
    return log_scaled_bonus(context.snapshot.stars, context.max_stars)


def _score_forks(context: FactorContext) -> float:
    return log_scaled_bonus(context.snapshot.forks, context.max_forks)


FACTORS = [
    FactorSpec(key="stars", name="Stars Bonus", scorer=_score_stars),
    FactorSpec(key="forks", name="Forks Bonus", scorer=_score_forks),
]

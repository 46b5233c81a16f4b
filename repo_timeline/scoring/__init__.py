"""
Quality factor registry and weighted aggregation.

Each factor maps enrichment data to a [0, 1] sub-score. The final score is
100 x the weighted sum of the sub-scores, rounded to two decimals.
"""

import math
from importlib import import_module

from repo_timeline.models import QualityBreakdown
from repo_timeline.scoring.base import FactorContext, FactorSpec, clamp_unit

__all__ = [
    "FACTOR_WEIGHTS",
    "FactorContext",
    "FactorSpec",
    "compute_final_score",
    "load_factor_specs",
    "score_quality",
]

# Weights sum to 1.0
FACTOR_WEIGHTS: dict[str, float] = {
    "documentation": 0.25,
    "completeness": 0.20,
    "code_quality": 0.20,
    "commit_quality": 0.10,
    "maintenance": 0.10,
    "stars": 0.10,
    "forks": 0.05,
}

_BUILTIN_MODULES = [
    "repo_timeline.scoring.documentation",
    "repo_timeline.scoring.completeness",
    "repo_timeline.scoring.code_quality",
    "repo_timeline.scoring.commit_quality",
    "repo_timeline.scoring.maintenance",
    "repo_timeline.scoring.popularity",
]

_FACTOR_SPECS: list[FactorSpec] | None = None


def _load_builtin_factor_specs() -> list[FactorSpec]:
    specs: list[FactorSpec] = []
    for module_path in _BUILTIN_MODULES:
        module = import_module(module_path)
        specs.extend(getattr(module, "FACTORS", []))
    return specs


def load_factor_specs() -> list[FactorSpec]:
    """
    Load the built-in factor specs, ordered like FACTOR_WEIGHTS.

    Raises:
        ValueError: If the factors and the weight table disagree, or the
            weights do not sum to 1.
    """
    global _FACTOR_SPECS
    if _FACTOR_SPECS is not None:
        return _FACTOR_SPECS

    by_key = {spec.key: spec for spec in _load_builtin_factor_specs()}
    if set(by_key) != set(FACTOR_WEIGHTS):
        missing = sorted(set(FACTOR_WEIGHTS) - set(by_key))
        unknown = sorted(set(by_key) - set(FACTOR_WEIGHTS))
        raise ValueError(
            f"Factor registry mismatch. Missing: {missing}, unweighted: {unknown}"
        )
    if not math.isclose(sum(FACTOR_WEIGHTS.values()), 1.0):
        raise ValueError("Factor weights must sum to 1.0")

    _FACTOR_SPECS = [by_key[key] for key in FACTOR_WEIGHTS]
    return _FACTOR_SPECS


def compute_final_score(sub_scores: dict[str, float]) -> float:
    """Weighted 0-100 score from [0, 1] sub-scores, rounded to two decimals."""
    total = sum(
        FACTOR_WEIGHTS[key] * clamp_unit(sub_scores.get(key, 0.0))
        for key in FACTOR_WEIGHTS
    )
    return round(total * 100, 2)


def score_quality(context: FactorContext) -> QualityBreakdown:
    """Run every factor against one repository and combine the results."""
    sub_scores = {
        spec.key: clamp_unit(spec.scorer(context)) for spec in load_factor_specs()
    }
    return QualityBreakdown(**sub_scores, final_score=compute_final_score(sub_scores))

"""Documentation and usability factor."""

from repo_timeline.scoring.base import FactorContext, FactorSpec

# (minimum characters, score), checked from the top
README_LENGTH_BUCKETS = [
    (2000, 1.0),
    (1000, 0.8),
    (500, 0.6),
    (200, 0.3),
]


def readme_length_score(length: int) -> float:
    for threshold, score in README_LENGTH_BUCKETS:
        if length >= threshold:
            return score
    return 0.0


def score_documentation(
    readme_exists: bool,
    readme_length: int,
    has_usage_section: bool,
    has_license: bool,
) -> float:
    """
    Scores documentation and usability on a 0-1 scale.

    Scoring:
    - README exists: 0.4
    - README length (200/500/1000/2000+ chars -> 0.3/0.6/0.8/1.0): up to 0.3
    - Usage / getting-started section: 0.2
    - License present: 0.1
    """
    return (
        (1.0 if readme_exists else 0.0) * 0.4
        + readme_length_score(readme_length) * 0.3
        + (1.0 if has_usage_section else 0.0) * 0.2
        + (1.0 if has_license else 0.0) * 0.1
    )


def _score(context: FactorContext) -> float:
    readme = context.bundle.readme
    return score_documentation(
        readme.exists,
        readme.length,
        readme.has_usage_section,
        context.snapshot.has_license,
    )


FACTORS = [FactorSpec(key="documentation", name="Documentation", scorer=_score)]

"""Diversity-constrained selection of the final repository list."""

from repo_timeline.models import ScoredRepository

DEFAULT_CANDIDATE_POOL_SIZE = 8
DEFAULT_MAX_PER_LANGUAGE = 2


def rank_by_score(repositories: list[ScoredRepository]) -> list[ScoredRepository]:
    """Sort by final score, highest first. Ties keep their input order."""
    return sorted(repositories, key=lambda r: r.final_score, reverse=True)


def select_diverse(
    ranked: list[ScoredRepository],
    target_size: int,
    max_per_language: int = DEFAULT_MAX_PER_LANGUAGE,
    candidate_pool_size: int = DEFAULT_CANDIDATE_POOL_SIZE,
) -> list[ScoredRepository]:
    """
    Pick up to ``target_size`` repositories with at most ``max_per_language``
    sharing a primary language.

    Only the first ``candidate_pool_size`` entries of ``ranked`` are considered.
    Order is preserved. Repositories over the cap are skipped, never backfilled,
    so the result may be shorter than ``target_size``.
    """
    language_counts: dict[str, int] = {}
    selected: list[ScoredRepository] = []

    for repo in ranked[:candidate_pool_size]:
        if len(selected) >= target_size:
            break
        count = language_counts.get(repo.primary_language, 0)
        if count >= max_per_language:
            continue
        language_counts[repo.primary_language] = count + 1
        selected.append(repo)

    return selected

"""
Core evaluation pipeline for Repo Timeline.

Flow: listing -> elimination -> enrichment (concurrent) -> per-repository
scoring -> ranking -> diversity selection.
"""

from collections.abc import Mapping
from datetime import datetime, timezone

from repo_timeline.activity import build_active_blocks, display_span, is_ongoing
from repo_timeline.complexity import compute_complexity, has_complexity_keywords
from repo_timeline.config import SelectionConfig, get_selection_config
from repo_timeline.filters import filter_repositories
from repo_timeline.models import EnrichmentBundle, RepositorySnapshot, ScoredRepository
from repo_timeline.scoring import FactorContext, score_quality
from repo_timeline.selection import rank_by_score, select_diverse

UNKNOWN_LANGUAGE = "Unknown"


def extract_languages(
    languages: Mapping[str, int],
) -> tuple[str, str | None, int, int]:
    """
    Return (primary, secondary, total_bytes, language_count).

    Languages are ranked by byte count; equal counts keep mapping order.
    """
    ranked = sorted(languages.items(), key=lambda item: item[1], reverse=True)
    total_bytes = sum(size for _, size in ranked)
    if not ranked:
        return UNKNOWN_LANGUAGE, None, 0, 0
    secondary = ranked[1][0] if len(ranked) > 1 else None
    return ranked[0][0], secondary, total_bytes, len(ranked)


def compute_run_maxima(snapshots: list[RepositorySnapshot]) -> tuple[int, int]:
    """Run-wide (max_stars, max_forks), each floored at 1."""
    max_stars = max([s.stars for s in snapshots], default=0)
    max_forks = max([s.forks for s in snapshots], default=0)
    return max(max_stars, 1), max(max_forks, 1)


def evaluate_repository(
    snapshot: RepositorySnapshot,
    bundle: EnrichmentBundle,
    max_stars: int,
    max_forks: int,
    now: datetime,
    config: SelectionConfig | None = None,
) -> ScoredRepository:
    """
    Build the scored form of one repository.

    Pure given its arguments: the run-wide maxima and reference time are
    passed in, never read from shared state.
    """
    config = config or SelectionConfig()

    primary, secondary, total_bytes, num_languages = extract_languages(
        bundle.languages
    )

    fallback = None
    if config.empty_commit_policy == "fallback":
        fallback = (snapshot.created_at, snapshot.pushed_at)
    timeline = build_active_blocks(
        (c.date for c in bundle.commits),
        gap_days=config.inactivity_gap_days,
        fallback=fallback,
    )

    ongoing = is_ongoing(snapshot.pushed_at, now, config.ongoing_threshold_days)
    start_date, end_date = display_span(
        timeline.blocks, snapshot.created_at, snapshot.pushed_at, ongoing, now
    )

    quality = score_quality(
        FactorContext(
            snapshot=snapshot,
            bundle=bundle,
            max_stars=max_stars,
            max_forks=max_forks,
            now=now,
        )
    )

    commit_count = len(bundle.commits)
    complexity = compute_complexity(
        total_bytes=total_bytes,
        num_languages=num_languages,
        commits_per_active_day=commit_count / max(1.0, timeline.active_days),
        keyword_hit=has_complexity_keywords(bundle.commits),
        active_days=timeline.active_days,
        active_block_count=len(timeline.blocks),
        has_issues=snapshot.has_issues,
        has_projects=snapshot.has_projects,
        has_wiki=snapshot.has_wiki,
    )

    return ScoredRepository(
        snapshot=snapshot,
        primary_language=primary,
        secondary_language=secondary,
        active_blocks=timeline.blocks,
        active_days=timeline.active_days,
        commit_count=commit_count,
        is_ongoing=ongoing,
        start_date=start_date,
        end_date=end_date,
        quality=quality,
        complexity=complexity,
    )


def rank_repositories(
    candidates: list[tuple[RepositorySnapshot, EnrichmentBundle]],
    max_repos: int,
    now: datetime,
    config: SelectionConfig | None = None,
) -> list[ScoredRepository]:
    """
    Score enriched candidates and select the final diversified list.

    The star/fork maxima are taken over all candidates before any repository
    is scored.
    """
    config = config or SelectionConfig()
    if not candidates:
        return []

    max_stars, max_forks = compute_run_maxima([snapshot for snapshot, _ in candidates])
    scored = [
        evaluate_repository(snapshot, bundle, max_stars, max_forks, now, config)
        for snapshot, bundle in candidates
    ]
    return select_diverse(
        rank_by_score(scored),
        target_size=max_repos,
        max_per_language=config.max_per_language,
        candidate_pool_size=config.candidate_pool_size,
    )


def clamp_max_repos(max_repos: int | None, config: SelectionConfig) -> int:
    """Clamp a requested output size to [1, max_repos_limit]."""
    if max_repos is None:
        max_repos = config.default_max_repos
    return min(max(max_repos, 1), config.max_repos_limit)


async def build_timeline(
    username: str,
    max_repos: int | None = None,
    provider=None,
    config: SelectionConfig | None = None,
    now: datetime | None = None,
    verbose: bool = False,
) -> list[ScoredRepository]:
    """
    Fetch, evaluate and select the best repositories of an account.

    Args:
        username: GitHub account name.
        max_repos: Requested output size, clamped to the configured limit.
        provider: GitHubProvider instance (created on demand).
        config: Selection configuration (loaded from config files by default).
        now: Reference time for recency and ongoing checks (default: now, UTC).
        verbose: Print notes for fields that could not be fetched.

    Returns:
        Selected repositories, highest score first.

    Raises:
        ValueError: If the account cannot be resolved or listed.
    """
    from repo_timeline.vcs.github import GitHubProvider

    config = config or get_selection_config()
    now = now or datetime.now(timezone.utc)
    provider = provider or GitHubProvider()

    snapshots = await provider.fetch_user_repos(username)
    survivors = filter_repositories(snapshots, username, config.min_size_kb)
    if not survivors:
        return []

    bundles = await provider.enrich_all(
        username, survivors, max_concurrency=config.max_concurrency, verbose=verbose
    )
    return rank_repositories(
        list(zip(survivors, bundles)),
        clamp_max_repos(max_repos, config),
        now,
        config,
    )

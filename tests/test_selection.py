"""
Tests for ranking and diversity-constrained selection.
"""

from collections import Counter

from repo_timeline.selection import rank_by_score, select_diverse


def test_rank_by_score_is_stable(make_scored):
    repos = [
        make_scored("a", "Go", 50.0),
        make_scored("b", "Go", 70.0),
        make_scored("c", "Rust", 50.0),
    ]
    assert [r.name for r in rank_by_score(repos)] == ["b", "a", "c"]


def test_language_cap_with_single_language_pool(make_scored):
    """Ten TypeScript candidates fill only two slots."""
    repos = [make_scored(f"ts-{i}", "TypeScript", 100.0 - i) for i in range(10)]
    repos += [make_scored("py-1", "Python", 40.0), make_scored("go-1", "Go", 30.0)]

    selected = select_diverse(rank_by_score(repos), target_size=5)

    assert [r.name for r in selected] == ["ts-0", "ts-1"]


def test_language_cap_fills_from_other_languages(make_scored):
    ranked = rank_by_score(
        [
            make_scored("ts-1", "TypeScript", 95.0),
            make_scored("ts-2", "TypeScript", 90.0),
            make_scored("ts-3", "TypeScript", 85.0),
            make_scored("py-1", "Python", 80.0),
            make_scored("ts-4", "TypeScript", 75.0),
            make_scored("go-1", "Go", 70.0),
            make_scored("rs-1", "Rust", 65.0),
        ]
    )

    selected = select_diverse(ranked, target_size=5)

    assert [r.name for r in selected] == ["ts-1", "ts-2", "py-1", "go-1", "rs-1"]
    counts = Counter(r.primary_language for r in selected)
    assert max(counts.values()) <= 2


def test_output_preserves_score_order(make_scored):
    ranked = rank_by_score(
        [make_scored(f"r{i}", lang, float(i)) for i, lang in enumerate("ABCABCAB")]
    )
    selected = select_diverse(ranked, target_size=5)
    scores = [r.final_score for r in selected]
    assert scores == sorted(scores, reverse=True)


def test_candidate_pool_limits_reach(make_scored):
    """Repositories ranked below the pool are never used to backfill."""
    repos = [make_scored(f"js-{i}", "JavaScript", 100.0 - i) for i in range(8)]
    repos.append(make_scored("go-late", "Go", 10.0))

    selected = select_diverse(rank_by_score(repos), target_size=5)

    assert [r.name for r in selected] == ["js-0", "js-1"]


def test_target_size_respected(make_scored):
    ranked = [make_scored(f"r{i}", f"L{i}", 100.0 - i) for i in range(8)]
    assert len(select_diverse(ranked, target_size=3)) == 3


def test_custom_cap_and_pool(make_scored):
    ranked = [make_scored(f"r{i}", "C", 100.0 - i) for i in range(5)]
    selected = select_diverse(
        ranked, target_size=5, max_per_language=3, candidate_pool_size=4
    )
    assert len(selected) == 3


def test_empty_input():
    assert select_diverse([], target_size=5) == []

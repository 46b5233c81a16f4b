"""Code quality heuristic factor."""

from collections.abc import Collection

from repo_timeline.scoring.base import FactorContext, FactorSpec

SOURCE_DIRS = frozenset(
    {
        "src",
        "lib",
        "app",
        "pkg",
        "internal",
        "cmd",
        "core",
        "modules",
        "packages",
        "components",
        "services",
    }
)

TEST_DIRS = frozenset(
    {"tests", "test", "__tests__", "spec", "testing", "e2e", "cypress"}
)

LINT_PREFIXES = (".eslint", ".prettier", "eslint", "prettier", ".stylelint")
LINT_FILES = frozenset(
    {
        ".flake8",
        "tslint.json",
        ".editorconfig",
        "biome.json",
        "rustfmt.toml",
        ".rubocop.yml",
        ".clang-format",
        "dprint.json",
    }
)


def has_source_layout(dirs: Collection[str]) -> bool:
    return any(d in SOURCE_DIRS for d in dirs)


def has_tests(files: Collection[str], dirs: Collection[str]) -> bool:
    return any(d in TEST_DIRS for d in dirs) or any(
        ".test." in f or ".spec." in f for f in files
    )


def has_lint_config(files: Collection[str]) -> bool:
    return any(f.startswith(LINT_PREFIXES) or f in LINT_FILES for f in files)


def score_code_quality(files: Collection[str], dirs: Collection[str]) -> float:
    """
    Scores code organisation on a 0-1 scale.

    Scoring:
    - Conventional source folder (src, lib, app, ...): 0.4
    - Test folder or *.test.* / *.spec.* files: 0.3
    - Lint or formatter configuration: 0.3
    """
    return (
        (1.0 if has_source_layout(dirs) else 0.0) * 0.4
        + (1.0 if has_tests(files, dirs) else 0.0) * 0.3
        + (1.0 if has_lint_config(files) else 0.0) * 0.3
    )


def _score(context: FactorContext) -> float:
    root = context.bundle.root
    return score_code_quality(root.files, root.dirs)


FACTORS = [FactorSpec(key="code_quality", name="Code Quality", scorer=_score)]

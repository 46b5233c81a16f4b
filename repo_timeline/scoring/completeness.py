"""Project completeness factor."""

from collections.abc import Collection

from repo_timeline.scoring.base import FactorContext, FactorSpec

MANIFEST_FILES = frozenset(
    {
        "package.json",
        "pom.xml",
        "setup.py",
        "requirements.txt",
        "go.mod",
        "cargo.toml",
        "build.gradle",
        "gemfile",
        "pyproject.toml",
        "composer.json",
        "mix.exs",
        "build.sbt",
        "deno.json",
    }
)

BUILD_FILES = frozenset(
    {
        "dockerfile",
        "docker-compose.yml",
        "docker-compose.yaml",
        "makefile",
        "justfile",
        "cmakelists.txt",
        "jenkinsfile",
        ".gitlab-ci.yml",
        "vercel.json",
        "netlify.toml",
        "fly.toml",
        "render.yaml",
        "procfile",
    }
)
BUILD_DIRS = frozenset({".github", ".circleci"})

CONFIG_DIRS = frozenset({"config", "configuration", "settings"})


def has_manifest(files: Collection[str]) -> bool:
    return any(f in MANIFEST_FILES for f in files)


def has_build_config(files: Collection[str], dirs: Collection[str]) -> bool:
    return any(f in BUILD_FILES for f in files) or any(d in BUILD_DIRS for d in dirs)


def has_ignore_file(files: Collection[str]) -> bool:
    return ".gitignore" in files


def has_env_config(files: Collection[str], dirs: Collection[str]) -> bool:
    return any(f.startswith(".env") or "config" in f for f in files) or any(
        d in CONFIG_DIRS for d in dirs
    )


def score_completeness(files: Collection[str], dirs: Collection[str]) -> float:
    """
    Scores structural completeness on a 0-1 scale.

    Fraction of four root-level checks that pass:
    - build or dependency manifest
    - container, build or CI configuration
    - .gitignore
    - environment or configuration artifact

    Names are expected in lowercase.
    """
    checks = [
        has_manifest(files),
        has_build_config(files, dirs),
        has_ignore_file(files),
        has_env_config(files, dirs),
    ]
    return sum(checks) / len(checks)


def _score(context: FactorContext) -> float:
    root = context.bundle.root
    return score_completeness(root.files, root.dirs)


FACTORS = [FactorSpec(key="completeness", name="Completeness", scorer=_score)]

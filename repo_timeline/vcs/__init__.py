"""
VCS access layer for Repo Timeline.

Fetches repository listings and per-repository signals from a hosting API.
"""

from repo_timeline.vcs.github import GitHubProvider, parse_repository_snapshot

__all__ = [
    "GitHubProvider",
    "parse_repository_snapshot",
]

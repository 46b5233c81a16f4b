"""
GitHub REST provider for Repo Timeline.

Lists an account's repositories and enriches each one with languages, commits,
tags, root listing and README signals. Every enrichment field fails
independently and degrades to its documented default.
"""

import asyncio
import base64
import re
from collections.abc import Awaitable
from typing import Any, TypeVar

import httpx
from rich.console import Console

from repo_timeline.config import get_github_token
from repo_timeline.http_client import _get_async_http_client
from repo_timeline.models import (
    CommitRecord,
    EnrichmentBundle,
    ReadmeInfo,
    RepositorySnapshot,
    RootListing,
    parse_timestamp,
)

console = Console(stderr=True)

GITHUB_API_BASE = "https://api.github.com"

REPOS_PER_PAGE = 100
MAX_REPO_PAGES = 5  # 500 repositories
COMMITS_SAMPLE = 100
TAGS_SAMPLE = 100

USAGE_SECTION_PATTERN = re.compile(
    r"\b(usage|getting started|installation|install|quick ?start|examples?|how to)\b",
    re.IGNORECASE,
)

# Errors a single field may raise; anything else is a bug and propagates.
FIELD_ERRORS = (httpx.HTTPError, ValueError, TypeError, KeyError, AttributeError)

T = TypeVar("T")


def parse_repository_snapshot(data: dict[str, Any]) -> RepositorySnapshot:
    """Normalize a repository object from the GitHub REST API."""
    return RepositorySnapshot(
        name=data.get("name", ""),
        created_at=parse_timestamp(data.get("created_at")),
        updated_at=parse_timestamp(data.get("updated_at")),
        pushed_at=parse_timestamp(data.get("pushed_at")),
        is_fork=bool(data.get("fork", False)),
        is_archived=bool(data.get("archived", False)),
        has_issues=bool(data.get("has_issues", False)),
        has_projects=bool(data.get("has_projects", False)),
        has_wiki=bool(data.get("has_wiki", False)),
        size_kb=data.get("size") or 0,
        stars=data.get("stargazers_count") or 0,
        forks=data.get("forks_count") or 0,
        open_issues=data.get("open_issues_count") or 0,
        has_license=data.get("license") is not None,
        description=data.get("description"),
        url=data.get("html_url", ""),
    )


def summarize_readme(text: str) -> ReadmeInfo:
    """Describe README text by length and presence of a usage section."""
    return ReadmeInfo(
        exists=True,
        length=len(text),
        has_usage_section=bool(USAGE_SECTION_PATTERN.search(text)),
    )


def split_root_listing(items: list[dict[str, Any]]) -> RootListing:
    """Split a contents listing into lowercase file and directory names."""
    files = frozenset(
        item["name"].lower() for item in items if item.get("type") == "file"
    )
    dirs = frozenset(
        item["name"].lower() for item in items if item.get("type") == "dir"
    )
    return RootListing(files=files, dirs=dirs)


def _commit_record(item: dict[str, Any]) -> CommitRecord:
    commit = item.get("commit") or {}
    author = commit.get("author") or {}
    committer = commit.get("committer") or {}
    return CommitRecord(
        date=author.get("date") or committer.get("date") or "",
        message=commit.get("message") or "",
    )


class GitHubProvider:
    """GitHub provider using the REST API."""

    def __init__(
        self,
        token: str | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize GitHub provider.

        Args:
            token: GitHub Personal Access Token. If not provided, reads from
                   GITHUB_TOKEN environment variable. Anonymous access works
                   with a lower rate limit.
            client: Optional httpx client. Defaults to the shared pooled client.
        """
        self.token = token or get_github_token()
        self._client = client

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "repo-timeline",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        return await _get_async_http_client()

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        client = await self._get_client()
        return await client.get(
            f"{GITHUB_API_BASE}{path}", params=params, headers=self._headers()
        )

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        response = await self._get(path, params)
        response.raise_for_status()
        return response.json()

    async def fetch_user_repos(self, username: str) -> list[RepositorySnapshot]:
        """
        List the public repositories owned by an account.

        Raises:
            ValueError: If the account does not exist, the rate limit is hit,
                or the API returns any other error.
        """
        snapshots: list[RepositorySnapshot] = []

        for page in range(1, MAX_REPO_PAGES + 1):
            response = await self._get(
                f"/users/{username}/repos",
                {
                    "per_page": REPOS_PER_PAGE,
                    "page": page,
                    "sort": "created",
                    "direction": "asc",
                    "type": "owner",
                },
            )
            if response.status_code == 404:
                raise ValueError(f'GitHub user "{username}" not found.')
            if response.status_code == 403:
                raise ValueError(
                    "GitHub API rate limit exceeded. Try again later or set GITHUB_TOKEN."
                )
            if response.is_error:
                raise ValueError(
                    f"GitHub API error: {response.status_code} {response.reason_phrase}"
                )

            repos = response.json()
            snapshots.extend(parse_repository_snapshot(repo) for repo in repos)
            if len(repos) < REPOS_PER_PAGE:
                break

        return snapshots

    async def fetch_languages(self, owner: str, repo: str) -> dict[str, int]:
        data = await self._get_json(f"/repos/{owner}/{repo}/languages")
        return {str(lang): int(size) for lang, size in data.items()}

    async def fetch_commits(self, owner: str, repo: str) -> tuple[CommitRecord, ...]:
        """Fetch the most recent commits (newest first) as (date, message) records."""
        data = await self._get_json(
            f"/repos/{owner}/{repo}/commits", {"per_page": COMMITS_SAMPLE}
        )
        return tuple(_commit_record(item) for item in data)

    async def fetch_tags_count(self, owner: str, repo: str) -> int:
        data = await self._get_json(
            f"/repos/{owner}/{repo}/tags", {"per_page": TAGS_SAMPLE}
        )
        return len(data)

    async def fetch_root_listing(self, owner: str, repo: str) -> RootListing:
        data = await self._get_json(f"/repos/{owner}/{repo}/contents")
        return split_root_listing(data)

    async def fetch_readme(self, owner: str, repo: str) -> ReadmeInfo:
        response = await self._get(f"/repos/{owner}/{repo}/readme")
        if response.status_code == 404:
            return ReadmeInfo()
        response.raise_for_status()
        content = response.json().get("content") or ""
        text = base64.b64decode(content).decode("utf-8", errors="replace")
        return summarize_readme(text)

    async def _with_default(
        self,
        fetch: Awaitable[T],
        default: T,
        repo: str,
        field: str,
        verbose: bool,
    ) -> T:
        try:
            return await fetch
        except FIELD_ERRORS as e:
            if verbose:
                console.print(f"  [dim]Note: {field} unavailable for {repo} ({e})[/dim]")
            return default

    async def enrich_repository(
        self,
        owner: str,
        snapshot: RepositorySnapshot,
        verbose: bool = False,
    ) -> EnrichmentBundle:
        """Fetch every enrichment field of one repository concurrently."""
        repo = snapshot.name
        defaults = EnrichmentBundle._field_defaults
        languages, commits, tags_count, root, readme = await asyncio.gather(
            self._with_default(
                self.fetch_languages(owner, repo),
                defaults["languages"],
                repo,
                "languages",
                verbose,
            ),
            self._with_default(
                self.fetch_commits(owner, repo),
                defaults["commits"],
                repo,
                "commits",
                verbose,
            ),
            self._with_default(
                self.fetch_tags_count(owner, repo), 0, repo, "tags", verbose
            ),
            self._with_default(
                self.fetch_root_listing(owner, repo),
                RootListing(),
                repo,
                "root listing",
                verbose,
            ),
            self._with_default(
                self.fetch_readme(owner, repo), ReadmeInfo(), repo, "README", verbose
            ),
        )
        return EnrichmentBundle(
            languages=languages,
            commits=commits,
            tags_count=tags_count,
            readme=readme,
            root=root,
        )

    async def enrich_all(
        self,
        owner: str,
        snapshots: list[RepositorySnapshot],
        max_concurrency: int = 8,
        verbose: bool = False,
    ) -> list[EnrichmentBundle]:
        """
        Enrich many repositories with at most ``max_concurrency`` in flight.

        Results are returned in the order of ``snapshots``.
        """
        semaphore = asyncio.Semaphore(max_concurrency)

        async def _bounded(snapshot: RepositorySnapshot) -> EnrichmentBundle:
            async with semaphore:
                return await self.enrich_repository(owner, snapshot, verbose)

        return list(await asyncio.gather(*(_bounded(s) for s in snapshots)))

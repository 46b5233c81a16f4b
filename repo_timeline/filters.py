"""Hard elimination of structurally ineligible repositories."""

from repo_timeline.models import RepositorySnapshot

DEFAULT_MIN_SIZE_KB = 100


def is_eligible(
    snapshot: RepositorySnapshot,
    username: str,
    min_size_kb: int = DEFAULT_MIN_SIZE_KB,
) -> bool:
    """
    Check a repository against the elimination rules.

    A repository is dropped if ANY of these holds:
    - its name equals the account name (profile README repository)
    - it is a fork
    - it is archived
    - its size is below ``min_size_kb`` kilobytes
    """
    if snapshot.name.lower() == username.lower():
        return False
    if snapshot.is_fork:
        return False
    if snapshot.is_archived:
        return False
    if snapshot.size_kb < min_size_kb:
        return False
    return True


def filter_repositories(
    snapshots: list[RepositorySnapshot],
    username: str,
    min_size_kb: int = DEFAULT_MIN_SIZE_KB,
) -> list[RepositorySnapshot]:
    """Return the eligible repositories, preserving input order."""
    return [s for s in snapshots if is_eligible(s, username, min_size_kb)]

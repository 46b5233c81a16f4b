"""
Command-line interface for Repo Timeline.
"""

import asyncio
import json
import re

import typer
from rich.console import Console
from rich.table import Table

from repo_timeline.config import (
    SelectionConfig,
    get_selection_config,
    set_verify_ssl,
)
from repo_timeline.core import build_timeline
from repo_timeline.http_client import close_async_http_client
from repo_timeline.models import ScoredRepository
from repo_timeline.scoring import FACTOR_WEIGHTS, load_factor_specs

MAX_USERNAME_LENGTH = 39

# --- Typer App ---
app = typer.Typer()
console = Console()

# --- Helper Functions ---


def sanitize_username(username: str) -> str:
    """
    Strip everything but letters, digits and hyphens.

    Raises:
        ValueError: If nothing valid remains or the name is too long.
    """
    sanitized = re.sub(r"[^a-zA-Z0-9\-]", "", username.strip())
    if not sanitized or len(sanitized) > MAX_USERNAME_LENGTH:
        raise ValueError("Invalid GitHub username")
    return sanitized


def _format_days(days: float) -> str:
    if days >= 365:
        return f"{days / 365:.1f}y"
    return f"{days:.0f}d"


def display_results(results: list[ScoredRepository], username: str):
    """Display the selected repositories in a rich table."""
    table = Table(title=f"Project Timeline: {username}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Repository", justify="left", style="cyan", no_wrap=True)
    table.add_column("Languages", justify="left")
    table.add_column("Score", justify="center", style="magenta")
    table.add_column("Complexity", justify="left")
    table.add_column("Active", justify="right")
    table.add_column("Blocks", justify="right")
    table.add_column("Stars", justify="right", style="yellow")
    table.add_column("Span", justify="left")

    for rank, repo in enumerate(results, start=1):
        score_color = "green"
        if repo.final_score < 40:
            score_color = "red"
        elif repo.final_score < 70:
            score_color = "yellow"

        languages = repo.primary_language
        if repo.secondary_language:
            languages += f" / {repo.secondary_language}"

        start = repo.start_date.strftime("%Y-%m") if repo.start_date else "?"
        if repo.is_ongoing:
            end = "[green]now ●[/green]"
        else:
            end = repo.end_date.strftime("%Y-%m") if repo.end_date else "?"

        table.add_row(
            str(rank),
            repo.name,
            languages,
            f"[{score_color}]{repo.final_score:.2f}[/{score_color}]",
            f"{repo.complexity.label} ({repo.complexity.score})",
            _format_days(repo.active_days),
            str(len(repo.active_blocks)),
            f"⭐ {repo.snapshot.stars}",
            f"{start} → {end}",
        )

    console.print(table)


def display_results_detailed(results: list[ScoredRepository]):
    """Display per-factor scores and active blocks for each repository."""
    specs = load_factor_specs()
    for repo in results:
        console.print(
            f"\n📦 [bold cyan]{repo.name}[/bold cyan] "
            f"[dim]{repo.snapshot.url}[/dim]"
        )
        if repo.snapshot.description:
            console.print(f"   {repo.snapshot.description}")

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Factor", style="cyan")
        table.add_column("Weight", justify="right")
        table.add_column("Score", justify="right")
        table.add_column("Contribution", justify="right")
        for spec in specs:
            value = getattr(repo.quality, spec.key)
            weight = FACTOR_WEIGHTS[spec.key]
            table.add_row(
                spec.name,
                f"{weight:.0%}",
                f"{value:.2f}",
                f"{value * weight * 100:.2f}",
            )
        table.add_row("[bold]Total[/bold]", "", "", f"[bold]{repo.final_score:.2f}[/bold]")
        console.print(table)

        if repo.active_blocks:
            console.print("   Active blocks:")
            for block in repo.active_blocks:
                console.print(
                    f"   • {block.start:%Y-%m-%d} → {block.end:%Y-%m-%d} "
                    f"[dim]({block.duration_days:.1f} days)[/dim]"
                )
        else:
            console.print("   [dim]No commit activity found.[/dim]")


async def _run_timeline(
    username: str, max_repos: int | None, config: SelectionConfig, verbose: bool
):
    try:
        return await build_timeline(
            username, max_repos=max_repos, config=config, verbose=verbose
        )
    finally:
        await close_async_http_client()


@app.command()
def show(
    username: str = typer.Argument(..., help="GitHub account to analyze."),
    max_repos: int | None = typer.Option(
        None,
        "--max",
        "-n",
        help="Number of repositories to select (default: 5, at most 10).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Display per-factor scores and active blocks for each repository.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the selection as JSON.",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Disable SSL certificate verification for HTTPS requests.",
    ),
):
    """Select and rank the best repositories of a GitHub account."""
    set_verify_ssl(not insecure)

    try:
        sanitized = sanitize_username(username)
        config = get_selection_config()
    except ValueError as e:
        console.print(f"[yellow]⚠️  {e}[/yellow]")
        raise typer.Exit(code=1) from None

    if not as_json:
        console.print(f"🔍 Analyzing repositories of [bold]{sanitized}[/bold]...")

    try:
        results = asyncio.run(_run_timeline(sanitized, max_repos, config, verbose))
    except ValueError as e:
        console.print(f"[yellow]⚠️  {e}[/yellow]")
        raise typer.Exit(code=1) from None

    if as_json:
        typer.echo(json.dumps([r.to_dict() for r in results], indent=2))
        return

    if not results:
        console.print("No eligible repositories found.")
        return

    display_results(results, sanitized)
    if verbose:
        display_results_detailed(results)


@app.command()
def weights():
    """Display the quality factors and their weights."""
    table = Table(title="Quality Factors")
    table.add_column("Factor", style="cyan")
    table.add_column("Weight", justify="right", style="magenta")
    for spec in load_factor_specs():
        table.add_row(spec.name, f"{FACTOR_WEIGHTS[spec.key]:.0%}")
    console.print(table)


if __name__ == "__main__":
    app()

"""
Rendering functions for kodo output.

This module handles all pretty-printing and table formatting.
Services return data, this module makes it human-readable.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from typing import List, Optional

from .domain.activity import Activity
from .services.activity_service import summarize

console = Console()


def build_activity_table(activities: List[Activity], title: Optional[str] = None) -> Table:
    """Build the ID / Name / Duration / Date table used by list and filter."""
    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )

    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Duration (mins)", justify="right", style="yellow")
    table.add_column("Date", style="dim")

    for activity in activities:
        table.add_row(
            str(activity.id),
            activity.name,
            str(activity.duration_minutes),
            activity.date
        )

    return table


def render_activity_list(activities: List[Activity]) -> None:
    """
    Render all activities, longest first, with the total.

    Args:
        activities: Activities in store order
    """
    if not activities:
        console.print("[yellow]No activities recorded yet.[/yellow]")
        return

    ordered = sorted(activities, key=lambda a: a.duration_minutes, reverse=True)
    console.print(build_activity_table(ordered, title="Activities"))
    console.print(f"Total minutes: [bold]{summarize(activities).total_minutes}[/bold]")


def render_filtered(activities: List[Activity]) -> None:
    """
    Render a filter result with total and average.

    Args:
        activities: Activities that matched the bounds
    """
    if not activities:
        console.print("[yellow]No activities match the filter criteria.[/yellow]")
        return

    summary = summarize(activities)
    console.print(build_activity_table(activities, title="Filtered activities"))
    console.print(f"Total minutes: [bold]{summary.total_minutes}[/bold]")
    console.print(f"Average minutes: [bold]{summary.average_minutes:.2f}[/bold]")


def render_commit_activities(activities: List[Activity], repository: str) -> None:
    """
    Render commit-derived activities, newest first.

    Args:
        activities: Output of CommitService.fetch
        repository: Repository the commits came from
    """
    if not activities:
        console.print(f"[yellow]No commits found in {repository}.[/yellow]")
        return

    console.print(build_activity_table(activities, title=f"Commits in {repository}"))
    console.print(f"Estimated minutes: [bold]{summarize(activities).total_minutes}[/bold]")

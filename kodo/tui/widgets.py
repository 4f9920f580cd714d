"""
Render surface for the dashboard.

Builders turn activities into rich renderables; TextualSurface paints
them into the named Static regions of a running textual app.
"""

from typing import Dict, List, Optional

from rich import box
from rich.console import RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from textual.app import App
from textual.widgets import Static

from ..domain.activity import Activity

BAR_CHAR = "█"
SELECTED_STYLE = "on blue"
STRIPE_STYLE = "on grey23"


def activity_table(activities: List[Activity], selected: int,
                   title: str = "Activities") -> Table:
    """
    Build the activity table with the selected row highlighted.

    Args:
        activities: Rows in display order
        selected: Index of the highlighted row (ignored when out of range)
        title: Table title

    Returns:
        Rich Table
    """
    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold yellow",
        expand=True,
    )

    table.add_column("ID", justify="right", width=5)
    table.add_column("Name", ratio=1, overflow="ellipsis", no_wrap=True)
    table.add_column("Duration", justify="right", width=10)
    table.add_column("Date", width=12)

    for i, activity in enumerate(activities):
        if i == selected:
            style = SELECTED_STYLE
        elif i % 2 == 0:
            style = STRIPE_STYLE
        else:
            style = None

        table.add_row(
            str(activity.id),
            activity.name,
            f"{activity.duration_minutes} min",
            activity.date,
            style=style,
        )

    return table


def bar_length(minutes: int, scale: int, width: int) -> int:
    """Bar length for a value on a chart whose full width is ``scale``."""
    return round(width * minutes / max(scale, 1))


def duration_chart(activities: List[Activity], width: int = 40) -> Optional[Panel]:
    """
    Build a horizontal bar chart of durations, longest first.

    The chart is scaled to the longest activity (at least 1 minute).

    Returns:
        Rich Panel, or None when there is nothing to chart
    """
    if not activities:
        return None

    scale = max(max(a.duration_minutes for a in activities), 1)
    label_width = min(max(len(a.name) for a in activities), 24)
    ordered = sorted(activities, key=lambda a: a.duration_minutes, reverse=True)

    chart = Text()
    for i, activity in enumerate(ordered):
        if i:
            chart.append("\n")
        label = activity.name[:label_width].ljust(label_width)
        chart.append(f"{label} ", style="bold")
        chart.append(BAR_CHAR * bar_length(activity.duration_minutes, scale, width), style="cyan")
        chart.append(f" {activity.duration_minutes}", style="yellow")

    return Panel(chart, title="Activity Duration Stats", border_style="cyan")


REGIONS = ("header", "table", "stats", "footer")


class TextualSurface:
    """
    Paints frames into an app composed of Static widgets whose ids are
    the region names (header, table, stats, footer).

    The widgets are looked up once, so painting keeps working while
    another screen is pushed on top of the dashboard.
    """

    def __init__(self, app: App):
        self.regions: Dict[str, Static] = {
            region: app.query_one(f"#{region}", Static) for region in REGIONS
        }

    def _update(self, region: str, renderable: RenderableType) -> None:
        self.regions[region].update(renderable)

    def split_body(self, with_stats: bool) -> None:
        self.regions["stats"].display = with_stats

    def draw_table(self, region: str, activities: List[Activity], selected: int) -> None:
        self._update(region, activity_table(activities, selected))

    def draw_stats(self, region: str, activities: List[Activity]) -> None:
        chart = duration_chart(activities)
        self._update(region, chart if chart is not None else "")

    def draw_text(self, region: str, text: str) -> None:
        self._update(region, Text(text))

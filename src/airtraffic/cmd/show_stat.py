"""Statistics table display.

This module renders decoded ``show stat`` records as a Rich table with a
fixed selection of columns. Columns a record does not carry are shown as
``-``.

Example:
    show_stats(client.stat(statable=StatableFilter.SERVERS))
"""

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from airtraffic.core.lib.stats import STAT_COLUMNS, StatsRecord

console = Console()

# (accessor, heading)
DISPLAY_COLUMNS = [
    ("pxname", "Proxy"),
    ("svname", "Server"),
    ("status", "Status"),
    ("weight", "Weight"),
    ("scur", "Sessions"),
    ("rate", "Rate"),
    ("check_status", "Check"),
]

STATUS_STYLES = {
    "UP": "green",
    "OPEN": "green",
    "DOWN": "red",
    "MAINT": "yellow",
    "DRAIN": "yellow",
}


def _status_cell(value: str) -> str:
    style = STATUS_STYLES.get(value.split(" ")[0])
    return f"[{style}]{value}[/{style}]" if style else value


def build_stats_table(records: Sequence[StatsRecord], title: str = "Proxy Statistics") -> Table:
    """Build a table for the given records.

    Args:
        records: Decoded statistics rows
        title: Table title

    Returns:
        Table: Table with one row per record
    """
    table = Table(title=title)
    for _, heading in DISPLAY_COLUMNS:
        table.add_column(heading, style="cyan" if heading in ("Proxy", "Server") else None)

    for record in records:
        cells = []
        for accessor, _ in DISPLAY_COLUMNS:
            value = record.get(STAT_COLUMNS.get(accessor, accessor), "-")
            cells.append(_status_cell(value) if accessor == "status" else value)
        table.add_row(*cells)
    return table


def show_stats(records: Sequence[StatsRecord]) -> None:
    """Print records as a table, or a notice when there are none."""
    if not records:
        console.print("[yellow]No statistics returned")
        return
    console.print(build_stats_table(records))

"""
Previews and confirmation prompts shown before work time is logged
"""

from typing import Sequence

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from durations import format_duration, round_to_minutes
from entry import Entry

console = Console()

DISPLAY_FORMAT = "%Y-%m-%d %H:%M"
MAX_PREVIEW_ROWS = 50


def display_entries_preview(entries: Sequence[Entry]) -> None:
    """Display a table of entries about to be logged"""
    if not entries:
        console.print("[yellow]No entries to log[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Start", style="green")
    table.add_column("End", style="green")
    table.add_column("Duration", style="yellow", justify="right")

    for i, entry in enumerate(entries[:MAX_PREVIEW_ROWS]):
        duration = round_to_minutes(entry.duration)
        table.add_row(
            str(i),
            entry.start.strftime(DISPLAY_FORMAT),
            entry.end.strftime(DISPLAY_FORMAT),
            f"[red]{format_duration(duration)}[/red]" if duration.total_seconds() < 0 else format_duration(duration),
        )

    if len(entries) > MAX_PREVIEW_ROWS:
        table.add_row("...", "...", "...", f"{len(entries) - MAX_PREVIEW_ROWS} more")

    console.print(table)


def confirm_entry(entry: Entry) -> bool:
    """
    Ask whether a single entry should be logged.

    Returns:
        True if the user approved, False otherwise. Defaults to no.
    """
    console.print()
    console.print(
        Panel(
            f"Start:     [green]{entry.start.strftime(DISPLAY_FORMAT)}[/green]\n"
            f"End:       [green]{entry.end.strftime(DISPLAY_FORMAT)}[/green]\n"
            f"Duration:  [yellow]{format_duration(round_to_minutes(entry.duration))}[/yellow]",
            border_style="yellow",
            title="[bold]Work time to log[/bold]",
            title_align="left",
        )
    )
    return click.confirm("Do you want to log this work time?", default=False)

"""
RESULT block display for player snapshots and failures.
"""

from typing import Any, Optional

from rich.table import Table
from rich.text import Text

from ..player.models import PLAYER_FIELDS, PlayerSnapshot
from .console import ProbeConsole, get_console


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float):
        return f"{value:g}"
    str_value = str(value)
    if len(str_value) > 100:
        str_value = str_value[:97] + "..."
    return str_value


def print_snapshot(
    snapshot: PlayerSnapshot,
    *,
    title: Optional[str] = None,
    console: Optional[ProbeConsole] = None,
) -> None:
    """
    Print a player snapshot as a two-column table.

    Args:
        snapshot: Snapshot to display
        title: Custom title (overrides default "[SNAPSHOT]")
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Field", style="dim")
    table.add_column("Value")

    for field in PLAYER_FIELDS:
        value = getattr(snapshot, field.attribute)
        if field.attribute == "dimensions" and value is not None:
            value = f"{_format_value(value.width)} x {_format_value(value.height)}"
        table.add_row(field.key, _format_value(value))

    console.print_block(table, "result", title or "[SNAPSHOT]")


def print_error(
    error_message: str,
    *,
    error_type: Optional[str] = None,
    suggestion: Optional[str] = None,
    console: Optional[ProbeConsole] = None,
) -> None:
    """
    Print an error result block.

    Args:
        error_message: The error message
        error_type: Type/category of error
        suggestion: Suggestion for resolution
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    content = Text()
    content.append("Error", style="bold red")
    if error_type:
        content.append(f" ({error_type})", style="dim red")
    content.append("\n\n")
    content.append(error_message)

    if suggestion:
        content.append("\n\n")
        content.append(suggestion, style="italic")

    console.print_block(content, "result")

"""
Rich TUI Interface Module

Provides terminal output for the player probe CLI.
Uses the Rich library for formatted, colorful output.
"""

from player_probe.tui.console import (
    BlockType,
    ProbeConsole,
    TUIConfig,
    create_console,
    get_console,
)
from player_probe.tui.result import (
    print_error,
    print_snapshot,
)

__all__ = [
    "BlockType",
    "ProbeConsole",
    "TUIConfig",
    "create_console",
    "get_console",
    "print_error",
    "print_snapshot",
]

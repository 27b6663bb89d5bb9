"""
Rich TUI Console Setup

Provides the core console infrastructure for the player probe CLI.
Configured via environment variables for customizable appearance.
"""

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Optional

from rich.console import Console
from rich.panel import Panel
from rich.style import Style
from rich.theme import Theme


# Block types for probe output
BlockType = Literal["action", "result"]


@dataclass
class TUIConfig:
    """
    TUI configuration loaded from environment variables.

    Attributes:
        color_action: Color for ACTION blocks (browser steps)
        color_result: Color for RESULT blocks (snapshots)
        show_timestamps: Whether to display timestamps
    """

    color_action: str = "green"
    color_result: str = "yellow"
    show_timestamps: bool = True

    @classmethod
    def from_env(cls) -> "TUIConfig":
        """Load configuration from environment variables."""
        return cls(
            color_action=os.getenv("COLOR_ACTION", "green"),
            color_result=os.getenv("COLOR_RESULT", "yellow"),
            show_timestamps=os.getenv("SHOW_TIMESTAMPS", "true").lower() == "true",
        )


def create_theme(config: TUIConfig) -> Theme:
    """Create a Rich theme from TUI configuration."""
    return Theme(
        {
            "action": Style(color=config.color_action, bold=True),
            "action.text": Style(color=config.color_action),
            "result": Style(color=config.color_result, bold=True),
            "result.text": Style(color=config.color_result),
            "timestamp": Style(dim=True),
            "label": Style(bold=True),
        }
    )


class ProbeConsole:
    """
    Rich console wrapper for player probe output.

    Provides formatted output for browser steps and snapshot results
    with consistent styling and optional timestamps.
    """

    def __init__(self, config: Optional[TUIConfig] = None, console: Optional[Console] = None):
        """
        Initialize the probe console.

        Args:
            config: TUI configuration. If None, loads from environment.
            console: Rich console to write to (stdout if None)
        """
        self.config = config or TUIConfig.from_env()
        self._theme = create_theme(self.config)
        self.console = console or Console(theme=self._theme)

    def _get_timestamp(self) -> str:
        """Get formatted timestamp if enabled."""
        if self.config.show_timestamps:
            return datetime.now().strftime("%H:%M:%S")
        return ""

    def _get_block_style(self, block_type: BlockType) -> tuple[str, str]:
        """Get the style and label for a block type."""
        styles = {
            "action": (self.config.color_action, "ACTION"),
            "result": (self.config.color_result, "RESULT"),
        }
        return styles[block_type]

    def block_title(self, label: str) -> str:
        """Prefix a block title with the timestamp, if enabled."""
        timestamp = self._get_timestamp()
        if timestamp:
            return f"{timestamp} {label}"
        return label

    def print_block(
        self,
        content,
        block_type: BlockType,
        title: Optional[str] = None,
    ) -> None:
        """
        Print a styled block to the console.

        Args:
            content: Text or renderable to display
            block_type: Type of block (action, result)
            title: Optional title to override default label
        """
        color, label = self._get_block_style(block_type)

        panel = Panel(
            content,
            title=self.block_title(title or f"[{label}]"),
            title_align="left",
            border_style=color,
            padding=(0, 1),
        )
        self.console.print(panel)

    def print_action(self, content: str, title: Optional[str] = None) -> None:
        """Print an ACTION block (browser step)."""
        self.print_block(content, "action", title)

    def print(self, *args, **kwargs) -> None:
        """Passthrough to underlying Rich console."""
        self.console.print(*args, **kwargs)


# Global console instance
_console: Optional[ProbeConsole] = None


def get_console() -> ProbeConsole:
    """Get or create the global console instance."""
    global _console
    if _console is None:
        _console = ProbeConsole()
    return _console


def create_console(
    config: Optional[TUIConfig] = None,
    console: Optional[Console] = None,
) -> ProbeConsole:
    """
    Create a new console instance with optional configuration.

    Args:
        config: TUI configuration. If None, loads from environment.
        console: Rich console to write to (stdout if None)
    """
    return ProbeConsole(config, console)

"""
Player Probe

Drives a browser-embedded video player through Playwright and exposes
snapshots of its internal playback state to test suites.
"""

from .browser import AutomationSession, BrowserConfig, BrowserController, create_browser
from .config import ProbeConfig, configure_logging, get_logger
from .player import CaptureStrategy, PlayerHandle, PlayerOptions, PlayerSnapshot

__version__ = "0.1.0"

__all__ = [
    "AutomationSession",
    "BrowserConfig",
    "BrowserController",
    "create_browser",
    "ProbeConfig",
    "configure_logging",
    "get_logger",
    "CaptureStrategy",
    "PlayerHandle",
    "PlayerOptions",
    "PlayerSnapshot",
]

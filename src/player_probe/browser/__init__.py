"""
Browser Automation Module

Provides Playwright browser management and the automation session the
player probe drives.
"""

from .controller import BrowserController, BrowserConfig, create_browser
from .session import AutomationSession

__all__ = [
    "BrowserController",
    "BrowserConfig",
    "create_browser",
    "AutomationSession",
]

"""
Browser Controller

Manages the Playwright browser instance the probe drives, with
configurable options read from the environment.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Literal

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)
from dotenv import load_dotenv

from .session import AutomationSession

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


BrowserType = Literal["chromium", "firefox", "webkit"]


@dataclass
class BrowserConfig:
    """
    Configuration for browser instance.

    Reads from environment variables with sensible defaults.
    """

    # Browser type (chromium is Playwright's Chrome-based browser)
    browser_type: BrowserType = "chromium"

    # Headless mode - players behave closest to real usage when visible
    headless: bool = False

    # Viewport size
    viewport_width: int = 1280
    viewport_height: int = 720

    # Slow motion delay in ms (useful for debugging)
    slow_mo: int = 0

    # Default timeout for element waits in ms
    page_load_timeout: int = 30000

    # Navigation timeout in ms
    navigation_timeout: int = 30000

    # Let media start without a user gesture so autoplay can be observed
    allow_autoplay: bool = True

    @classmethod
    def from_env(cls) -> "BrowserConfig":
        """
        Create BrowserConfig from environment variables.

        Environment variables:
            BROWSER_TYPE: chromium, firefox, or webkit (default: chromium)
            BROWSER_HEADLESS: true/false (default: false)
            BROWSER_VIEWPORT_WIDTH: int (default: 1280)
            BROWSER_VIEWPORT_HEIGHT: int (default: 720)
            BROWSER_SLOW_MO: int in ms (default: 0)
            PAGE_LOAD_TIMEOUT: int in ms (default: 30000)
            NAVIGATION_TIMEOUT: int in ms (default: 30000)
            BROWSER_ALLOW_AUTOPLAY: true/false (default: true)
        """
        # Map config browser type to Playwright's expected values
        env_type = os.getenv("BROWSER_TYPE", "chrome").lower()
        browser_type_map = {
            "chrome": "chromium",
            "chromium": "chromium",
            "firefox": "firefox",
            "webkit": "webkit",
            "safari": "webkit",
        }
        browser_type = browser_type_map.get(env_type, "chromium")

        headless_str = os.getenv("BROWSER_HEADLESS", "false").lower()
        headless = headless_str in ("true", "1", "yes")

        autoplay_str = os.getenv("BROWSER_ALLOW_AUTOPLAY", "true").lower()
        allow_autoplay = autoplay_str in ("true", "1", "yes")

        return cls(
            browser_type=browser_type,
            headless=headless,
            viewport_width=int(os.getenv("BROWSER_VIEWPORT_WIDTH", "1280")),
            viewport_height=int(os.getenv("BROWSER_VIEWPORT_HEIGHT", "720")),
            slow_mo=int(os.getenv("BROWSER_SLOW_MO", "0")),
            page_load_timeout=int(os.getenv("PAGE_LOAD_TIMEOUT", "30000")),
            navigation_timeout=int(os.getenv("NAVIGATION_TIMEOUT", "30000")),
            allow_autoplay=allow_autoplay,
        )


class BrowserController:
    """
    Controls the Playwright browser instance.

    The controller owns the browser; sessions opened from it borrow the
    current page and must not outlive the controller.

    Usage:
        >>> async with BrowserController() as browser:
        ...     session = browser.open_session()
        ...     await session.navigate("https://example.com")
    """

    def __init__(self, config: Optional[BrowserConfig] = None):
        """
        Initialize browser controller.

        Args:
            config: Browser configuration (uses env if None)
        """
        self.config = config or BrowserConfig.from_env()

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._pages: list[Page] = []

    @property
    def current_page(self) -> Optional[Page]:
        """Get the most recently created page."""
        if self._pages:
            return self._pages[-1]
        return None

    async def initialize(self) -> None:
        """Initialize Playwright, launch the browser and open a first page."""
        if self._playwright is not None:
            return

        self._playwright = await async_playwright().start()

        launcher = self._get_browser_launcher()

        launch_options = {
            "headless": self.config.headless,
            "slow_mo": self.config.slow_mo,
        }
        if self.config.allow_autoplay and self.config.browser_type == "chromium":
            launch_options["args"] = ["--autoplay-policy=no-user-gesture-required"]

        logger.debug(
            "Launching %s (headless=%s)", self.config.browser_type, self.config.headless
        )
        self._browser = await launcher.launch(**launch_options)
        self._context = await self._browser.new_context(
            viewport={
                "width": self.config.viewport_width,
                "height": self.config.viewport_height,
            },
        )
        self._context.set_default_timeout(self.config.page_load_timeout)
        self._context.set_default_navigation_timeout(self.config.navigation_timeout)

        page = await self._context.new_page()
        self._pages.append(page)

    def _get_browser_launcher(self):
        """Get the appropriate browser launcher based on config."""
        if self._playwright is None:
            raise RuntimeError("Playwright not initialized")

        launchers = {
            "chromium": self._playwright.chromium,
            "firefox": self._playwright.firefox,
            "webkit": self._playwright.webkit,
        }
        return launchers.get(self.config.browser_type, self._playwright.chromium)

    def open_session(
        self,
        page: Optional[Page] = None,
        element_timeout_ms: Optional[int] = None,
    ) -> AutomationSession:
        """
        Open an automation session on a page.

        Args:
            page: Page to drive (current page if None)
            element_timeout_ms: Element wait timeout (context default if None)

        Returns:
            AutomationSession addressing the page's main frame
        """
        target = page or self.current_page
        if target is None:
            raise RuntimeError("Browser not initialized. Use 'async with' or initialize().")
        return AutomationSession(target, element_timeout_ms=element_timeout_ms)

    async def close(self) -> None:
        """Close the browser and cleanup resources."""
        for page in self._pages[:]:
            try:
                await page.close()
            except Exception as e:
                logger.debug(f"Ignoring error while closing page: {e}")
        self._pages.clear()

        if self._context:
            try:
                await self._context.close()
            except Exception as e:
                logger.debug(f"Ignoring error while closing context: {e}")
            self._context = None

        if self._browser:
            try:
                await self._browser.close()
            except Exception as e:
                logger.debug(f"Ignoring error while closing browser: {e}")
            self._browser = None

        if self._playwright:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.debug(f"Ignoring error while stopping Playwright: {e}")
            self._playwright = None

    async def __aenter__(self) -> "BrowserController":
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

def create_browser(config: Optional[BrowserConfig] = None) -> BrowserController:
    """
    Factory function to create a browser controller.

    Use with async context manager:
        >>> async with create_browser() as browser:
        ...     session = browser.open_session()

    Args:
        config: Browser configuration (uses env if None)

    Returns:
        BrowserController instance (not yet initialized)
    """
    return BrowserController(config)

"""
Automation Session

Wraps a Playwright page with the narrow set of operations the probe needs:
navigate, wait for and find elements, switch into a frame, evaluate
scripts and sleep. Every element and evaluate call resolves against the
session's current addressing context (a Playwright Frame), which starts
at the page's main frame and moves into an iframe on switch_context().
"""

import asyncio
import logging
from typing import Any, Optional

from playwright.async_api import ElementHandle, Frame, Page

logger = logging.getLogger(__name__)


class AutomationSession:
    """
    A browser page plus the frame that element operations currently target.

    The session does not own the page; whoever opened the page closes it.
    """

    def __init__(self, page: Page, element_timeout_ms: Optional[int] = None):
        """
        Initialize the session.

        Args:
            page: Playwright Page instance to drive
            element_timeout_ms: Timeout for element waits (None uses the
                browser context's default timeout)
        """
        self.page = page
        self.element_timeout_ms = element_timeout_ms
        self._context: Frame = page.main_frame

    @property
    def context(self) -> Frame:
        """The frame element and evaluate operations resolve against."""
        return self._context

    @property
    def in_main_frame(self) -> bool:
        return self._context is self.page.main_frame

    def reset_context(self) -> None:
        """Address the top-level document again."""
        self._context = self.page.main_frame

    async def navigate(self, address: str) -> None:
        """
        Load a page by address.

        Navigation errors from Playwright propagate unchanged. The addressing
        context is reset to the new top-level document.
        """
        logger.debug(f"Navigating to {address}")
        await self.page.goto(address)
        self.reset_context()

    async def wait_for_element(self, selector: str, context: Optional[Frame] = None) -> None:
        """
        Block until an element matching selector is attached.

        Args:
            selector: CSS selector
            context: Frame to search (current context if None)

        Raises:
            playwright.async_api.TimeoutError: If nothing matches in time
        """
        frame = context or self._context
        await frame.wait_for_selector(
            selector,
            state="attached",
            timeout=self.element_timeout_ms,
        )

    async def find_element(self, selector: str) -> ElementHandle:
        """
        Locate a single element in the current context.

        Raises:
            LookupError: If no element matches
        """
        element = await self._context.query_selector(selector)
        if element is None:
            raise LookupError(f"No element matches '{selector}'")
        return element

    async def switch_context(self, element: ElementHandle) -> Frame:
        """
        Re-root subsequent element operations inside a frame element.

        Args:
            element: An iframe/frame element handle

        Returns:
            The frame now being addressed

        Raises:
            ValueError: If the element does not host a frame
        """
        frame = await element.content_frame()
        if frame is None:
            raise ValueError("Element is not a frame; cannot switch context into it")
        logger.debug(f"Switched context into frame {frame.name or frame.url}")
        self._context = frame
        return frame

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        """
        Run a script in the current context and return its result.

        Args:
            script: JavaScript expression or function source
            arg: Optional argument passed to the function

        Returns:
            The script's return value, deserialized by Playwright
        """
        return await self._context.evaluate(script, arg)

    async def wait_for_condition(
        self,
        expression: str,
        arg: Any = None,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """
        Poll a script in the current context until it returns a truthy value.

        Raises:
            playwright.async_api.TimeoutError: If it never becomes truthy
        """
        timeout = timeout_ms if timeout_ms is not None else self.element_timeout_ms
        await self._context.wait_for_function(expression, arg=arg, timeout=timeout)

    async def sleep(self, milliseconds: int) -> None:
        """Suspend for a fixed wall-clock duration."""
        await asyncio.sleep(milliseconds / 1000)

"""
Player Frame Navigation

Loads the page under test and positions an automation session inside the
iframe that embeds the player, blocking until the player has rendered.
"""

import logging
from typing import Optional

from ..browser.session import AutomationSession
from ..config import (
    DEFAULT_CONTAINER_SELECTOR,
    DEFAULT_FRAME_SELECTOR,
    DEFAULT_SETTLE_DELAY_MS,
)

logger = logging.getLogger(__name__)


async def setup_player_frame(
    address: str,
    session: AutomationSession,
    *,
    frame_selector: str = DEFAULT_FRAME_SELECTOR,
    container_selector: str = DEFAULT_CONTAINER_SELECTOR,
    settle_delay_ms: int = DEFAULT_SETTLE_DELAY_MS,
    ready_expression: Optional[str] = None,
) -> None:
    """
    Open the page and switch the session into the player's iframe.

    The container becoming attached does not mean the player finished its
    asynchronous bootstrap, so a fixed settle delay always follows. When the
    player exposes a readiness flag, pass it as ready_expression to poll it
    before settling.

    Args:
        address: URL of the page embedding the player
        session: Session to position (left addressing the iframe)
        frame_selector: Selector for the iframe in the top-level document
        container_selector: Selector for the player container in the iframe
        settle_delay_ms: Fixed wait after the container appears
        ready_expression: Optional JS expression polled until truthy

    Raises:
        playwright.async_api.Error: If the page fails to load
        playwright.async_api.TimeoutError: If the iframe or container never
            appears, or ready_expression never becomes truthy
    """
    await session.navigate(address)

    logger.debug(f"Waiting for player frame '{frame_selector}'")
    await session.wait_for_element(frame_selector)

    frame_element = await session.find_element(frame_selector)
    await session.switch_context(frame_element)

    logger.debug(f"Waiting for player container '{container_selector}'")
    await session.wait_for_element(container_selector)

    if ready_expression:
        logger.debug(f"Polling player readiness: {ready_expression}")
        await session.wait_for_condition(ready_expression)

    # Wait for UI to render
    await session.sleep(settle_delay_ms)
    logger.debug(f"Player frame ready at {address}")

"""
Player Handle

Binds one embedded player instance to an automation session and keeps the
most recent snapshot of its state for assertions.

Usage:
    >>> async with create_browser() as browser:
    ...     session = browser.open_session()
    ...     player = await PlayerHandle.build(session, config.url)
    ...     assert player.get_snapshot().is_playing
    ...     await player.refresh()
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..browser.session import AutomationSession
from ..config import (
    DEFAULT_CONTAINER_SELECTOR,
    DEFAULT_FRAME_SELECTOR,
    DEFAULT_PLAYER_SELECTOR,
    DEFAULT_SETTLE_DELAY_MS,
    ProbeConfig,
)
from .extractor import CaptureStrategy, capture
from .models import PlayerSnapshot
from .navigator import setup_player_frame

logger = logging.getLogger(__name__)


@dataclass
class PlayerOptions:
    """
    Selectors and timing for locating and reading the player.
    """

    frame_selector: str = DEFAULT_FRAME_SELECTOR
    container_selector: str = DEFAULT_CONTAINER_SELECTOR
    player_selector: str = DEFAULT_PLAYER_SELECTOR
    settle_delay_ms: int = DEFAULT_SETTLE_DELAY_MS
    ready_expression: Optional[str] = None
    strategy: CaptureStrategy = CaptureStrategy.BATCHED

    @classmethod
    def from_config(cls, config: ProbeConfig) -> "PlayerOptions":
        """Create options from a loaded ProbeConfig."""
        return cls(
            frame_selector=config.frame_selector,
            container_selector=config.container_selector,
            player_selector=config.player_selector,
            settle_delay_ms=config.settle_delay_ms,
            ready_expression=config.ready_expression,
            strategy=CaptureStrategy(config.capture_strategy),
        )


class PlayerHandle:
    """
    Live binding to one embedded player.

    The session is shared, not owned: the caller keeps it alive for as long
    as the handle is used and closes the browser afterwards. Only use a
    handle whose session has been positioned with setup_player_frame();
    build() does that for you.
    """

    def __init__(
        self,
        session: AutomationSession,
        *,
        player_selector: str = DEFAULT_PLAYER_SELECTOR,
        strategy: CaptureStrategy = CaptureStrategy.BATCHED,
    ):
        self.session = session
        self.player_selector = player_selector
        self.strategy = CaptureStrategy(strategy)
        self._snapshot: Optional[PlayerSnapshot] = None

    @classmethod
    async def build(
        cls,
        session: AutomationSession,
        address: str,
        options: Optional[PlayerOptions] = None,
    ) -> "PlayerHandle":
        """
        Open the page, switch into the player's frame and take a first snapshot.

        Args:
            session: Session to drive
            address: URL of the page embedding the player
            options: Selectors and timing (defaults match the stock embed)

        Returns:
            PlayerHandle with an initial snapshot

        Raises:
            playwright.async_api.TimeoutError: If the frame or player never appears
            playwright.async_api.Error: If loading or the first capture fails
        """
        options = options or PlayerOptions()

        await setup_player_frame(
            address,
            session,
            frame_selector=options.frame_selector,
            container_selector=options.container_selector,
            settle_delay_ms=options.settle_delay_ms,
            ready_expression=options.ready_expression,
        )

        player = cls(
            session,
            player_selector=options.player_selector,
            strategy=options.strategy,
        )
        await player.refresh()

        logger.info(f"Player ready at {address}")
        return player

    @classmethod
    async def from_config(cls, session: AutomationSession, config: ProbeConfig) -> "PlayerHandle":
        """Build a handle for the page and settings in a ProbeConfig."""
        return await cls.build(session, config.url, PlayerOptions.from_config(config))

    def get_snapshot(self) -> Optional[PlayerSnapshot]:
        """Return the last captured snapshot (None before the first capture)."""
        return self._snapshot

    async def refresh(self) -> PlayerSnapshot:
        """
        Capture a fresh snapshot, store it and return it.

        The stored snapshot is replaced only once the capture has fully
        succeeded; a failed capture leaves the previous one in place.
        """
        snapshot = await capture(
            self.session,
            player_selector=self.player_selector,
            strategy=self.strategy,
        )
        self._snapshot = snapshot
        return snapshot

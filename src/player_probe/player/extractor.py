"""
Player Snapshot Extraction

Reads the embedded player's state through script evaluation and assembles
it into a PlayerSnapshot.

Two equivalent strategies are available:
- BATCHED: one evaluate call per field, all issued at once and joined
- COMBINED: a single evaluate call returning the whole record

Scripts are compiled once from PLAYER_FIELDS. The player selector is
passed to each script as its argument rather than spliced into the source.
"""

import asyncio
import logging
import time
from enum import Enum
from typing import Any

from ..browser.session import AutomationSession
from ..config import DEFAULT_PLAYER_SELECTOR
from .models import PLAYER_FIELDS, PlayerField, PlayerSnapshot

logger = logging.getLogger(__name__)


class CaptureStrategy(str, Enum):
    """How field reads are phrased as evaluate calls."""

    BATCHED = "batched"
    COMBINED = "combined"


def _compile_field_script(field: PlayerField) -> str:
    return (
        "(selector) => {\n"
        "    const player = document.querySelector(selector);\n"
        f"    return {field.accessor};\n"
        "}"
    )


def _compile_combined_script(fields: tuple[PlayerField, ...]) -> str:
    entries = ",\n".join(f"        {field.key}: {field.accessor}" for field in fields)
    return (
        "(selector) => {\n"
        "    const player = document.querySelector(selector);\n"
        "    return {\n"
        f"{entries}\n"
        "    };\n"
        "}"
    )


FIELD_SCRIPTS: dict[str, str] = {
    field.key: _compile_field_script(field) for field in PLAYER_FIELDS
}

COMBINED_SCRIPT: str = _compile_combined_script(PLAYER_FIELDS)


async def _read_batched(session: AutomationSession, player_selector: str) -> dict[str, Any]:
    keys = list(FIELD_SCRIPTS)
    tasks = [
        asyncio.ensure_future(session.evaluate(FIELD_SCRIPTS[key], player_selector))
        for key in keys
    ]
    try:
        values = await asyncio.gather(*tasks)
    except BaseException:
        # One failed read aborts the capture; drop the reads still in flight
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return dict(zip(keys, values))


async def _read_combined(session: AutomationSession, player_selector: str) -> dict[str, Any]:
    return await session.evaluate(COMBINED_SCRIPT, player_selector)


async def capture(
    session: AutomationSession,
    *,
    player_selector: str = DEFAULT_PLAYER_SELECTOR,
    strategy: CaptureStrategy = CaptureStrategy.BATCHED,
) -> PlayerSnapshot:
    """
    Read every player field and return them as one snapshot.

    The session must already address the player's iframe (see
    setup_player_frame). If any read fails the error propagates and no
    snapshot is produced.

    Args:
        session: Session positioned in the player's frame
        player_selector: Selector for the element exposing the accessors
        strategy: How the reads are phrased

    Returns:
        PlayerSnapshot with all fields populated

    Raises:
        playwright.async_api.Error: If any evaluation throws, e.g. when the
            player element is missing
    """
    strategy = CaptureStrategy(strategy)
    started = time.perf_counter()

    if strategy is CaptureStrategy.COMBINED:
        record = await _read_combined(session, player_selector)
    else:
        record = await _read_batched(session, player_selector)

    snapshot = PlayerSnapshot.from_remote(record)

    logger.debug(
        "Captured player snapshot (%s, %d fields) in %.0fms",
        strategy.value,
        len(PLAYER_FIELDS),
        (time.perf_counter() - started) * 1000,
    )
    return snapshot

#!/usr/bin/env python
"""
Autoplay Check Example

Opens the page from config.json, attaches to the embedded player and
checks that it auto plays with audio, refreshing the snapshot before
each check.

Usage:
    python examples/check_autoplay.py config.json

Requirements:
    - Browsers installed: playwright install chromium
    - Player probe installed: pip install -e .
"""

import asyncio
import sys

from player_probe import BrowserConfig, PlayerHandle, ProbeConfig, create_browser


async def main(config_path: str) -> int:
    """Run the autoplay checks."""
    config = ProbeConfig.from_file(config_path)

    async with create_browser(BrowserConfig(headless=True)) as browser:
        session = browser.open_session()
        player = await PlayerHandle.from_config(session, config)

        # Fresh data from the player before every check
        snapshot = await player.refresh()
        print(f"auto play: {snapshot.is_playing}")

        snapshot = await player.refresh()
        print(f"volume: {snapshot.volume}")

        return 0 if snapshot.is_playing and snapshot.volume > 0 else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "config.json")))

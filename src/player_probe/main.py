"""
Player Probe CLI Entry Point

Opens the page under test, attaches to the embedded player and prints
snapshots of its state.

Usage:
    python -m player_probe.main --url https://example.com/player-page
    python -m player_probe.main --config config.json --headless --refresh 3
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv
from playwright.async_api import Error as PlaywrightError

from player_probe.browser import BrowserConfig, BrowserController
from player_probe.config import ProbeConfig, configure_logging, get_logger
from player_probe.player import PlayerHandle, PlayerSnapshot
from player_probe.tui import get_console, print_error, print_snapshot

# Load environment variables
load_dotenv()

logger = get_logger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Read the state of an embedded video player",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m player_probe.main --url https://example.com/player-page
    python -m player_probe.main --config config.json --json
    python -m player_probe.main --refresh 5 --interval 2 --headless
        """,
    )

    parser.add_argument(
        "--url", "-u",
        type=str,
        default=None,
        help="Page embedding the player (overrides config)",
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="JSON config file with at least a 'url' key",
    )

    parser.add_argument(
        "--strategy", "-s",
        choices=["batched", "combined"],
        default=None,
        help="How player fields are read (default: batched)",
    )

    parser.add_argument(
        "--refresh", "-r",
        type=int,
        default=0,
        help="Number of additional snapshots after the first (default: 0)",
    )

    parser.add_argument(
        "--interval", "-i",
        type=float,
        default=1.0,
        help="Seconds between refreshes (default: 1.0)",
    )

    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run browser in headless mode (for CI/CD)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print snapshots as JSON lines instead of tables",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging with timestamps",
    )

    return parser.parse_args(argv)


def load_probe_config(args: argparse.Namespace) -> ProbeConfig:
    """
    Resolve the probe configuration from CLI arguments and environment.

    Precedence: command line, then PLAYER_* environment variables, then
    the config file.
    """
    config_path = args.config or os.getenv("PLAYER_CONFIG")
    data = ProbeConfig.read_file(config_path) if config_path else {}
    data.update(ProbeConfig.env_overrides())

    if args.url:
        data["url"] = args.url
    if args.strategy:
        data["capture_strategy"] = args.strategy

    return ProbeConfig.from_dict(data)


def _emit(snapshot: PlayerSnapshot, as_json: bool, index: int) -> None:
    if as_json:
        print(json.dumps(snapshot.to_remote()))
    else:
        print_snapshot(snapshot, title=f"[SNAPSHOT {index}]")


async def run_probe(
    config: ProbeConfig,
    browser_config: BrowserConfig,
    refresh: int = 0,
    interval: float = 1.0,
    as_json: bool = False,
) -> bool:
    """
    Attach to the player and print its snapshots.

    Args:
        config: Page and player settings
        browser_config: Browser launch settings
        refresh: Snapshots to take after the initial one
        interval: Seconds between refreshes
        as_json: Print JSON lines instead of tables

    Returns:
        True if every snapshot was captured, False otherwise
    """
    console = get_console()

    try:
        async with BrowserController(browser_config) as browser:
            session = browser.open_session(element_timeout_ms=config.element_timeout_ms)

            if not as_json:
                console.print_action(f"Opening {config.url}")

            player = await PlayerHandle.from_config(session, config)
            _emit(player.get_snapshot(), as_json, 0)

            for index in range(1, refresh + 1):
                await asyncio.sleep(interval)
                _emit(await player.refresh(), as_json, index)

            return True

    except PlaywrightError as e:
        print_error(str(e), error_type=type(e).__name__)
        return False
    except Exception as e:
        logger.debug("Probe failed", exc_info=True)
        print_error(
            str(e),
            error_type=type(e).__name__,
            suggestion="Check the frame, container and player selectors.",
        )
        return False


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    configure_logging(level=logging.DEBUG if args.verbose else None, verbose=args.verbose)

    try:
        config = load_probe_config(args)
    except (ValueError, OSError) as e:
        print_error(
            str(e),
            error_type="ConfigError",
            suggestion="Pass --url, --config, or set PLAYER_URL.",
        )
        return 1

    browser_config = BrowserConfig.from_env()
    if args.headless:
        browser_config.headless = True

    logger.debug(f"Probing {config.url} with {config.capture_strategy} capture")

    try:
        success = asyncio.run(
            run_probe(
                config,
                browser_config,
                refresh=args.refresh,
                interval=args.interval,
                as_json=args.json,
            )
        )
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Interrupted by user[/yellow]")
        return 130

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())

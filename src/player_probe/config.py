"""
Configuration and Logging Setup

Provides centralized configuration and logging for the player probe.
Reads LOG_LEVEL from environment variables for configurable logging, and
loads the page-under-test settings from a JSON file and/or environment.

Usage:
    from player_probe.config import configure_logging, get_logger, ProbeConfig

    # Configure at application startup
    configure_logging()

    # Get logger in any module
    logger = get_logger(__name__)

    # Load the page under test
    config = ProbeConfig.from_file("config.json")
"""

import json
import logging
import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional, Union

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Default configuration
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s: %(message)s"

# Valid log levels
VALID_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Player page defaults
DEFAULT_FRAME_SELECTOR = "iframe"
DEFAULT_CONTAINER_SELECTOR = ".mwPlayerContainer"
DEFAULT_PLAYER_SELECTOR = ".mwEmbedPlayer"

# Grace period after the player container shows up. The player keeps
# bootstrapping asynchronously after its DOM is attached.
DEFAULT_SETTLE_DELAY_MS = 1000

CAPTURE_STRATEGIES = ("batched", "combined")


def get_log_level() -> int:
    """
    Get the log level from LOG_LEVEL environment variable.

    Returns:
        Logging level constant (e.g., logging.INFO)

    Supported values:
        DEBUG, INFO, WARNING, ERROR, CRITICAL
    """
    level_str = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    if level_str not in VALID_LEVELS:
        # Warn about invalid level and use default
        print(
            f"Warning: Invalid LOG_LEVEL '{level_str}'. "
            f"Valid values: {', '.join(VALID_LEVELS.keys())}. "
            f"Using {DEFAULT_LOG_LEVEL}.",
            file=sys.stderr,
        )
        return VALID_LEVELS[DEFAULT_LOG_LEVEL]

    return VALID_LEVELS[level_str]


def configure_logging(
    level: Optional[int] = None,
    verbose: bool = False,
) -> None:
    """
    Configure logging for the player probe.

    Should be called once at application startup.

    Args:
        level: Override log level (default: from LOG_LEVEL env var)
        verbose: Use detailed format with timestamps (default: simple format)

    Environment Variables:
        LOG_LEVEL: Set to DEBUG, INFO, WARNING, ERROR, or CRITICAL
    """
    if level is None:
        level = get_log_level()

    log_format = LOG_FORMAT if verbose else LOG_FORMAT_SIMPLE

    logging.basicConfig(
        level=level,
        format=log_format,
        stream=sys.stderr,
        force=True,  # Override any existing configuration
    )

    logging.getLogger("player_probe").setLevel(level)

    # Quiet noisy third-party loggers in non-debug mode
    if level > logging.DEBUG:
        logging.getLogger("playwright").setLevel(logging.WARNING)
        logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


@dataclass
class ProbeConfig:
    """
    Settings for the page under test and the embedded player on it.

    Only ``url`` is required; everything else has a default matching the
    stock embed markup.
    """

    # Address of the page that embeds the player
    url: str

    # Selector for the iframe hosting the player
    frame_selector: str = DEFAULT_FRAME_SELECTOR

    # Selector for the player container inside the iframe (readiness signal)
    container_selector: str = DEFAULT_CONTAINER_SELECTOR

    # Selector for the player element exposing the accessors
    player_selector: str = DEFAULT_PLAYER_SELECTOR

    # Fixed wait after the container appears, in ms
    settle_delay_ms: int = DEFAULT_SETTLE_DELAY_MS

    # Optional JS expression polled until truthy before the settle delay
    ready_expression: Optional[str] = None

    # Element wait timeout in ms (None = Playwright's default)
    element_timeout_ms: Optional[int] = None

    # "batched" (one evaluate per field, concurrently) or "combined"
    capture_strategy: str = "batched"

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("Probe configuration requires a 'url'")
        if self.capture_strategy not in CAPTURE_STRATEGIES:
            raise ValueError(
                f"Invalid capture strategy '{self.capture_strategy}'. "
                f"Valid values: {', '.join(CAPTURE_STRATEGIES)}"
            )
        if self.settle_delay_ms < 0:
            raise ValueError("settle_delay_ms must be >= 0")

    @classmethod
    def normalize_keys(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Map snake_case or camelCase keys onto field names.

        Unknown keys are dropped. Nothing is validated.
        """
        known = {f.name for f in fields(cls)}
        camel_to_snake = {_camel(name): name for name in known}

        values: dict[str, Any] = {}
        for key, value in data.items():
            name = key if key in known else camel_to_snake.get(key)
            if name is not None:
                values[name] = value
        return values

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProbeConfig":
        """
        Create configuration from a mapping.

        Keys may be snake_case (``settle_delay_ms``) or camelCase
        (``settleDelayMs``). Unknown keys are ignored.
        """
        values = cls.normalize_keys(data)

        if "url" not in values:
            raise ValueError("Probe configuration requires a 'url'")

        return cls(**values)

    @classmethod
    def read_file(cls, path: Union[str, Path]) -> dict[str, Any]:
        """
        Read a JSON config file into field-named values without validating.

        Use this as the base when other sources (environment, command line)
        may still supply missing keys such as ``url``.
        """
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a JSON object")

        return cls.normalize_keys(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ProbeConfig":
        """
        Load configuration from a JSON file.

        The file must hold an object with at least a ``url`` key, e.g.
        ``{"url": "https://example.com/player-page"}``.
        """
        return cls.from_dict(cls.read_file(path))

    @staticmethod
    def env_overrides() -> dict[str, Any]:
        """
        Read the PLAYER_* environment variables that are set.

        Environment variables:
            PLAYER_URL: page under test
            PLAYER_SETTLE_DELAY_MS: int in ms (default: 1000)
            PLAYER_ELEMENT_TIMEOUT_MS: int in ms (default: Playwright's)
            PLAYER_CAPTURE_STRATEGY: batched or combined (default: batched)
            PLAYER_READY_EXPRESSION: JS expression polled before settling
        """
        strategy = os.getenv("PLAYER_CAPTURE_STRATEGY")
        values = {
            "url": os.getenv("PLAYER_URL"),
            "settle_delay_ms": _optional_int(os.getenv("PLAYER_SETTLE_DELAY_MS")),
            "element_timeout_ms": _optional_int(os.getenv("PLAYER_ELEMENT_TIMEOUT_MS")),
            "capture_strategy": strategy.lower() if strategy else None,
            "ready_expression": os.getenv("PLAYER_READY_EXPRESSION") or None,
        }
        return {k: v for k, v in values.items() if v is not None}

    @classmethod
    def from_env(cls, config_path: Optional[Union[str, Path]] = None) -> "ProbeConfig":
        """
        Create configuration from a config file and environment variables.

        The JSON file (config_path, else PLAYER_CONFIG) supplies the base
        values and PLAYER_* variables override them.
        """
        data: dict[str, Any] = {}

        config_path = config_path or os.getenv("PLAYER_CONFIG")
        if config_path:
            data.update(cls.read_file(config_path))

        data.update(cls.env_overrides())

        return cls.from_dict(data)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)

"""
Shared fixtures for unit tests.

FakePlayerSession stands in for AutomationSession: it answers the compiled
player scripts from an in-memory record instead of a browser.
"""

import asyncio
from typing import Any, Optional

import pytest

from player_probe.player.extractor import COMBINED_SCRIPT, FIELD_SCRIPTS


def make_remote_record(**overrides: Any) -> dict[str, Any]:
    """A record shaped like the one the embedded player returns."""
    record = {
        "flashvars": {"autoPlay": True, "streamerType": "http"},
        "isMuted": False,
        "isPlaying": True,
        "isStopped": False,
        "duration": 120.5,
        "isAudio": False,
        "canAutoPlay": True,
        "useNativePlayerControls": False,
        "isDVR": False,
        "isPersistentNativePlayer": False,
        "isOverlayControls": True,
        "isMobileSkin": False,
        "volume": 0.8,
        "isLive": False,
        "is360": False,
        "isDrmRequired": False,
        "isLiveOffSynch": False,
        "currentBitrate": 1500,
        "dimensions": {"width": 640, "height": 360},
    }
    record.update(overrides)
    return record


class FakePlayerSession:
    """In-memory session answering the player scripts."""

    def __init__(self, record: Optional[dict[str, Any]] = None, delay: float = 0.0):
        self.record = record if record is not None else make_remote_record()
        self.delay = delay
        self.failing_keys: set[str] = set()
        self.calls: list[tuple[str, Any]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.completed = 0
        self.cancelled = 0

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        self.calls.append((script, arg))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if script == COMBINED_SCRIPT:
                await asyncio.sleep(self.delay)
                if self.failing_keys:
                    raise RuntimeError("TypeError: player.isPlaying is not a function")
                return dict(self.record)
            for key, field_script in FIELD_SCRIPTS.items():
                if script == field_script:
                    # Failing reads error out at once; the rest take `delay`
                    if key in self.failing_keys:
                        raise RuntimeError(f"Cannot read '{key}' of null")
                    await asyncio.sleep(self.delay)
                    self.completed += 1
                    return self.record[key]
            raise AssertionError(f"Unexpected script: {script}")
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        finally:
            self.in_flight -= 1


@pytest.fixture
def remote_record():
    """A complete player record."""
    return make_remote_record()


@pytest.fixture
def fake_session(remote_record):
    """Session answering from remote_record."""
    return FakePlayerSession(remote_record)


@pytest.fixture
def record_factory():
    """Build player records with selected fields overridden."""
    return make_remote_record


@pytest.fixture
def session_factory():
    """Build fake sessions around a given record."""
    return FakePlayerSession

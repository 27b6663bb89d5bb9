"""
Embedded Player Module

Locates the player inside its iframe and reads its state into snapshots.
"""

from .extractor import CaptureStrategy, capture
from .handle import PlayerHandle, PlayerOptions
from .models import PLAYER_FIELDS, PlayerDimensions, PlayerField, PlayerSnapshot
from .navigator import setup_player_frame

__all__ = [
    "CaptureStrategy",
    "capture",
    "PlayerHandle",
    "PlayerOptions",
    "PLAYER_FIELDS",
    "PlayerDimensions",
    "PlayerField",
    "PlayerSnapshot",
    "setup_player_frame",
]

"""
Data models for embedded player state.

This module defines the Pydantic models for a point-in-time read of the
embedded player:
- PlayerDimensions: Rendered player size
- PlayerSnapshot: Immutable record of every field read from the player
- PLAYER_FIELDS: Remote key and accessor expression for each snapshot field
"""

from typing import Any, Mapping, NamedTuple

from pydantic import BaseModel, ConfigDict, Field


class PlayerField(NamedTuple):
    """One field read from the player element."""

    attribute: str
    """Attribute name on PlayerSnapshot."""

    key: str
    """Key in the record returned by the player (camelCase)."""

    accessor: str
    """JavaScript expression evaluated with `player` bound to the element."""


PLAYER_FIELDS: tuple[PlayerField, ...] = (
    PlayerField("flashvars", "flashvars", "player.getFlashvars()"),
    PlayerField("is_muted", "isMuted", "player.getPlayerElementMuted()"),
    PlayerField("is_playing", "isPlaying", "player.isPlaying()"),
    PlayerField("is_stopped", "isStopped", "player.isStopped()"),
    PlayerField("duration", "duration", "player.getDuration()"),
    PlayerField("is_audio", "isAudio", "player.isAudio()"),
    PlayerField("can_auto_play", "canAutoPlay", "player.canAutoPlay()"),
    PlayerField(
        "use_native_player_controls",
        "useNativePlayerControls",
        "player.useNativePlayerControls()",
    ),
    PlayerField("is_dvr", "isDVR", "player.isDVR()"),
    PlayerField(
        "is_persistent_native_player",
        "isPersistentNativePlayer",
        "player.isPersistentNativePlayer()",
    ),
    PlayerField("is_overlay_controls", "isOverlayControls", "player.isOverlayControls()"),
    PlayerField("is_mobile_skin", "isMobileSkin", "player.isMobileSkin()"),
    PlayerField("volume", "volume", "player.getPlayerElementVolume()"),
    PlayerField("is_live", "isLive", "player.isLive()"),
    PlayerField("is_360", "is360", "player.is360()"),
    PlayerField("is_drm_required", "isDrmRequired", "player.isDrmRequired()"),
    PlayerField("is_live_off_synch", "isLiveOffSynch", "player.isLiveOffSynch()"),
    PlayerField("current_bitrate", "currentBitrate", "player.getCurrentBitrate()"),
    PlayerField(
        "dimensions",
        "dimensions",
        "({ width: player.getWidth(), height: player.getHeight() })",
    ),
)


class PlayerDimensions(BaseModel):
    """Rendered player size in CSS pixels."""

    model_config = ConfigDict(frozen=True)

    width: float
    height: float


class PlayerSnapshot(BaseModel):
    """Point-in-time read of the embedded player's state.

    Values are stored exactly as the player returned them. The player is the
    source of truth, so flags are not reconciled with each other (a player
    can report both is_playing and is_stopped).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    flashvars: dict[str, Any] = Field(alias="flashvars")
    """Embed-time configuration parameters."""

    is_muted: bool = Field(alias="isMuted")
    is_playing: bool = Field(alias="isPlaying")
    is_stopped: bool = Field(alias="isStopped")

    duration: float = Field(alias="duration")
    """Media duration in seconds."""

    is_audio: bool = Field(alias="isAudio")
    can_auto_play: bool = Field(alias="canAutoPlay")
    use_native_player_controls: bool = Field(alias="useNativePlayerControls")
    is_dvr: bool = Field(alias="isDVR")
    is_persistent_native_player: bool = Field(alias="isPersistentNativePlayer")
    is_overlay_controls: bool = Field(alias="isOverlayControls")
    is_mobile_skin: bool = Field(alias="isMobileSkin")

    volume: float = Field(alias="volume")
    """Playback volume, 0-1 for the stock player."""

    is_live: bool = Field(alias="isLive")
    is_360: bool = Field(alias="is360")
    is_drm_required: bool = Field(alias="isDrmRequired")
    is_live_off_synch: bool = Field(alias="isLiveOffSynch")
    current_bitrate: float = Field(alias="currentBitrate")
    dimensions: PlayerDimensions = Field(alias="dimensions")

    @classmethod
    def from_remote(cls, record: Mapping[str, Any]) -> "PlayerSnapshot":
        """
        Build a snapshot from the camelCase record the player returns.

        Values are taken verbatim without type validation; keys the player
        left out come through as None.

        Args:
            record: Mapping keyed by PlayerField.key

        Returns:
            PlayerSnapshot holding every field in PLAYER_FIELDS
        """
        values = {field.attribute: record.get(field.key) for field in PLAYER_FIELDS}

        dimensions = values["dimensions"]
        if isinstance(dimensions, Mapping):
            values["dimensions"] = PlayerDimensions.model_construct(
                width=dimensions.get("width"),
                height=dimensions.get("height"),
            )

        return cls.model_construct(**values)

    def to_remote(self) -> dict[str, Any]:
        """Return the snapshot keyed the way the player names its fields."""
        return self.model_dump(by_alias=True, warnings=False)


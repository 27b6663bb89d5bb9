"""
Unit tests for PlayerHandle and frame navigation.

This module contains unit tests for:
- setup_player_frame step order and settle delay
- PlayerHandle.build initial capture
- refresh replacement semantics and failure isolation
"""

from unittest.mock import AsyncMock, MagicMock, call

import pytest

from player_probe.browser.session import AutomationSession
from player_probe.config import ProbeConfig
from player_probe.player.extractor import CaptureStrategy
from player_probe.player.handle import PlayerHandle, PlayerOptions
from player_probe.player.navigator import setup_player_frame


def make_navigation_session() -> AsyncMock:
    """A session mock recording navigation steps."""
    session = AsyncMock(spec=AutomationSession)
    session.find_element.return_value = MagicMock(name="iframe-element")
    return session


class TestSetupPlayerFrame:
    """Test the frame navigation sequence."""

    @pytest.mark.asyncio
    async def test_steps_in_order(self):
        session = make_navigation_session()

        await setup_player_frame("https://example.com/player", session)

        frame_element = session.find_element.return_value
        assert session.mock_calls == [
            call.navigate("https://example.com/player"),
            call.wait_for_element("iframe"),
            call.find_element("iframe"),
            call.switch_context(frame_element),
            call.wait_for_element(".mwPlayerContainer"),
            call.sleep(1000),
        ]

    @pytest.mark.asyncio
    async def test_custom_selectors_and_delay(self):
        session = make_navigation_session()

        await setup_player_frame(
            "https://example.com/player",
            session,
            frame_selector="iframe#kaltura",
            container_selector="#container",
            settle_delay_ms=250,
        )

        session.wait_for_element.assert_has_calls(
            [call("iframe#kaltura"), call("#container")]
        )
        session.sleep.assert_awaited_once_with(250)

    @pytest.mark.asyncio
    async def test_ready_expression_polled_before_settle(self):
        session = make_navigation_session()

        await setup_player_frame(
            "https://example.com/player",
            session,
            ready_expression="window.playerReady === true",
        )

        names = [c[0] for c in session.mock_calls]
        assert names.index("wait_for_condition") < names.index("sleep")
        session.wait_for_condition.assert_awaited_once_with("window.playerReady === true")

    @pytest.mark.asyncio
    async def test_no_ready_polling_by_default(self):
        session = make_navigation_session()

        await setup_player_frame("https://example.com/player", session)

        session.wait_for_condition.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_locate_timeout_propagates_without_switching(self):
        session = make_navigation_session()
        session.wait_for_element.side_effect = TimeoutError("iframe never appeared")

        with pytest.raises(TimeoutError):
            await setup_player_frame("https://example.com/player", session)

        session.switch_context.assert_not_awaited()
        session.sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_navigation_failure_propagates(self):
        session = make_navigation_session()
        session.navigate.side_effect = RuntimeError("net::ERR_NAME_NOT_RESOLVED")

        with pytest.raises(RuntimeError, match="ERR_NAME_NOT_RESOLVED"):
            await setup_player_frame("https://nowhere.invalid", session)

        session.wait_for_element.assert_not_awaited()


class TestPlayerHandle:
    """Test PlayerHandle snapshot lifecycle."""

    def test_no_snapshot_before_capture(self, fake_session):
        player = PlayerHandle(fake_session)

        assert player.get_snapshot() is None

    @pytest.mark.asyncio
    async def test_build_takes_initial_snapshot(self, fake_session, monkeypatch):
        """After build, a snapshot is available without refresh (P3)."""
        setup = AsyncMock()
        monkeypatch.setattr("player_probe.player.handle.setup_player_frame", setup)

        player = await PlayerHandle.build(fake_session, "https://example.com/player")

        setup.assert_awaited_once()
        assert setup.await_args.args == ("https://example.com/player", fake_session)
        assert player.get_snapshot() is not None
        assert player.get_snapshot().is_playing is True

    @pytest.mark.asyncio
    async def test_build_failure_produces_no_handle(self, fake_session, monkeypatch):
        setup = AsyncMock(side_effect=TimeoutError("no iframe"))
        monkeypatch.setattr("player_probe.player.handle.setup_player_frame", setup)

        with pytest.raises(TimeoutError):
            await PlayerHandle.build(fake_session, "https://example.com/empty")

        assert fake_session.calls == []

    @pytest.mark.asyncio
    async def test_build_passes_options(self, fake_session, monkeypatch):
        setup = AsyncMock()
        monkeypatch.setattr("player_probe.player.handle.setup_player_frame", setup)
        options = PlayerOptions(
            frame_selector="iframe.player",
            settle_delay_ms=10,
            player_selector="#p",
            strategy=CaptureStrategy.COMBINED,
        )

        player = await PlayerHandle.build(fake_session, "https://example.com", options)

        assert setup.await_args.kwargs["frame_selector"] == "iframe.player"
        assert setup.await_args.kwargs["settle_delay_ms"] == 10
        assert player.strategy is CaptureStrategy.COMBINED
        assert fake_session.calls[0][1] == "#p"

    @pytest.mark.asyncio
    async def test_refresh_returns_and_stores(self, fake_session):
        player = PlayerHandle(fake_session)

        snapshot = await player.refresh()

        assert player.get_snapshot() is snapshot

    @pytest.mark.asyncio
    async def test_refresh_twice_yields_equal_snapshots(self, fake_session):
        """Two refreshes with no state change agree in all fields (P1)."""
        player = PlayerHandle(fake_session)

        first = await player.refresh()
        second = await player.refresh()

        assert first == second
        assert first is not second

    @pytest.mark.asyncio
    async def test_refresh_replaces_snapshot(self, fake_session):
        player = PlayerHandle(fake_session)
        await player.refresh()

        fake_session.record["isMuted"] = True
        fake_session.record["volume"] = 0
        snapshot = await player.refresh()

        assert player.get_snapshot() is snapshot
        assert snapshot.is_muted is True
        assert snapshot.volume == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("strategy", list(CaptureStrategy))
    async def test_failed_refresh_keeps_previous_snapshot(self, fake_session, strategy):
        """A failed capture never replaces the stored snapshot (P2)."""
        player = PlayerHandle(fake_session, strategy=strategy)
        previous = await player.refresh()

        fake_session.record["volume"] = 0
        fake_session.failing_keys = {"isPlaying"}
        with pytest.raises(RuntimeError):
            await player.refresh()

        assert player.get_snapshot() is previous
        assert player.get_snapshot().volume == 0.8

    @pytest.mark.asyncio
    async def test_failed_first_refresh_leaves_none(self, fake_session):
        player = PlayerHandle(fake_session)
        fake_session.failing_keys = {"duration"}

        with pytest.raises(RuntimeError):
            await player.refresh()

        assert player.get_snapshot() is None


class TestPlayerOptions:
    """Test PlayerOptions construction."""

    def test_defaults_match_stock_embed(self):
        options = PlayerOptions()

        assert options.frame_selector == "iframe"
        assert options.container_selector == ".mwPlayerContainer"
        assert options.player_selector == ".mwEmbedPlayer"
        assert options.settle_delay_ms == 1000
        assert options.strategy is CaptureStrategy.BATCHED

    def test_from_config(self):
        config = ProbeConfig(
            url="https://example.com",
            player_selector="#p",
            settle_delay_ms=0,
            capture_strategy="combined",
            ready_expression="window.ready",
        )

        options = PlayerOptions.from_config(config)

        assert options.player_selector == "#p"
        assert options.settle_delay_ms == 0
        assert options.strategy is CaptureStrategy.COMBINED
        assert options.ready_expression == "window.ready"

"""StatusBoard expiry on a real asyncio event loop."""

import asyncio

import pytest

from signalboard.board import StatusBoard
from signalboard.models import SlotMessage
from signalboard.sinks import NullSink


def _texts(messages: list[SlotMessage | None]) -> list[str | None]:
    return [m.text if m else None for m in messages]


class TestEventLoopExpiry:
    """Timer-driven visibility changes with the default loop timer."""

    @pytest.mark.asyncio
    async def test_transient_stacking(self) -> None:
        board = StatusBoard(sink=NullSink())
        seen: list[SlotMessage | None] = []
        board.on_visibility_change(seen.append)

        board.info_flash(200, "S1", "A")
        board.warn_flash(100, "S2", "B")
        assert board.current_visible().text == "B"

        await asyncio.sleep(0.12)
        assert board.current_visible().text == "A"
        assert _texts(seen)[-1] == "A"

        await asyncio.sleep(0.1)
        assert board.current_visible() is None
        assert _texts(seen)[-1] is None
        assert board.next_expiry is None

        board.close()

    @pytest.mark.asyncio
    async def test_persistent_revealed_after_flash(self) -> None:
        board = StatusBoard(sink=NullSink())
        board.warn("network", "Offline")
        board.info_flash(50, "save", "Saved")
        assert board.current_visible().text == "Saved"

        await asyncio.sleep(0.08)

        assert board.current_visible().text == "Offline"
        board.close()

    @pytest.mark.asyncio
    async def test_close_stops_pending_notification(self) -> None:
        board = StatusBoard(sink=NullSink())
        seen: list[SlotMessage | None] = []
        board.info_flash(30, "a", "x")
        board.on_visibility_change(seen.append)

        board.close()
        await asyncio.sleep(0.06)

        assert seen == []

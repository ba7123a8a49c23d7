"""Tests for spectra/core/event_system.py"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from spectra.core.event_system import EventSystem, event_listener


class TestEventSystem:
    @pytest.mark.asyncio
    async def test_emit_calls_sync_and_async_listeners(self):
        events = EventSystem()
        sync_listener = MagicMock(__name__="sync_listener")
        async_listener = AsyncMock(__name__="async_listener")
        events.add_listener("member_join", sync_listener)
        events.add_listener("member_join", async_listener)

        await events.emit("member_join", "member", flag=True)

        sync_listener.assert_called_once_with("member", flag=True)
        async_listener.assert_awaited_once_with("member", flag=True)

    @pytest.mark.asyncio
    async def test_emit_without_listeners(self):
        events = EventSystem()

        await events.emit("nothing")

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_stop_others(self):
        events = EventSystem()
        failing = AsyncMock(__name__="failing", side_effect=RuntimeError("boom"))
        healthy = AsyncMock(__name__="healthy")
        events.add_listener("bot_ready", failing)
        events.add_listener("bot_ready", healthy)

        await events.emit("bot_ready")

        healthy.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_middleware_sees_errors(self):
        events = EventSystem()
        seen = []

        async def middleware(event_context, phase):
            seen.append((phase, event_context["event_name"], event_context["error"]))

        error = RuntimeError("boom")
        events.add_middleware(middleware)
        events.add_listener("bot_ready", AsyncMock(__name__="failing", side_effect=error))

        await events.emit("bot_ready")

        assert seen == [("pre", "bot_ready", None), ("post", "bot_ready", error)]

    @pytest.mark.asyncio
    async def test_middleware_can_stop_event(self):
        events = EventSystem()
        listener = AsyncMock(__name__="listener")
        events.add_middleware(lambda event_context, phase: False)
        events.add_listener("member_join", listener)

        await events.emit("member_join")

        listener.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_remove_listener(self):
        events = EventSystem()
        listener = MagicMock(__name__="listener")
        events.add_listener("member_join", listener)

        events.remove_listener("member_join", listener)
        events.remove_listener("member_join", listener)
        await events.emit("member_join", "member")

        listener.assert_not_called()

    def test_event_listener_decorator(self):
        @event_listener("member_join")
        async def on_join(member):
            pass

        assert on_join._event_listener == "member_join"

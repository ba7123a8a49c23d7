"""Tests for spectra/plugins/commands (decorator and registry)."""

from unittest.mock import MagicMock

import pytest

from spectra.permissions import PermLevel
from spectra.plugins.base import BasePlugin
from spectra.plugins.commands import ArgumentType, CommandArgument, command


class SampleFeaturePlugin(BasePlugin):
    @command("note list", description="lists notes", level=PermLevel.MODERATOR)
    async def list_notes(self, ctx) -> bool:
        return True

    @command(
        "note",
        description="adds a note",
        aliases=["N"],
        level=PermLevel.MODERATOR,
        arguments=[CommandArgument("text", ArgumentType.LONGSTRING)],
    )
    async def add_note(self, ctx, text: str) -> bool:
        return True


class OrphanPlugin(BasePlugin):
    @command("missing child")
    async def child(self, ctx) -> bool:
        return True


class TestCommandDecorator:
    def test_metadata(self):
        meta = SampleFeaturePlugin.add_note._prefix_command

        assert meta["path"] == ("note",)
        assert meta["aliases"] == ["n"]
        assert meta["level"] == PermLevel.MODERATOR
        assert meta["guild_only"] is True
        assert meta["arguments"][0].name == "text"

    def test_sub_command_path(self):
        assert SampleFeaturePlugin.list_notes._prefix_command["path"] == ("note", "list")


class TestCommandRegistry:
    @pytest.mark.asyncio
    async def test_parents_registered_before_children(self, mock_bot):
        plugin = SampleFeaturePlugin(mock_bot)

        await plugin.on_load()

        handler = mock_bot.message_handler
        assert ("note",) in handler.commands
        assert ("n",) in handler.commands
        assert ("note", "list") in handler.commands
        assert handler.commands[("note",)].plugin_name == "samplefeature"
        assert len(plugin._command_registry.commands) == 2

    @pytest.mark.asyncio
    async def test_child_without_parent_is_skipped(self, mock_bot):
        plugin = OrphanPlugin(mock_bot)

        await plugin.on_load()

        assert ("missing", "child") not in mock_bot.message_handler.commands
        assert plugin._command_registry.commands == []

    @pytest.mark.asyncio
    async def test_unregister_removes_everything(self, mock_bot):
        plugin = SampleFeaturePlugin(mock_bot)
        await plugin.on_load()

        await plugin.on_unload()

        assert mock_bot.message_handler.commands == {}
        assert plugin._command_registry.commands == []

    @pytest.mark.asyncio
    async def test_mock_attributes_are_not_commands(self, mock_bot):
        plugin = SampleFeaturePlugin(mock_bot)
        plugin.helper = MagicMock()

        await plugin.on_load()

        assert sorted(mock_bot.message_handler.commands) == [("n",), ("note",), ("note", "list")]
        assert all(isinstance(cmd.level, PermLevel) for cmd in mock_bot.message_handler.commands.values())

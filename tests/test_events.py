"""
LevelBot - Message Event Tests
==============================

on_message routing for AFK bookkeeping and XP awards.
"""

import discord
import pytest
from unittest.mock import MagicMock, AsyncMock

from src.core.database import StoreError
from src.events.messages import MessageEvents
from src.services.leveling import LevelingService


def _mentioned(user_id=2, name="alice"):
    user = MagicMock()
    user.id = user_id
    user.name = name
    return user


class TestAfkRoute:
    """AFK handling on incoming messages."""

    @pytest.mark.asyncio
    async def test_welcome_back_clears_status(self, mock_bot, mock_discord_message, fake_store):
        mock_bot.afk.set(123456789, "Lunch", now_ms=0)

        cog = MessageEvents(mock_bot)
        await cog.on_message(mock_discord_message)

        reply = mock_discord_message.reply.call_args.args[0]
        assert reply.startswith("Welcome back, <@123456789>! **Lunch** (for **")
        assert "123456789" not in fake_store.afk

    @pytest.mark.asyncio
    async def test_no_reply_when_not_afk(self, mock_bot, mock_discord_message):
        cog = MessageEvents(mock_bot)
        await cog.on_message(mock_discord_message)

        mock_discord_message.reply.assert_not_called()

    @pytest.mark.asyncio
    async def test_mention_notice(self, mock_bot, mock_discord_message):
        mock_bot.afk.set(2, "Sleeping", now_ms=0)
        mock_discord_message.mentions = [_mentioned(2, "alice"), _mentioned(3, "bob")]

        cog = MessageEvents(mock_bot)
        await cog.on_message(mock_discord_message)

        notices = [c.args[0] for c in mock_discord_message.channel.send.call_args_list]
        afk_notices = [n for n in notices if "is currently AFK" in n]
        assert len(afk_notices) == 1
        assert afk_notices[0].startswith("alice is currently AFK: **Sleeping**")

    @pytest.mark.asyncio
    async def test_self_mention_ignored(self, mock_bot, mock_discord_message):
        mock_discord_message.mentions = [mock_discord_message.author]
        mock_bot.afk.set(123456789, "Lunch", now_ms=0)

        cog = MessageEvents(mock_bot)
        await cog.on_message(mock_discord_message)

        notices = [c.args[0] for c in mock_discord_message.channel.send.call_args_list]
        assert not any("is currently AFK" in n for n in notices)

    @pytest.mark.asyncio
    async def test_store_failure_does_not_block_xp(self, mock_bot, mock_discord_message, fake_store):
        mock_bot.afk.clear = MagicMock(side_effect=StoreError("locked"))

        cog = MessageEvents(mock_bot)
        await cog.on_message(mock_discord_message)

        assert fake_store.levels["123456789"]["xp"] == 10


class TestXpRoute:
    """XP awards on incoming messages."""

    @pytest.mark.asyncio
    async def test_awards_once_per_window(self, mock_bot, mock_discord_message, fake_store):
        cog = MessageEvents(mock_bot)
        await cog.on_message(mock_discord_message)
        await cog.on_message(mock_discord_message)

        assert fake_store.levels["123456789"] == {"user_id": "123456789", "xp": 10, "level": 1}

    @pytest.mark.asyncio
    async def test_bot_authors_ignored(self, mock_bot, mock_discord_message, fake_store):
        mock_discord_message.author.bot = True

        cog = MessageEvents(mock_bot)
        await cog.on_message(mock_discord_message)

        assert fake_store.levels == {}
        mock_discord_message.reply.assert_not_called()

    @pytest.mark.asyncio
    async def test_direct_messages_ignored(self, mock_bot, mock_discord_message, fake_store):
        mock_discord_message.guild = None

        cog = MessageEvents(mock_bot)
        await cog.on_message(mock_discord_message)

        assert fake_store.levels == {}

    @pytest.mark.asyncio
    async def test_level_up_in_message_channel(self, mock_bot, mock_discord_message, fake_store):
        mock_bot.leveling = LevelingService(fake_store, cooldown_seconds=60, xp_range=(100, 100))

        cog = MessageEvents(mock_bot)
        await cog.on_message(mock_discord_message)

        mock_discord_message.channel.send.assert_awaited_once_with("testuser leveled up to **2**! 🎉")
        assert fake_store.levels["123456789"] == {"user_id": "123456789", "xp": 0, "level": 2}

    @pytest.mark.asyncio
    async def test_level_up_in_configured_channel(self, mock_bot, mock_discord_message, fake_store, monkeypatch):
        monkeypatch.setenv("LEVEL_UP_CHANNEL_ID", "4242")
        announce = MagicMock()
        announce.send = AsyncMock()
        mock_bot.get_channel = MagicMock(return_value=announce)
        mock_bot.leveling = LevelingService(fake_store, cooldown_seconds=60, xp_range=(100, 100))

        cog = MessageEvents(mock_bot)
        await cog.on_message(mock_discord_message)

        mock_bot.get_channel.assert_called_once_with(4242)
        announce.send.assert_awaited_once_with("testuser leveled up to **2**! 🎉")
        mock_discord_message.channel.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_configured_channel_falls_back(self, mock_bot, mock_discord_message, fake_store, monkeypatch):
        monkeypatch.setenv("LEVEL_UP_CHANNEL_ID", "4242")
        mock_bot.leveling = LevelingService(fake_store, cooldown_seconds=60, xp_range=(100, 100))

        cog = MessageEvents(mock_bot)
        await cog.on_message(mock_discord_message)

        mock_discord_message.channel.send.assert_awaited_once_with("testuser leveled up to **2**! 🎉")

    @pytest.mark.asyncio
    async def test_send_failure_is_handled(self, mock_bot, mock_discord_message, fake_store):
        mock_bot.leveling = LevelingService(fake_store, cooldown_seconds=60, xp_range=(100, 100))
        mock_discord_message.channel.send = AsyncMock(
            side_effect=discord.Forbidden(MagicMock(status=403, reason="Forbidden"), "Missing Access")
        )

        cog = MessageEvents(mock_bot)
        await cog.on_message(mock_discord_message)

        assert fake_store.levels["123456789"]["level"] == 2

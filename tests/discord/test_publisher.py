"""Tests for publishing game threads to Discord."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from mlb_game_threads.discord.config import DiscordConfig
from mlb_game_threads.discord.publisher import THREAD_NAME_LIMIT, DiscordPublisher, ThreadHandle
from mlb_game_threads.presentation.blocks import ContentBlock
from tests.fakes.discord_objects import http_error, make_guild, make_thread

BLOCKS = [ContentBlock(title="Away @ Home")]


def _client(guilds: list[MagicMock], threads: dict[int, MagicMock] | None = None) -> MagicMock:
    client = MagicMock()
    client.guilds = guilds
    threads = threads or {}
    client.get_guild.side_effect = lambda guild_id: next((g for g in guilds if g.id == guild_id), None)
    client.get_channel.side_effect = threads.get
    client.fetch_channel = AsyncMock(side_effect=lambda thread_id: threads[thread_id])
    return client


class TestCreateThreads:
    async def test_one_thread_per_guild(self, discord_config: DiscordConfig) -> None:
        guilds = [make_guild(1, thread_id=10), make_guild(2, thread_id=20)]
        publisher = DiscordPublisher(_client(guilds), discord_config)

        handles = await publisher.create_threads("Away @ Home", BLOCKS)

        assert handles == [ThreadHandle(1, 10, 11), ThreadHandle(2, 20, 21)]
        forum = guilds[0].forums[0]
        kwargs = forum.create_thread.await_args.kwargs
        assert kwargs["name"] == "Away @ Home"
        assert [embed.title for embed in kwargs["embeds"]] == ["Away @ Home"]

    async def test_long_title_is_cut(self, discord_config: DiscordConfig) -> None:
        guild = make_guild()
        publisher = DiscordPublisher(_client([guild]), discord_config)

        await publisher.create_threads("x" * 150, BLOCKS)

        assert len(guild.forums[0].create_thread.await_args.kwargs["name"]) == THREAD_NAME_LIMIT

    async def test_missing_forum_is_created(self, discord_config: DiscordConfig) -> None:
        guild = make_guild(forum_name="general")
        forum = guild.forums[0]
        guild.forums = []
        publisher = DiscordPublisher(_client([guild]), discord_config)

        handles = await publisher.create_threads("Away @ Home", BLOCKS)

        guild.create_forum.assert_awaited_once_with(discord_config.forum_channel)
        forum.create_thread.assert_awaited_once()
        assert len(handles) == 1

    async def test_rejected_guild_does_not_stop_others(
        self, discord_config: DiscordConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        failing, working = make_guild(1), make_guild(2, thread_id=20)
        failing.forums[0].create_thread.side_effect = discord.Forbidden(**http_error(403))
        publisher = DiscordPublisher(_client([failing, working]), discord_config)

        with caplog.at_level(logging.ERROR):
            handles = await publisher.create_threads("Away @ Home", BLOCKS)

        assert handles == [ThreadHandle(2, 20, 21)]
        assert "Could not create thread" in caplog.text

    async def test_dev_guild_only(self, dev_discord_config: DiscordConfig) -> None:
        dev, other = make_guild(1, forum_name="dev-threads"), make_guild(2)
        publisher = DiscordPublisher(_client([dev, other]), dev_discord_config)

        handles = await publisher.create_threads("Away @ Home", BLOCKS)

        assert [handle.guild_id for handle in handles] == [1]
        other.forums[0].create_thread.assert_not_awaited()

    async def test_missing_dev_guild_publishes_nowhere(
        self, dev_discord_config: DiscordConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        publisher = DiscordPublisher(_client([make_guild(2)]), dev_discord_config)

        with caplog.at_level(logging.WARNING):
            assert await publisher.create_threads("Away @ Home", BLOCKS) == []
        assert "Dev guild 1" in caplog.text


class TestEditRootMessage:
    async def test_edits_starter_message(self, discord_config: DiscordConfig) -> None:
        thread = make_thread(10)
        publisher = DiscordPublisher(_client([], {10: thread}), discord_config)

        await publisher.edit_root_message([ThreadHandle(1, 10, 11)], BLOCKS)

        thread.get_partial_message.assert_called_once_with(11)
        edit = thread.get_partial_message.return_value.edit
        assert [embed.title for embed in edit.await_args.kwargs["embeds"]] == ["Away @ Home"]

    async def test_uncached_thread_is_fetched(self, discord_config: DiscordConfig) -> None:
        thread = make_thread(10)
        client = _client([], {10: thread})
        client.get_channel.side_effect = lambda thread_id: None
        publisher = DiscordPublisher(client, discord_config)

        await publisher.edit_root_message([ThreadHandle(1, 10, 11)], BLOCKS)

        client.fetch_channel.assert_awaited_once_with(10)
        thread.get_partial_message.return_value.edit.assert_awaited_once()

    async def test_deleted_message_is_skipped(
        self, discord_config: DiscordConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        gone, alive = make_thread(10), make_thread(20)
        gone.get_partial_message.return_value.edit.side_effect = discord.NotFound(**http_error(404))
        publisher = DiscordPublisher(_client([], {10: gone, 20: alive}), discord_config)

        with caplog.at_level(logging.WARNING):
            await publisher.edit_root_message([ThreadHandle(1, 10, 11), ThreadHandle(2, 20, 21)], BLOCKS)

        alive.get_partial_message.return_value.edit.assert_awaited_once()
        assert "is gone" in caplog.text


class TestPostMessage:
    async def test_posts_to_every_thread(self, discord_config: DiscordConfig) -> None:
        threads = {10: make_thread(10), 20: make_thread(20)}
        publisher = DiscordPublisher(_client([], threads), discord_config)

        await publisher.post_message([ThreadHandle(1, 10, 11), ThreadHandle(2, 20, 21)], BLOCKS)

        for thread in threads.values():
            thread.send.assert_awaited_once()
            thread.send.return_value.pin.assert_not_awaited()

    async def test_pins_when_requested(self, discord_config: DiscordConfig) -> None:
        thread = make_thread(10)
        publisher = DiscordPublisher(_client([], {10: thread}), discord_config)

        await publisher.post_message([ThreadHandle(1, 10, 11)], BLOCKS, pin=True)

        thread.send.return_value.pin.assert_awaited_once()

    async def test_failed_send_does_not_stop_others(
        self, discord_config: DiscordConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        broken, working = make_thread(10), make_thread(20)
        broken.send.side_effect = discord.HTTPException(**http_error(500))
        publisher = DiscordPublisher(_client([], {10: broken, 20: working}), discord_config)

        with caplog.at_level(logging.ERROR):
            await publisher.post_message([ThreadHandle(1, 10, 11), ThreadHandle(2, 20, 21)], BLOCKS, pin=True)

        working.send.assert_awaited_once()
        working.send.return_value.pin.assert_awaited_once()
        assert "Could not post to thread 10" in caplog.text

    @pytest.mark.parametrize("error", [ConnectionResetError("reset by peer"), TimeoutError()])
    async def test_dropped_connection_does_not_stop_others(
        self, discord_config: DiscordConfig, error: Exception, caplog: pytest.LogCaptureFixture
    ) -> None:
        broken, working = make_thread(10), make_thread(20)
        broken.send.side_effect = error
        publisher = DiscordPublisher(_client([], {10: broken, 20: working}), discord_config)

        with caplog.at_level(logging.ERROR):
            await publisher.post_message([ThreadHandle(1, 10, 11), ThreadHandle(2, 20, 21)], BLOCKS)

        working.send.assert_awaited_once()
        assert "Could not post to thread 10" in caplog.text

    async def test_failed_pin_is_logged(self, discord_config: DiscordConfig, caplog: pytest.LogCaptureFixture) -> None:
        thread = make_thread(10)
        thread.send.return_value.pin.side_effect = discord.Forbidden(**http_error(403))
        publisher = DiscordPublisher(_client([], {10: thread}), discord_config)

        with caplog.at_level(logging.ERROR):
            await publisher.post_message([ThreadHandle(1, 10, 11)], BLOCKS, pin=True)

        assert "Could not pin message 500" in caplog.text

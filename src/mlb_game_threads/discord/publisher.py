"""Publishing game threads to Discord forum channels.

Every guild the bot belongs to (or only the dev guild, when configured) gets
its own thread. Calls against different guilds and threads are independent:
a rejected request is logged and the remaining ones still go out.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import discord

from mlb_game_threads.discord.embeds import to_embeds

if TYPE_CHECKING:
    from mlb_game_threads.discord.config import DiscordConfig
    from mlb_game_threads.presentation.blocks import ContentBlock

logger = logging.getLogger(__name__)

THREAD_NAME_LIMIT = 100

# discord.py lets connection drops and timeouts through as-is
SINK_ERRORS = (discord.HTTPException, OSError, asyncio.TimeoutError)


@dataclass(frozen=True)
class ThreadHandle:
    guild_id: int
    thread_id: int
    starter_message_id: int


class GameThreadSink(Protocol):
    async def create_threads(self, title: str, blocks: Sequence[ContentBlock]) -> list[ThreadHandle]: ...

    async def edit_root_message(self, handles: Sequence[ThreadHandle], blocks: Sequence[ContentBlock]) -> None: ...

    async def post_message(
        self, handles: Sequence[ThreadHandle], blocks: Sequence[ContentBlock], *, pin: bool = False
    ) -> None: ...


class DiscordPublisher:
    def __init__(self, client: discord.Client, config: DiscordConfig) -> None:
        self._client = client
        self._config = config

    def _guilds(self) -> list[discord.Guild]:
        if self._config.dev_guild_id is None:
            return list(self._client.guilds)
        guild = self._client.get_guild(self._config.dev_guild_id)
        if guild is None:
            logger.warning("Dev guild %s is not available to the bot", self._config.dev_guild_id)
            return []
        return [guild]

    async def _forum_channel(self, guild: discord.Guild) -> discord.ForumChannel:
        for forum in guild.forums:
            if forum.name == self._config.forum_channel:
                return forum
        logger.info("Creating forum channel %r in guild %s", self._config.forum_channel, guild.id)
        return await guild.create_forum(self._config.forum_channel)

    async def _thread(self, handle: ThreadHandle) -> discord.Thread:
        channel = self._client.get_channel(handle.thread_id)
        if channel is None:
            channel = await self._client.fetch_channel(handle.thread_id)
        return channel  # type: ignore[return-value]

    async def create_threads(self, title: str, blocks: Sequence[ContentBlock]) -> list[ThreadHandle]:
        embeds = to_embeds(blocks)
        handles: list[ThreadHandle] = []
        for guild in self._guilds():
            try:
                forum = await self._forum_channel(guild)
                created = await forum.create_thread(name=title[:THREAD_NAME_LIMIT], embeds=embeds)
            except SINK_ERRORS:
                logger.exception("Could not create thread %r in guild %s", title, guild.id)
                continue
            logger.debug("Created thread %s in guild %s", created.thread.id, guild.id)
            handles.append(ThreadHandle(guild.id, created.thread.id, created.message.id))
        return handles

    async def edit_root_message(self, handles: Sequence[ThreadHandle], blocks: Sequence[ContentBlock]) -> None:
        embeds = to_embeds(blocks)
        for handle in handles:
            try:
                thread = await self._thread(handle)
                await thread.get_partial_message(handle.starter_message_id).edit(embeds=embeds)
            except discord.NotFound:
                logger.warning("Starter message of thread %s is gone; skipping edit", handle.thread_id)
            except SINK_ERRORS:
                logger.exception("Could not edit starter message of thread %s", handle.thread_id)

    async def post_message(
        self, handles: Sequence[ThreadHandle], blocks: Sequence[ContentBlock], *, pin: bool = False
    ) -> None:
        embeds = to_embeds(blocks)
        for handle in handles:
            try:
                thread = await self._thread(handle)
                message = await thread.send(embeds=embeds)
            except SINK_ERRORS:
                logger.exception("Could not post to thread %s", handle.thread_id)
                continue
            if not pin:
                continue
            try:
                await message.pin()
            except SINK_ERRORS:
                logger.exception("Could not pin message %s in thread %s", message.id, handle.thread_id)

"""Discord client that runs the game-day scheduler.

The client only publishes; it does not read messages. Once connected it
starts a ``GameDayRunner`` that discovers games and drives one controller
per game.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import discord

from mlb_game_threads.discord.publisher import DiscordPublisher
from mlb_game_threads.game.daily import GameDayRunner
from mlb_game_threads.statsapi.client import StatsApiClient

if TYPE_CHECKING:
    from mlb_game_threads.config import BotSettings
    from mlb_game_threads.discord.config import DiscordConfig
    from mlb_game_threads.statsapi.protocols import StatsGateway

logger = logging.getLogger(__name__)


class GameThreadBot(discord.Client):
    """Discord bot that keeps one forum thread per MLB game up to date."""

    def __init__(
        self,
        settings: BotSettings,
        config: DiscordConfig,
        *,
        gateway: StatsGateway | None = None,
        **kwargs,
    ) -> None:
        """Initialize the bot.

        Args:
            settings: Scheduling and refresh settings.
            config: Discord configuration.
            gateway: Stats source; a ``StatsApiClient`` is created (and closed with the bot) when omitted.
            **kwargs: Additional arguments passed to discord.Client.
        """
        super().__init__(intents=discord.Intents.default(), **kwargs)

        self._settings = settings
        self._config = config
        self._owned_client = StatsApiClient() if gateway is None else None
        self._gateway: StatsGateway = gateway if gateway is not None else self._owned_client
        self._runner: GameDayRunner | None = None
        self._runner_task: asyncio.Task[None] | None = None

    @property
    def runner(self) -> GameDayRunner | None:
        return self._runner

    async def on_ready(self) -> None:
        """Start the game-day runner on the first ready event.

        Discord fires ``on_ready`` again after every reconnect; the runner is
        only ever started once.
        """
        logger.info("Bot is ready. Logged in as %s (ID: %s)", self.user, self.user.id if self.user else "unknown")
        if self._runner is not None:
            return
        self._runner = GameDayRunner(self._gateway, DiscordPublisher(self, self._config), self._settings)
        self._runner_task = asyncio.create_task(self._runner.run_forever(), name="game-day-runner")

    async def close(self) -> None:
        if self._runner_task is not None:
            self._runner_task.cancel()
        if self._runner is not None:
            self._runner.stop()
        if self._owned_client is not None:
            await self._owned_client.close()
        await super().close()


def create_bot(settings: BotSettings, config: DiscordConfig) -> GameThreadBot:
    return GameThreadBot(settings, config)


async def run_bot(settings: BotSettings, config: DiscordConfig) -> None:
    """Run the Discord bot until it disconnects."""
    bot = create_bot(settings, config)
    await bot.start(config.bot_token)

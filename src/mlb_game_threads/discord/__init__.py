"""Discord frontend for the MLB game thread bot.

The bot creates one forum thread per game in every guild it belongs to and
keeps it updated for as long as the game runs.

Public API:
    create_bot(settings, config) -> GameThreadBot
    run_bot(settings, config) -> None (async)
    load_discord_config() -> DiscordConfig

Example usage:
    import asyncio
    from mlb_game_threads.config import load_bot_settings
    from mlb_game_threads.discord import load_discord_config, run_bot

    asyncio.run(run_bot(load_bot_settings(), load_discord_config()))
"""

from mlb_game_threads.discord.bot import (
    GameThreadBot,
    create_bot,
    run_bot,
)
from mlb_game_threads.discord.config import (
    ConfigurationError,
    DiscordConfig,
    load_discord_config,
)
from mlb_game_threads.discord.publisher import (
    DiscordPublisher,
    GameThreadSink,
    ThreadHandle,
)

__all__ = [
    "ConfigurationError",
    "DiscordConfig",
    "DiscordPublisher",
    "GameThreadBot",
    "GameThreadSink",
    "ThreadHandle",
    "create_bot",
    "load_discord_config",
    "run_bot",
]

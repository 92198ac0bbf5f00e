"""Discord bot configuration.

Loads configuration from environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_FORUM_CHANNEL = "mlb-game-threads"


@dataclass(frozen=True)
class DiscordConfig:
    """Configuration for the Discord bot.

    Attributes:
        bot_token: Discord bot token (required).
        dev_guild_id: Optional guild ID. When set, threads are only published
            to this guild (development use).
        forum_channel: Name of the forum channel that holds the game threads.
            Created in each guild if missing.
    """

    bot_token: str
    dev_guild_id: int | None = None
    forum_channel: str = DEFAULT_FORUM_CHANNEL


class ConfigurationError(Exception):
    """Raised when required configuration is missing."""


def load_discord_config() -> DiscordConfig:
    """Load Discord configuration from environment variables.

    Environment variables:
        DISCORD_BOT_TOKEN: Required. The Discord bot token.
        DISCORD_DEV_GUILD_ID: Optional. Restrict publishing to one guild.
        DISCORD_FORUM_CHANNEL: Optional. Forum channel name (default ``mlb-game-threads``).

    Raises:
        ConfigurationError: If required environment variables are missing or malformed.
    """
    bot_token = os.environ.get("DISCORD_BOT_TOKEN")
    if not bot_token:
        raise ConfigurationError("DISCORD_BOT_TOKEN environment variable is required")

    dev_guild_id: int | None = None
    dev_guild_str = os.environ.get("DISCORD_DEV_GUILD_ID", "").strip()
    if dev_guild_str:
        try:
            dev_guild_id = int(dev_guild_str)
        except ValueError as e:
            raise ConfigurationError(f"DISCORD_DEV_GUILD_ID must be an integer: {e}") from e

    forum_channel = os.environ.get("DISCORD_FORUM_CHANNEL", "").strip() or DEFAULT_FORUM_CHANNEL

    return DiscordConfig(
        bot_token=bot_token,
        dev_guild_id=dev_guild_id,
        forum_channel=forum_channel,
    )

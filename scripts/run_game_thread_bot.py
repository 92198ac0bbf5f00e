#!/usr/bin/env python
"""Entry point script for running the game thread bot.

Usage:
    DISCORD_BOT_TOKEN=xxx uv run python scripts/run_game_thread_bot.py

Environment variables:
    DISCORD_BOT_TOKEN: Required. The Discord bot token.
    DISCORD_DEV_GUILD_ID: Optional. Only publish to this guild.
    DISCORD_FORUM_CHANNEL: Optional. Forum channel name (default mlb-game-threads).
    GAMETHREAD__SECTION__KEY: Optional. Overrides for gamethread.yaml settings.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from mlb_game_threads.cli._logging import configure_logging
from mlb_game_threads.config import load_bot_settings
from mlb_game_threads.discord import ConfigurationError, load_discord_config, run_bot


def main() -> int:
    """Run the game thread bot."""
    configure_logging()
    logger = logging.getLogger(__name__)

    try:
        config = load_discord_config()
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 1

    settings = load_bot_settings()
    logger.info("Starting game thread bot...")
    try:
        asyncio.run(run_bot(settings, config))
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
    except Exception:
        logger.exception("Bot crashed")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

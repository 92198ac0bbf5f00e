"""Test fixtures for Discord bot tests."""

from __future__ import annotations

import pytest

from mlb_game_threads.discord.config import DiscordConfig


@pytest.fixture
def discord_config() -> DiscordConfig:
    """Create a test Discord configuration."""
    return DiscordConfig(bot_token="test-token-123")


@pytest.fixture
def dev_discord_config() -> DiscordConfig:
    """Create a test Discord configuration restricted to one guild."""
    return DiscordConfig(bot_token="test-token-123", dev_guild_id=1, forum_channel="dev-threads")

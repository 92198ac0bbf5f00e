"""Conversion of content blocks to Discord embeds within Discord's size limits."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import discord

from mlb_game_threads.presentation.blocks import ContentBlock

logger = logging.getLogger(__name__)

TITLE_LIMIT = 256
DESCRIPTION_LIMIT = 4096
AUTHOR_LIMIT = 256
FOOTER_LIMIT = 2048
FIELD_NAME_LIMIT = 256
FIELD_VALUE_LIMIT = 1024
FIELD_COUNT_LIMIT = 25
EMBEDS_PER_MESSAGE = 10
MESSAGE_TOTAL_LIMIT = 6000

_FENCE = "```"
_BLANK = "\u200b"


def truncate(content: str, max_length: int) -> str:
    """Truncate *content* to *max_length*, keeping a trailing code fence closed."""
    if len(content) <= max_length:
        return content
    if content.endswith(_FENCE):
        suffix = "...\n" + _FENCE
        return content[: max_length - len(suffix)] + suffix
    return content[: max_length - 3] + "..."


def to_embed(block: ContentBlock) -> discord.Embed:
    embed = discord.Embed(
        title=truncate(block.title, TITLE_LIMIT) or None,
        description=truncate(block.description, DESCRIPTION_LIMIT) or None,
        url=block.url or None,
        color=block.color,
    )
    if block.author_name:
        embed.set_author(
            name=truncate(block.author_name, AUTHOR_LIMIT),
            url=block.author_url or None,
            icon_url=block.author_icon_url or None,
        )
    if block.thumbnail_url:
        embed.set_thumbnail(url=block.thumbnail_url)
    if block.footer:
        embed.set_footer(text=truncate(block.footer, FOOTER_LIMIT))
    if len(block.fields) > FIELD_COUNT_LIMIT:
        logger.warning("Dropping %d field(s) from %r", len(block.fields) - FIELD_COUNT_LIMIT, block.title)
    for field in block.fields[:FIELD_COUNT_LIMIT]:
        embed.add_field(
            name=truncate(field.name, FIELD_NAME_LIMIT) or _BLANK,
            value=truncate(field.value, FIELD_VALUE_LIMIT) or _BLANK,
            inline=field.inline,
        )
    return embed


def to_embeds(blocks: Sequence[ContentBlock]) -> list[discord.Embed]:
    """Convert blocks for one message, dropping trailing blocks that do not fit."""
    embeds: list[discord.Embed] = []
    total = 0
    for block in blocks[:EMBEDS_PER_MESSAGE]:
        embed = to_embed(block)
        size = len(embed)
        if total + size > MESSAGE_TOTAL_LIMIT:
            break
        embeds.append(embed)
        total += size
    if len(embeds) < len(blocks):
        logger.warning("Message too large; sending %d of %d block(s)", len(embeds), len(blocks))
    return embeds

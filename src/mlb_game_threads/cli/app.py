from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated

import typer

from mlb_game_threads.cli._logging import configure_logging
from mlb_game_threads.cli._output import print_error, print_thread_preview
from mlb_game_threads.config import build_overrides, create_config, load_bot_settings
from mlb_game_threads.discord import ConfigurationError, load_discord_config, run_bot
from mlb_game_threads.domain.result import Err, Ok, Result
from mlb_game_threads.game.plays import Announcement, PlayLogTracker
from mlb_game_threads.game.store import EventSnapshotStore
from mlb_game_threads.presentation.summary import root_blocks, thread_title
from mlb_game_threads.statsapi.client import StatsApiClient

if TYPE_CHECKING:
    from datetime import tzinfo

    from mlb_game_threads.domain.errors import GatewayError
    from mlb_game_threads.presentation.blocks import ContentBlock
    from mlb_game_threads.statsapi.protocols import StatsGateway

logger = logging.getLogger(__name__)

app = typer.Typer(name="mlb-game-threads", help="MLB game threads for Discord")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
) -> None:
    """MLB game threads for Discord."""
    configure_logging(verbose=verbose)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


_ConfigOpt = Annotated[str, typer.Option("--config", help="Path to the YAML settings file")]


@app.command()
def run(
    dev: Annotated[bool | None, typer.Option("--dev/--no-dev", help="Replay recorded timecodes instead of polling")] = None,
    team_id: Annotated[int | None, typer.Option("--team-id", help="Only follow games of this team")] = None,
    config_file: _ConfigOpt = "gamethread.yaml",
) -> None:
    """Start the Discord bot."""
    try:
        discord_config = load_discord_config()
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    settings = load_bot_settings(create_config(config_file, overrides=build_overrides(dev=dev, team_id=team_id)))
    logger.info("Starting game thread bot (dev=%s, team=%s)", settings.dev.enabled, settings.team_id)
    try:
        asyncio.run(run_bot(settings, discord_config))
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")


@dataclass(frozen=True)
class ThreadPreview:
    title: str
    blocks: list[ContentBlock]
    announcements: list[Announcement]


async def build_preview(
    gateway: StatsGateway, game_pk: int, timecode: str | None = None, tz: tzinfo | None = None
) -> Result[ThreadPreview, GatewayError]:
    """Load one game and render what its thread would contain, without publishing."""
    match await EventSnapshotStore(gateway).load(game_pk, timecode):
        case Ok(snapshot):
            return Ok(
                ThreadPreview(
                    title=thread_title(snapshot, tz),
                    blocks=root_blocks(snapshot, tz),
                    announcements=PlayLogTracker().extract(snapshot),
                )
            )
        case Err(e):
            return Err(e)


async def _load_preview(game_pk: int, timecode: str | None, tz: tzinfo | None) -> Result[ThreadPreview, GatewayError]:
    client = StatsApiClient()
    try:
        return await build_preview(client, game_pk, timecode, tz)
    finally:
        await client.close()


@app.command()
def preview(
    game_pk: Annotated[int, typer.Argument(help="MLB game id (gamePk)")],
    timecode: Annotated[
        str | None, typer.Option("--timecode", help="Load the feed as of YYYYMMDD_HHMMSS (UTC)")
    ] = None,
    config_file: _ConfigOpt = "gamethread.yaml",
) -> None:
    """Print the thread a game would get, without connecting to Discord."""
    settings = load_bot_settings(create_config(config_file))
    match asyncio.run(_load_preview(game_pk, timecode, settings.tz)):
        case Ok(result):
            print_thread_preview(result.title, result.blocks, result.announcements)
        case Err(e):
            print_error(f"{e.endpoint}: {e.message}")
            raise typer.Exit(code=1)

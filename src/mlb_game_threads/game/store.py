from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from mlb_game_threads.domain.content import GameContent
from mlb_game_threads.domain.errors import GatewayError
from mlb_game_threads.domain.player import PlayerInfo, SplitLine
from mlb_game_threads.domain.result import Err, Ok, Result
from mlb_game_threads.domain.snapshot import SIDES, EventSnapshot, Side

if TYPE_CHECKING:
    from mlb_game_threads.domain.feed import LiveFeed
    from mlb_game_threads.domain.schedule import ScheduleEntry
    from mlb_game_threads.domain.standings import DivisionStandings
    from mlb_game_threads.statsapi.protocols import StatsGateway

logger = logging.getLogger(__name__)

SCHEDULE_HYDRATE = "broadcasts"


def _opposite(side: Side) -> Side:
    return "away" if side == "home" else "home"


def build_roster(feed: LiveFeed, previous: dict[int, PlayerInfo] | None = None) -> dict[int, PlayerInfo]:
    """Index every player in the feed by id with their boxscore attached.

    Entries already in *previous* are kept and have their profile and
    boxscore overwritten with the newer values.
    """
    roster = dict(previous or {})
    boxscores = feed.player_boxscores()
    for player_id, profile in feed.players.items():
        existing = roster.get(player_id)
        box = boxscores.get(player_id)
        if existing is None:
            roster[player_id] = PlayerInfo(profile=profile) if box is None else PlayerInfo(profile=profile, boxscore=box)
        else:
            roster[player_id] = existing.with_update(profile, box)
    for player_id, box in boxscores.items():
        if player_id not in feed.players and player_id in roster:
            roster[player_id] = roster[player_id].with_update(None, box)
    return roster


class EventSnapshotStore:
    """Loads and refreshes the snapshot of one game.

    A refresh either replaces the current snapshot with a complete new one or
    leaves it untouched; fetch results from a failed cycle are discarded.
    """

    def __init__(self, gateway: StatsGateway) -> None:
        self._gateway = gateway
        self._snapshot: EventSnapshot | None = None
        self._splits: dict[Side, dict[int, SplitLine]] = {"home": {}, "away": {}}
        self._splits_fetched: set[Side] = set()
        self._closed = False

    @property
    def snapshot(self) -> EventSnapshot | None:
        return self._snapshot

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    async def load(self, event_id: int, timecode: str | None = None) -> Result[EventSnapshot, GatewayError]:
        logger.debug("Loading game %d (timecode=%s)", event_id, timecode)
        fetched = await self._fetch_cycle(event_id, timecode)
        if isinstance(fetched, Err):
            return fetched
        schedule, feed, content = fetched.value

        standings = await self._fetch_standings(feed)
        snapshot = EventSnapshot(
            event_id=event_id,
            schedule=schedule,
            feed=feed,
            content=content,
            roster=build_roster(feed),
            splits=self._splits_copy(),
            standings=standings,
        )
        return await self._commit(snapshot)

    async def refresh(self, timecode: str | None = None) -> Result[EventSnapshot, GatewayError]:
        current = self._snapshot
        if current is None:
            return Err(GatewayError(message="refresh called before load", endpoint="store"))

        fetched = await self._fetch_cycle(current.event_id, timecode)
        if isinstance(fetched, Err):
            logger.warning("Refresh of game %d failed, keeping previous snapshot", current.event_id)
            return fetched
        schedule, feed, content = fetched.value

        snapshot = EventSnapshot(
            event_id=current.event_id,
            schedule=schedule,
            feed=feed,
            content=content,
            roster=build_roster(feed, current.roster),
            splits=self._splits_copy(),
            standings=current.standings,
        )
        return await self._commit(snapshot)

    async def _commit(self, snapshot: EventSnapshot) -> Result[EventSnapshot, GatewayError]:
        if self._closed:
            return Err(GatewayError(message="store closed during fetch", endpoint="store"))
        self._snapshot = snapshot
        await self._load_splits(snapshot)
        return Ok(self._snapshot if self._snapshot is not None else snapshot)

    async def _fetch_cycle(
        self, event_id: int, timecode: str | None
    ) -> Result[tuple[ScheduleEntry, LiveFeed, GameContent], GatewayError]:
        schedule_result, feed_result, content_result = await asyncio.gather(
            self._gateway.fetch_schedule(game_pks=(event_id,), hydrate=SCHEDULE_HYDRATE),
            self._gateway.fetch_live_feed(event_id, timecode),
            self._gateway.fetch_content(event_id),
        )

        if isinstance(schedule_result, Err):
            return schedule_result
        schedule = next((entry for entry in schedule_result.value if entry.game_pk == event_id), None)
        if schedule is None:
            return Err(GatewayError(message=f"no schedule entry for game {event_id}", endpoint="schedule"))

        if isinstance(feed_result, Err):
            return feed_result
        feed = feed_result.value

        match content_result:
            case Ok(content):
                pass
            case Err(error):
                logger.warning("Content for game %d unavailable: %s", event_id, error.message)
                content = self._snapshot.content if self._snapshot is not None else GameContent()

        return Ok((schedule, feed, content))

    async def _fetch_standings(self, feed: LiveFeed) -> tuple[DivisionStandings, ...]:
        league_ids = sorted({lid for lid in (feed.home.league_id, feed.away.league_id) if lid is not None})
        if not league_ids:
            return ()
        match await self._gateway.fetch_standings(league_ids):
            case Ok(divisions):
                return tuple(divisions)
            case Err(error):
                logger.warning("Standings unavailable: %s", error.message)
                return ()

    def _needs_splits(self, snapshot: EventSnapshot, side: Side) -> int | None:
        """Return the opposing pitcher id when *side* is ready for a splits fetch."""
        if side in self._splits_fetched:
            return None
        if not snapshot.boxscore(side).has_lineup:
            return None
        pitchers = snapshot.feed.probable_pitchers
        return pitchers.away_id if side == "home" else pitchers.home_id

    async def _load_splits(self, snapshot: EventSnapshot) -> None:
        pending: list[tuple[Side, int]] = []
        for side in SIDES:
            pitcher_id = self._needs_splits(snapshot, side)
            if pitcher_id is not None:
                logger.debug("%s lineup posted and %s pitcher known; loading splits", side, _opposite(side))
                pending.append((side, pitcher_id))
        if not pending:
            return

        results = await asyncio.gather(
            *(self._gateway.fetch_splits(snapshot.boxscore(side).batting_order, pitcher_id) for side, pitcher_id in pending)
        )
        for (side, _), result in zip(pending, results, strict=True):
            match result:
                case Ok(lines):
                    self._splits[side] = lines
                    self._splits_fetched.add(side)
                case Err(error):
                    logger.warning("Splits for %s batters unavailable, will retry: %s", side, error.message)

        if not self._closed and self._snapshot is snapshot:
            self._snapshot = replace(snapshot, splits=self._splits_copy())

    def _splits_copy(self) -> dict[Side, dict[int, SplitLine]]:
        return {side: dict(lines) for side, lines in self._splits.items()}

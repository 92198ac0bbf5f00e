from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import date, datetime
from typing import TYPE_CHECKING

from mlb_game_threads.dates import parse_schedule_date, seconds_until_hour
from mlb_game_threads.domain.result import Err, Ok
from mlb_game_threads.game.controller import GameThreadController
from mlb_game_threads.game.phase import CadencePolicy
from mlb_game_threads.game.scheduler import IntervalScheduler, RefreshScheduler, ReplayScheduler

if TYPE_CHECKING:
    from mlb_game_threads.config import BotSettings
    from mlb_game_threads.discord.publisher import GameThreadSink
    from mlb_game_threads.domain.schedule import ScheduleEntry
    from mlb_game_threads.statsapi.protocols import StatsGateway

logger = logging.getLogger(__name__)


class GameDayRunner:
    """Discovers each day's games and runs one controller per game.

    In production the discovery runs immediately and then every day at
    ``settings.daily_hour``. In dev mode it runs once, for
    ``settings.dev.schedule_date``, with every controller replaying the
    configured timecodes instead of following the wall clock.
    """

    def __init__(
        self,
        gateway: StatsGateway,
        sink: GameThreadSink,
        settings: BotSettings,
        *,
        clock: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._gateway = gateway
        self._sink = sink
        self._settings = settings
        self._clock = clock
        self._sleep = sleep
        self._controllers: dict[int, GameThreadController] = {}

    @property
    def active_controllers(self) -> list[GameThreadController]:
        self._prune()
        return list(self._controllers.values())

    def _prune(self) -> None:
        for game_pk in [pk for pk, controller in self._controllers.items() if controller.is_terminated]:
            del self._controllers[game_pk]

    def _wanted(self, entry: ScheduleEntry) -> bool:
        team_id = self._settings.team_id
        return team_id is None or team_id in (entry.home.id, entry.away.id)

    async def discover(self, game_date: date) -> list[int]:
        match await self._gateway.fetch_schedule(game_date=game_date, team_id=self._settings.team_id):
            case Err(error):
                logger.error("Could not load the schedule for %s: %s", game_date, error.message)
                return []
            case Ok(entries):
                game_pks = [entry.game_pk for entry in entries if self._wanted(entry)]
                logger.info("Found %d game(s) on %s", len(game_pks), game_date)
                return game_pks

    def _scheduler_for(self, game_pk: int) -> tuple[RefreshScheduler, str | None]:
        dev = self._settings.dev
        if dev.enabled:
            first = dev.timecodes[0] if dev.timecodes else None
            scheduler = ReplayScheduler(dev.timecodes[1:], pause_seconds=dev.replay_seconds, name=f"replay-{game_pk}")
            return scheduler, first
        return IntervalScheduler(self._settings.preview_minutes, name=f"game-{game_pk}"), None

    async def _start_game(self, game_pk: int) -> GameThreadController | None:
        scheduler, timecode = self._scheduler_for(game_pk)
        controller = GameThreadController(
            game_pk,
            self._gateway,
            self._sink,
            scheduler,
            CadencePolicy(self._settings.preview_minutes, self._settings.live_minutes),
            tz=self._settings.tz,
        )
        if not await controller.initialize(timecode):
            return None
        if not controller.is_terminated:
            self._controllers[game_pk] = controller
        return controller

    async def start_day(self, game_date: date) -> list[GameThreadController]:
        self._prune()
        game_pks = [pk for pk in await self.discover(game_date) if pk not in self._controllers]
        results = await asyncio.gather(*(self._start_game(pk) for pk in game_pks), return_exceptions=True)

        started = []
        for game_pk, result in zip(game_pks, results, strict=True):
            if isinstance(result, BaseException):
                logger.error("Game %d failed to start", game_pk, exc_info=result)
            elif result is not None:
                started.append(result)
        logger.info("Started %d of %d game(s) for %s", len(started), len(game_pks), game_date)
        return started

    def dev_schedule_date(self) -> date:
        value = self._settings.dev.schedule_date
        return parse_schedule_date(value) if value else self._clock().date()

    async def run_forever(self) -> None:
        if self._settings.dev.enabled:
            await self.start_day(self.dev_schedule_date())
            return
        while True:
            today = self._clock().date()
            try:
                await self.start_day(today)
            except Exception:
                logger.exception("Schedule check for %s failed", today)
            delay = seconds_until_hour(self._clock(), self._settings.daily_hour)
            logger.info("Next schedule check in %.0f seconds", delay)
            await self._sleep(delay)

    def stop(self) -> None:
        for controller in list(self._controllers.values()):
            controller.terminate()
        self._controllers.clear()

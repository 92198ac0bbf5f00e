"""Lifecycle of one game thread.

A controller loads its game, creates the threads, then refreshes on a timer:
each tick overwrites the root message, posts newly completed plays, speeds
up the cadence once the game goes Live, and stops for good once the game is
Final (with nothing left to announce) or Postponed.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

from mlb_game_threads.domain.result import Err, Ok
from mlb_game_threads.domain.status import is_terminal
from mlb_game_threads.game.phase import CadencePolicy
from mlb_game_threads.game.plays import PlayLogTracker
from mlb_game_threads.game.store import EventSnapshotStore
from mlb_game_threads.presentation.summary import root_blocks, thread_title

if TYPE_CHECKING:
    from datetime import tzinfo

    from mlb_game_threads.discord.publisher import GameThreadSink, ThreadHandle
    from mlb_game_threads.domain.snapshot import EventSnapshot
    from mlb_game_threads.game.scheduler import RefreshScheduler
    from mlb_game_threads.statsapi.protocols import StatsGateway

logger = logging.getLogger(__name__)


class ControllerState(StrEnum):
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"
    PUBLISHING = "publishing"
    TERMINATED = "terminated"


class GameThreadController:
    def __init__(
        self,
        event_id: int,
        gateway: StatsGateway,
        sink: GameThreadSink,
        scheduler: RefreshScheduler,
        cadence: CadencePolicy | None = None,
        *,
        tz: tzinfo | None = None,
    ) -> None:
        self.event_id = event_id
        self._store = EventSnapshotStore(gateway)
        self._sink = sink
        self._scheduler = scheduler
        self._cadence = cadence if cadence is not None else CadencePolicy()
        self._tracker = PlayLogTracker()
        self._tz = tz
        self._handles: tuple[ThreadHandle, ...] = ()
        self._state = ControllerState.UNINITIALIZED

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def snapshot(self) -> EventSnapshot | None:
        return self._store.snapshot

    @property
    def thread_handles(self) -> tuple[ThreadHandle, ...]:
        return self._handles

    @property
    def last_announced_index(self) -> int:
        return self._tracker.last_announced_index

    @property
    def is_terminated(self) -> bool:
        return self._state is ControllerState.TERMINATED

    async def initialize(self, timecode: str | None = None) -> bool:
        """Load the game, create its threads and arm the refresh timer.

        Returns False, leaving the controller uninitialized, when the first
        load fails.
        """
        if self._state is not ControllerState.UNINITIALIZED:
            msg = f"controller for game {self.event_id} already initialized"
            raise RuntimeError(msg)

        match await self._store.load(self.event_id, timecode):
            case Err(error):
                logger.error("Could not load game %d from %s: %s", self.event_id, error.endpoint, error.message)
                return False
            case Ok(snapshot):
                self._state = ControllerState.LOADED

        title = thread_title(snapshot, self._tz)
        self._handles = tuple(await self._sink.create_threads(title, root_blocks(snapshot, self._tz)))
        logger.info("Game %d: created %d thread(s) titled %r", self.event_id, len(self._handles), title)
        await self._publish_plays(snapshot)

        if self._finished(snapshot):
            logger.info("Game %d is already %s; not scheduling refreshes", self.event_id, snapshot.phase)
            self.terminate()
            return True

        interval = self._cadence.initial_interval(snapshot.phase)
        if interval != self._scheduler.interval_minutes:
            self._scheduler.reschedule(interval)
        self._state = ControllerState.PUBLISHING
        self._scheduler.start(self.tick, on_finished=self.terminate)
        return True

    async def tick(self, timecode: str | None = None) -> None:
        if self._state is not ControllerState.PUBLISHING:
            return

        match await self._store.refresh(timecode):
            case Err(error):
                logger.warning("Game %d: refresh failed (%s), keeping previous state", self.event_id, error.message)
                return
            case Ok(snapshot):
                pass

        if self.is_terminated:
            return
        try:
            await self._sink.edit_root_message(self._handles, root_blocks(snapshot, self._tz))
        except Exception:
            logger.exception("Game %d: could not update the root message", self.event_id)
        await self._publish_plays(snapshot)

        interval = self._cadence.observe(snapshot.phase)
        if interval is not None and not self.is_terminated:
            logger.info("Game %d is %s; refreshing every %d minutes", self.event_id, snapshot.phase, interval)
            self._scheduler.reschedule(interval)

        if self._finished(snapshot):
            logger.info("Game %d is %s; stopping updates", self.event_id, snapshot.phase)
            self.terminate()

    def terminate(self) -> None:
        if self.is_terminated:
            return
        self._state = ControllerState.TERMINATED
        self._scheduler.cancel()
        self._store.close()
        logger.info("Game %d controller terminated", self.event_id)

    def _finished(self, snapshot: EventSnapshot) -> bool:
        return is_terminal(snapshot.phase) and not self._tracker.has_pending(snapshot)

    async def _publish_plays(self, snapshot: EventSnapshot) -> None:
        for announcement in self._tracker.extract(snapshot):
            if self.is_terminated:
                return
            try:
                await self._sink.post_message(self._handles, list(announcement.blocks), pin=announcement.pin)
            except Exception:
                logger.exception("Game %d: could not post play %d", self.event_id, announcement.sequence_index)

"""Incremental play announcements.

The live feed always returns the whole play log. ``PlayLogTracker`` keeps a
high-water mark (the sequence index of the last play it announced) so each
completed play is turned into messages exactly once, no matter how many
times the same log is fetched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mlb_game_threads.presentation.plays import play_block, sub_event_block

if TYPE_CHECKING:
    from mlb_game_threads.domain.play import Play
    from mlb_game_threads.domain.snapshot import EventSnapshot
    from mlb_game_threads.presentation.blocks import ContentBlock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Announcement:
    """One message to post in a game thread."""

    sequence_index: int
    blocks: tuple[ContentBlock, ...]
    pin: bool = False


class PlayLogTracker:
    def __init__(self, last_announced_index: int = -1) -> None:
        self._last_announced_index = last_announced_index

    @property
    def last_announced_index(self) -> int:
        return self._last_announced_index

    def unannounced(self, snapshot: EventSnapshot) -> list[Play]:
        plays = [play for play in snapshot.play_log if play.sequence_index > self._last_announced_index]
        return sorted(plays, key=lambda play: play.sequence_index)

    def has_pending(self, snapshot: EventSnapshot) -> bool:
        return bool(self.unannounced(snapshot))

    def extract(self, snapshot: EventSnapshot) -> list[Announcement]:
        """Return announcements for every newly completed play, in order.

        Scanning stops at the first incomplete play so the mark never passes
        a play that might still change. A play whose rendering fails also
        stops the scan; it is retried on the next refresh.
        """
        batch: list[Announcement] = []
        for play in self.unannounced(snapshot):
            if not play.is_complete:
                logger.debug("Game %d: play %d still in progress", snapshot.event_id, play.sequence_index)
                break
            try:
                announcements = self._render(snapshot, play)
            except Exception:
                logger.exception("Game %d: could not render play %d", snapshot.event_id, play.sequence_index)
                break
            batch.extend(announcements)
            self._last_announced_index = play.sequence_index
        return batch

    def _render(self, snapshot: EventSnapshot, play: Play) -> list[Announcement]:
        announcements = []
        for sub_event in play.loggable_sub_events():
            player = snapshot.player(sub_event.player_id)
            if player is None:
                logger.warning(
                    "Game %d: skipping %s in play %d, player %s not in roster",
                    snapshot.event_id,
                    sub_event.event_type or "event",
                    play.sequence_index,
                    sub_event.player_id,
                )
                continue
            block = sub_event_block(snapshot, play, sub_event, player)
            announcements.append(Announcement(play.sequence_index, (block,)))
        announcements.append(Announcement(play.sequence_index, (play_block(snapshot, play),), pin=play.is_scoring_play))
        return announcements

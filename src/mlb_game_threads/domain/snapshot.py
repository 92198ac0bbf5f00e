from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from mlb_game_threads.domain.content import GameContent
from mlb_game_threads.domain.feed import LiveFeed, TeamBoxscore
from mlb_game_threads.domain.play import Play
from mlb_game_threads.domain.player import PlayerInfo, SplitLine
from mlb_game_threads.domain.schedule import ScheduleEntry
from mlb_game_threads.domain.standings import DivisionStandings
from mlb_game_threads.domain.status import GamePhase, GameStatus
from mlb_game_threads.domain.team import TeamInfo

type Side = Literal["home", "away"]

SIDES: tuple[Side, Side] = ("away", "home")


@dataclass(frozen=True)
class EventSnapshot:
    """Everything known about one game at one point in time.

    Snapshots are never mutated; the store builds a new one on every
    successful load or refresh.
    """

    event_id: int
    schedule: ScheduleEntry
    feed: LiveFeed
    content: GameContent = GameContent()
    roster: dict[int, PlayerInfo] = field(default_factory=dict)
    splits: dict[Side, dict[int, SplitLine]] = field(default_factory=lambda: {"home": {}, "away": {}})
    standings: tuple[DivisionStandings, ...] = ()

    @property
    def status(self) -> GameStatus:
        return self.feed.status

    @property
    def phase(self) -> GamePhase:
        return self.feed.status.phase

    @property
    def is_postponed(self) -> bool:
        return self.phase is GamePhase.POSTPONED

    @property
    def home(self) -> TeamInfo:
        return self.feed.home

    @property
    def away(self) -> TeamInfo:
        return self.feed.away

    @property
    def play_log(self) -> tuple[Play, ...]:
        return self.feed.plays

    def team(self, side: Side) -> TeamInfo:
        return self.feed.home if side == "home" else self.feed.away

    def boxscore(self, side: Side) -> TeamBoxscore:
        return self.feed.home_box if side == "home" else self.feed.away_box

    def player(self, player_id: int | None) -> PlayerInfo | None:
        if player_id is None:
            return None
        return self.roster.get(player_id)

    def probable_pitcher(self, side: Side) -> PlayerInfo | None:
        pitchers = self.feed.probable_pitchers
        return self.player(pitchers.home_id if side == "home" else pitchers.away_id)

    def batter_split(self, batter_id: int) -> SplitLine | None:
        for side in SIDES:
            line = self.splits.get(side, {}).get(batter_id)
            if line is not None:
                return line
        return None

    def division_for(self, team: TeamInfo) -> DivisionStandings | None:
        for division in self.standings:
            if division.includes(team.id):
                return division
        return None

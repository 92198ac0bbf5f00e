from __future__ import annotations

from dataclasses import dataclass, field

from mlb_game_threads.domain.play import Play
from mlb_game_threads.domain.player import PlayerBoxscore, PlayerProfile
from mlb_game_threads.domain.status import GameStatus
from mlb_game_threads.domain.team import TeamInfo


@dataclass(frozen=True)
class Weather:
    condition: str = ""
    temp: str = ""
    wind: str = ""

    @property
    def is_known(self) -> bool:
        return bool(self.condition or self.temp or self.wind)


@dataclass(frozen=True)
class GameInfo:
    attendance: int | None = None
    first_pitch: str = ""
    duration_minutes: int | None = None


@dataclass(frozen=True)
class LabelValue:
    label: str = ""
    value: str = ""


@dataclass(frozen=True)
class InfoSection:
    title: str = ""
    fields: tuple[LabelValue, ...] = ()


@dataclass(frozen=True)
class TeamBoxscore:
    batting_order: tuple[int, ...] = ()
    batters: tuple[int, ...] = ()
    pitchers: tuple[int, ...] = ()
    notes: tuple[LabelValue, ...] = ()
    info: tuple[InfoSection, ...] = ()
    players: dict[int, PlayerBoxscore] = field(default_factory=dict)

    @property
    def has_lineup(self) -> bool:
        return len(self.batting_order) > 0


@dataclass(frozen=True)
class LineTotals:
    runs: int | None = None
    hits: int | None = None
    errors: int | None = None
    left_on_base: int | None = None


@dataclass(frozen=True)
class InningLine:
    num: int
    home: LineTotals = LineTotals()
    away: LineTotals = LineTotals()


@dataclass(frozen=True)
class Linescore:
    current_inning: int | None = None
    current_inning_ordinal: str = ""
    inning_state: str = ""
    outs: int | None = None
    scheduled_innings: int = 9
    home: LineTotals = LineTotals()
    away: LineTotals = LineTotals()
    innings: tuple[InningLine, ...] = ()


@dataclass(frozen=True)
class ProbablePitchers:
    home_id: int | None = None
    away_id: int | None = None


@dataclass(frozen=True)
class LiveFeed:
    """The live game feed reduced to the fields the bot renders.

    Every field defaults to "unknown"; a feed parsed from an empty payload is
    a valid Preview-phase feed with no teams, players or plays.
    """

    game_pk: int
    timestamp: str = ""
    status: GameStatus = GameStatus()
    home: TeamInfo = TeamInfo()
    away: TeamInfo = TeamInfo()
    date_time: str = ""
    venue_name: str = ""
    weather: Weather = Weather()
    game_info: GameInfo = GameInfo()
    probable_pitchers: ProbablePitchers = ProbablePitchers()
    players: dict[int, PlayerProfile] = field(default_factory=dict)
    home_box: TeamBoxscore = field(default_factory=TeamBoxscore)
    away_box: TeamBoxscore = field(default_factory=TeamBoxscore)
    linescore: Linescore = Linescore()
    plays: tuple[Play, ...] = ()

    def player_boxscores(self) -> dict[int, PlayerBoxscore]:
        merged = dict(self.home_box.players)
        merged.update(self.away_box.players)
        return merged

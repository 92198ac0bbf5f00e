from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class BattingLine:
    summary: str = ""
    note: str = ""
    at_bats: int | None = None
    runs: int | None = None
    hits: int | None = None
    home_runs: int | None = None
    rbi: int | None = None
    base_on_balls: int | None = None
    strike_outs: int | None = None
    left_on_base: int | None = None
    avg: str = ""
    obp: str = ""
    slg: str = ""
    ops: str = ""


@dataclass(frozen=True)
class PitchingLine:
    summary: str = ""
    note: str = ""
    wins: int | None = None
    losses: int | None = None
    era: str = ""
    innings_pitched: str = ""
    hits: int | None = None
    runs: int | None = None
    earned_runs: int | None = None
    base_on_balls: int | None = None
    strike_outs: int | None = None
    pitches_thrown: int | None = None


@dataclass(frozen=True)
class SplitLine:
    """A batter's career line against one specific pitcher."""

    at_bats: int | None = None
    hits: int | None = None
    home_runs: int | None = None
    rbi: int | None = None
    strike_outs: int | None = None
    avg: str = ""
    ops: str = ""

    @property
    def is_empty(self) -> bool:
        return self.at_bats is None and self.hits is None and not self.avg


@dataclass(frozen=True)
class PlayerProfile:
    id: int
    full_name: str = ""
    boxscore_name: str = ""
    primary_number: str = ""
    position: str = ""

    @property
    def display_name(self) -> str:
        return self.boxscore_name or self.full_name or f"#{self.id}"


@dataclass(frozen=True)
class PlayerBoxscore:
    position: str = ""
    all_positions: tuple[str, ...] = ()
    batting_order: str = ""
    batting: BattingLine | None = None
    pitching: PitchingLine | None = None
    season_batting: BattingLine | None = None
    season_pitching: PitchingLine | None = None

    @property
    def lineup_slot(self) -> int | None:
        """Lineup spot (1-9) for starters, None for substitutes.

        The API encodes order as ``"100"`` for the leadoff starter and
        ``"101"`` for the first substitute in that slot.
        """
        if not self.batting_order.isdigit():
            return None
        order = int(self.batting_order)
        if order % 100 != 0:
            return None
        return order // 100


@dataclass(frozen=True)
class PlayerInfo:
    profile: PlayerProfile
    boxscore: PlayerBoxscore = field(default_factory=PlayerBoxscore)

    @property
    def id(self) -> int:
        return self.profile.id

    def with_update(self, profile: PlayerProfile | None, boxscore: PlayerBoxscore | None) -> PlayerInfo:
        return replace(
            self,
            profile=profile if profile is not None else self.profile,
            boxscore=boxscore if boxscore is not None else self.boxscore,
        )

    def game_batting_summary(self) -> str:
        return self.boxscore.batting.summary if self.boxscore.batting else ""

    def game_pitching_summary(self) -> str:
        return self.boxscore.pitching.summary if self.boxscore.pitching else ""

    def season_pitching_summary(self) -> str:
        season = self.boxscore.season_pitching
        if season is None:
            return ""
        record = f"{_dash(season.wins)}-{_dash(season.losses)}"
        return f"{record}, {season.era or '-'} ERA, {season.innings_pitched or '-'} IP"

    def season_batting_summary(self) -> str:
        season = self.boxscore.season_batting
        if season is None:
            return ""
        slash = f"{season.avg or '-'}/{season.obp or '-'}/{season.slg or '-'}"
        return f"{slash} | {_dash(season.home_runs)} HR, {_dash(season.rbi)} RBI, {_dash(season.strike_outs)} K"


def _dash(value: int | None) -> str:
    return "-" if value is None else str(value)

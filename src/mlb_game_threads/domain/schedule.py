from dataclasses import dataclass

from mlb_game_threads.domain.status import GameStatus


@dataclass(frozen=True)
class Broadcast:
    name: str = ""
    type: str = ""
    home_away: str = ""
    is_national: bool = False
    call_sign: str = ""

    @property
    def market(self) -> str:
        return "national" if self.is_national else (self.home_away or "national")

    @property
    def is_radio(self) -> bool:
        return self.type in ("AM", "FM")

    @property
    def is_tv(self) -> bool:
        return self.type == "TV"


@dataclass(frozen=True)
class ScheduleTeam:
    id: int = 0
    name: str = ""
    wins: int | None = None
    losses: int | None = None
    score: int | None = None


@dataclass(frozen=True)
class ScheduleEntry:
    game_pk: int
    game_date: str = ""
    official_date: str = ""
    status: GameStatus = GameStatus()
    home: ScheduleTeam = ScheduleTeam()
    away: ScheduleTeam = ScheduleTeam()
    venue_name: str = ""
    broadcasts: tuple[Broadcast, ...] = ()
    reschedule_date: str = ""
    reschedule_game_date: str = ""
    rescheduled_from: str = ""
    description: str = ""
    double_header: str = ""
    game_number: int | None = None

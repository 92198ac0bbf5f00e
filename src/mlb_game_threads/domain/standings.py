from dataclasses import dataclass


@dataclass(frozen=True)
class TeamStandingsRecord:
    team_id: int
    team_name: str = ""
    wins: int = 0
    losses: int = 0
    games_back: str = "-"
    division_rank: str = ""
    streak: str = ""


@dataclass(frozen=True)
class DivisionStandings:
    division_id: int
    division_name: str = ""
    teams: tuple[TeamStandingsRecord, ...] = ()

    def includes(self, team_id: int) -> bool:
        return any(record.team_id == team_id for record in self.teams)

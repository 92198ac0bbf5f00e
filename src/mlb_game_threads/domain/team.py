from dataclasses import dataclass


@dataclass(frozen=True)
class TeamInfo:
    id: int = 0
    name: str = ""
    team_name: str = ""
    abbreviation: str = ""
    wins: int | None = None
    losses: int | None = None
    league_id: int | None = None
    division_id: int | None = None

    @property
    def record(self) -> str:
        if self.wins is None or self.losses is None:
            return ""
        return f"{self.wins}-{self.losses}"

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date

    from mlb_game_threads.domain.content import GameContent
    from mlb_game_threads.domain.errors import GatewayError
    from mlb_game_threads.domain.feed import LiveFeed
    from mlb_game_threads.domain.player import SplitLine
    from mlb_game_threads.domain.result import Result
    from mlb_game_threads.domain.schedule import ScheduleEntry
    from mlb_game_threads.domain.standings import DivisionStandings


class StatsGateway(Protocol):
    async def fetch_schedule(
        self,
        *,
        game_date: date | None = None,
        team_id: int | None = None,
        game_pks: Sequence[int] = (),
        hydrate: str | None = None,
    ) -> Result[list[ScheduleEntry], GatewayError]: ...

    async def fetch_live_feed(self, game_pk: int, timecode: str | None = None) -> Result[LiveFeed, GatewayError]: ...

    async def fetch_content(self, game_pk: int) -> Result[GameContent, GatewayError]: ...

    async def fetch_standings(self, league_ids: Sequence[int]) -> Result[list[DivisionStandings], GatewayError]: ...

    async def fetch_splits(
        self, batter_ids: Sequence[int], pitcher_id: int
    ) -> Result[dict[int, SplitLine], GatewayError]: ...

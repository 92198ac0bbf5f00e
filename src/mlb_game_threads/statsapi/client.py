from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

import httpx

from mlb_game_threads.domain.errors import GatewayError
from mlb_game_threads.domain.result import Err, Ok, Result
from mlb_game_threads.statsapi._retry import default_http_retry
from mlb_game_threads.statsapi.parsers import (
    parse_content,
    parse_live_feed,
    parse_schedule,
    parse_splits,
    parse_standings,
)

if TYPE_CHECKING:
    from datetime import date

    from mlb_game_threads.domain.content import GameContent
    from mlb_game_threads.domain.feed import LiveFeed
    from mlb_game_threads.domain.player import SplitLine
    from mlb_game_threads.domain.schedule import ScheduleEntry
    from mlb_game_threads.domain.standings import DivisionStandings

logger = logging.getLogger(__name__)

BASE_URL = "https://statsapi.mlb.com/api"
SPORT_ID_MLB = 1
_DEFAULT_RETRY = default_http_retry("MLB Stats API request")


class StatsApiClient:
    """Async client for the public MLB Stats API.

    Each ``fetch_*`` call retries transient failures, then reports whatever
    is left as an ``Err(GatewayError)`` rather than raising.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        retry: Callable[..., Callable[..., Any]] = _DEFAULT_RETRY,
        base_url: str = BASE_URL,
    ) -> None:
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(10.0, connect=5.0))
        self._base_url = base_url.rstrip("/")
        self._get_with_retry = retry(self._do_get)

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch_schedule(
        self,
        *,
        game_date: date | None = None,
        team_id: int | None = None,
        game_pks: Sequence[int] = (),
        hydrate: str | None = None,
    ) -> Result[list[ScheduleEntry], GatewayError]:
        params: dict[str, Any] = {"sportId": SPORT_ID_MLB}
        if game_pks:
            params["gamePk"] = ",".join(str(pk) for pk in game_pks)
        if game_date is not None:
            params["date"] = game_date.isoformat()
        if team_id is not None:
            params["teamId"] = team_id
        if hydrate:
            params["hydrate"] = hydrate

        match await self._get("schedule", "/v1/schedule", params):
            case Ok(data):
                return Ok(parse_schedule(data))
            case Err(error):
                return Err(error)

    async def fetch_live_feed(self, game_pk: int, timecode: str | None = None) -> Result[LiveFeed, GatewayError]:
        params: dict[str, Any] = {"timecode": timecode} if timecode else {}
        match await self._get("live feed", f"/v1.1/game/{game_pk}/feed/live", params):
            case Ok(data):
                return Ok(parse_live_feed(data, game_pk))
            case Err(error):
                return Err(error)

    async def fetch_content(self, game_pk: int) -> Result[GameContent, GatewayError]:
        match await self._get("content", f"/v1/game/{game_pk}/content", {}):
            case Ok(data):
                return Ok(parse_content(data))
            case Err(error):
                return Err(error)

    async def fetch_standings(self, league_ids: Sequence[int]) -> Result[list[DivisionStandings], GatewayError]:
        params = {
            "leagueId": ",".join(str(league_id) for league_id in league_ids),
            "standingsTypes": "byDivision",
            "hydrate": "division",
        }
        match await self._get("standings", "/v1/standings", params):
            case Ok(data):
                return Ok(parse_standings(data))
            case Err(error):
                return Err(error)

    async def fetch_splits(self, batter_ids: Sequence[int], pitcher_id: int) -> Result[dict[int, SplitLine], GatewayError]:
        params = {
            "personIds": ",".join(str(batter_id) for batter_id in batter_ids),
            "hydrate": (
                f"stats(group=[hitting],type=[vsPlayer],opposingPlayerId={pitcher_id},sportId={SPORT_ID_MLB})"
            ),
        }
        match await self._get("splits", "/v1/people", params):
            case Ok(data):
                return Ok(parse_splits(data))
            case Err(error):
                return Err(error)

    async def _get(self, endpoint: str, path: str, params: dict[str, Any]) -> Result[dict[str, Any], GatewayError]:
        logger.debug("GET %s %s", path, params)
        try:
            data = await self._get_with_retry(path, params)
        except httpx.HTTPStatusError as e:
            logger.error("MLB Stats API %s request failed with status %d", endpoint, e.response.status_code)
            return Err(GatewayError(message=str(e), endpoint=endpoint, status_code=e.response.status_code))
        except (httpx.HTTPError, ValueError) as e:
            logger.error("MLB Stats API %s request failed: %s", endpoint, e)
            return Err(GatewayError(message=str(e), endpoint=endpoint))
        if not isinstance(data, dict):
            return Err(GatewayError(message="unexpected response shape", endpoint=endpoint))
        return Ok(data)

    async def _do_get(self, path: str, params: dict[str, Any]) -> Any:
        response = await self._client.get(f"{self._base_url}{path}", params=params)
        response.raise_for_status()
        return response.json()

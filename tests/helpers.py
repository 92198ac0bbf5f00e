from collections.abc import Iterable

from mlb_game_threads.domain.content import GameContent
from mlb_game_threads.domain.feed import LiveFeed, ProbablePitchers, TeamBoxscore
from mlb_game_threads.domain.play import Play, SubEvent
from mlb_game_threads.domain.player import PitchingLine, PlayerBoxscore, PlayerProfile, SplitLine
from mlb_game_threads.domain.schedule import ScheduleEntry, ScheduleTeam
from mlb_game_threads.domain.snapshot import EventSnapshot, Side
from mlb_game_threads.domain.standings import DivisionStandings
from mlb_game_threads.domain.status import GameStatus
from mlb_game_threads.domain.team import TeamInfo
from mlb_game_threads.game.store import build_roster

GAME_PK = 745001
HOME = TeamInfo(
    id=147, name="New York Yankees", team_name="Home", abbreviation="NYY", wins=10, losses=5, league_id=103
)
AWAY = TeamInfo(
    id=111, name="Boston Red Sox", team_name="Away", abbreviation="BOS", wins=7, losses=8, league_id=103
)

HOME_PITCHER = 900
AWAY_PITCHER = 901
HOME_BATTERS = tuple(range(100, 109))
AWAY_BATTERS = tuple(range(200, 209))

_STATES = {
    "Preview": ("Preview", "Scheduled", "S"),
    "Live": ("Live", "In Progress", "I"),
    "Final": ("Final", "Final", "F"),
    "Postponed": ("Preview", "Postponed", "D"),
}


def make_status(phase: str = "Preview", *, reason: str = "") -> GameStatus:
    abstract, detailed, coded = _STATES[phase]
    return GameStatus(abstract_state=abstract, detailed_state=detailed, coded_state=coded, reason=reason)


def make_play(
    index: int,
    *,
    complete: bool = True,
    scoring: bool = False,
    home_score: int | None = 0,
    away_score: int | None = 0,
    batter_id: int | None = 200,
    pitcher_id: int | None = HOME_PITCHER,
    inning: int = 1,
    top: bool = True,
    outs: int = 1,
    event: str = "Groundout",
    description: str = "",
    sub_events: Iterable[SubEvent] = (),
) -> Play:
    return Play(
        sequence_index=index,
        is_complete=complete,
        is_scoring_play=scoring,
        inning=inning,
        is_top_inning=top,
        outs=outs,
        event=event,
        event_type=event.lower().replace(" ", "_"),
        description=description or f"Play number {index}.",
        home_score=home_score,
        away_score=away_score,
        batter_id=batter_id,
        pitcher_id=pitcher_id,
        sub_events=tuple(sub_events),
    )


def make_sub_event(
    index: int = 0,
    *,
    event_type: str = "stolen_base_2b",
    event: str = "Stolen Base 2B",
    player_id: int | None = 201,
    scoring: bool = False,
    is_out: bool = False,
    description: str = "Runner steals 2nd base.",
) -> SubEvent:
    return SubEvent(
        index=index,
        event=event,
        event_type=event_type,
        description=description,
        player_id=player_id,
        is_scoring_play=scoring,
        is_out=is_out,
    )


def _profiles(ids: Iterable[int]) -> dict[int, PlayerProfile]:
    return {
        player_id: PlayerProfile(id=player_id, full_name=f"Player {player_id}", boxscore_name=f"P{player_id}")
        for player_id in ids
    }


def _team_box(batters: tuple[int, ...], pitcher: int, with_lineup: bool) -> TeamBoxscore:
    players = {
        batter_id: PlayerBoxscore(position="CF", batting_order=f"{slot}00" if with_lineup else "")
        for slot, batter_id in enumerate(batters, start=1)
    }
    players[pitcher] = PlayerBoxscore(
        position="P",
        season_pitching=PitchingLine(wins=2, losses=1, era="3.10", innings_pitched="20.1"),
    )
    return TeamBoxscore(
        batting_order=batters if with_lineup else (),
        batters=batters if with_lineup else (),
        pitchers=(pitcher,) if with_lineup else (),
        players=players,
    )


def make_feed(
    phase: str = "Preview",
    *,
    game_pk: int = GAME_PK,
    plays: Iterable[Play] = (),
    home_lineup: bool = False,
    away_lineup: bool = False,
    probable_home: int | None = None,
    probable_away: int | None = None,
    reason: str = "",
    date_time: str = "2024-04-05T23:05:00Z",
) -> LiveFeed:
    return LiveFeed(
        game_pk=game_pk,
        status=make_status(phase, reason=reason),
        home=HOME,
        away=AWAY,
        date_time=date_time,
        venue_name="Yankee Stadium",
        probable_pitchers=ProbablePitchers(home_id=probable_home, away_id=probable_away),
        players=_profiles((*HOME_BATTERS, *AWAY_BATTERS, HOME_PITCHER, AWAY_PITCHER)),
        home_box=_team_box(HOME_BATTERS, HOME_PITCHER, home_lineup),
        away_box=_team_box(AWAY_BATTERS, AWAY_PITCHER, away_lineup),
        plays=tuple(plays),
    )


def make_schedule_entry(
    game_pk: int = GAME_PK,
    *,
    phase: str = "Preview",
    reschedule_date: str = "",
    reschedule_game_date: str = "",
) -> ScheduleEntry:
    return ScheduleEntry(
        game_pk=game_pk,
        game_date="2024-04-05T23:05:00Z",
        official_date="2024-04-05",
        status=make_status(phase),
        home=ScheduleTeam(id=HOME.id, name=HOME.name),
        away=ScheduleTeam(id=AWAY.id, name=AWAY.name),
        venue_name="Yankee Stadium",
        reschedule_date=reschedule_date,
        reschedule_game_date=reschedule_game_date,
    )


def make_snapshot(
    feed: LiveFeed | None = None,
    *,
    schedule: ScheduleEntry | None = None,
    content: GameContent | None = None,
    splits: dict[Side, dict[int, SplitLine]] | None = None,
    standings: tuple[DivisionStandings, ...] = (),
) -> EventSnapshot:
    feed = feed if feed is not None else make_feed()
    return EventSnapshot(
        event_id=feed.game_pk,
        schedule=schedule if schedule is not None else make_schedule_entry(feed.game_pk),
        feed=feed,
        content=content if content is not None else GameContent(),
        roster=build_roster(feed),
        splits=splits if splits is not None else {"home": {}, "away": {}},
        standings=standings,
    )

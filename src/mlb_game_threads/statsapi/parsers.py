"""Convert raw MLB Stats API payloads into the typed domain schema.

Every reader here tolerates absent or null structures: a missing object is
read as ``{}``, a missing list as ``[]``, and a missing scalar as the field's
documented default. Nothing in this module raises on incomplete data.
"""

from typing import Any

from mlb_game_threads.domain.content import GameContent, Highlight, MediaFeed
from mlb_game_threads.domain.feed import (
    GameInfo,
    InfoSection,
    InningLine,
    LabelValue,
    LineTotals,
    Linescore,
    LiveFeed,
    ProbablePitchers,
    TeamBoxscore,
    Weather,
)
from mlb_game_threads.domain.play import Play, SubEvent
from mlb_game_threads.domain.player import BattingLine, PitchingLine, PlayerBoxscore, PlayerProfile, SplitLine
from mlb_game_threads.domain.schedule import Broadcast, ScheduleEntry, ScheduleTeam
from mlb_game_threads.domain.standings import DivisionStandings, TeamStandingsRecord
from mlb_game_threads.domain.status import GameStatus
from mlb_game_threads.domain.team import TeamInfo

type Json = dict[str, Any]


def _obj(data: Any, key: str) -> Json:
    if not isinstance(data, dict):
        return {}
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _list(data: Any, key: str) -> list[Any]:
    if not isinstance(data, dict):
        return []
    value = data.get(key)
    return value if isinstance(value, list) else []


def _int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def parse_status(data: Json) -> GameStatus:
    return GameStatus(
        abstract_state=_str(data.get("abstractGameState")),
        detailed_state=_str(data.get("detailedState")),
        coded_state=_str(data.get("codedGameState")),
        reason=_str(data.get("reason")),
    )


def _parse_team(data: Json) -> TeamInfo:
    record = _obj(data, "record")
    league_record = _obj(record, "leagueRecord")
    wins = _int(record.get("wins", league_record.get("wins")))
    losses = _int(record.get("losses", league_record.get("losses")))
    return TeamInfo(
        id=_int(data.get("id")) or 0,
        name=_str(data.get("name")),
        team_name=_str(data.get("teamName") or data.get("clubName") or data.get("name")),
        abbreviation=_str(data.get("abbreviation")),
        wins=wins,
        losses=losses,
        league_id=_int(_obj(data, "league").get("id")),
        division_id=_int(_obj(data, "division").get("id")),
    )


def _parse_profile(data: Json) -> PlayerProfile | None:
    player_id = _int(data.get("id"))
    if player_id is None:
        return None
    return PlayerProfile(
        id=player_id,
        full_name=_str(data.get("fullName")),
        boxscore_name=_str(data.get("boxscoreName")),
        primary_number=_str(data.get("primaryNumber")),
        position=_str(_obj(data, "primaryPosition").get("abbreviation")),
    )


def _parse_batting(data: Json) -> BattingLine | None:
    if not data:
        return None
    return BattingLine(
        summary=_str(data.get("summary")),
        note=_str(data.get("note")),
        at_bats=_int(data.get("atBats")),
        runs=_int(data.get("runs")),
        hits=_int(data.get("hits")),
        home_runs=_int(data.get("homeRuns")),
        rbi=_int(data.get("rbi")),
        base_on_balls=_int(data.get("baseOnBalls")),
        strike_outs=_int(data.get("strikeOuts")),
        left_on_base=_int(data.get("leftOnBase")),
        avg=_str(data.get("avg")),
        obp=_str(data.get("obp")),
        slg=_str(data.get("slg")),
        ops=_str(data.get("ops")),
    )


def _parse_pitching(data: Json) -> PitchingLine | None:
    if not data:
        return None
    return PitchingLine(
        summary=_str(data.get("summary")),
        note=_str(data.get("note")),
        wins=_int(data.get("wins")),
        losses=_int(data.get("losses")),
        era=_str(data.get("era")),
        innings_pitched=_str(data.get("inningsPitched")),
        hits=_int(data.get("hits")),
        runs=_int(data.get("runs")),
        earned_runs=_int(data.get("earnedRuns")),
        base_on_balls=_int(data.get("baseOnBalls")),
        strike_outs=_int(data.get("strikeOuts")),
        pitches_thrown=_int(data.get("numberOfPitches", data.get("pitchesThrown"))),
    )


def _parse_player_boxscore(data: Json) -> PlayerBoxscore:
    stats = _obj(data, "stats")
    season = _obj(data, "seasonStats")
    return PlayerBoxscore(
        position=_str(_obj(data, "position").get("abbreviation")),
        all_positions=tuple(_str(pos.get("abbreviation")) for pos in _list(data, "allPositions") if isinstance(pos, dict)),
        batting_order=_str(data.get("battingOrder")),
        batting=_parse_batting(_obj(stats, "batting")),
        pitching=_parse_pitching(_obj(stats, "pitching")),
        season_batting=_parse_batting(_obj(season, "batting")),
        season_pitching=_parse_pitching(_obj(season, "pitching")),
    )


def _ids(values: list[Any]) -> tuple[int, ...]:
    return tuple(pid for pid in (_int(v) for v in values) if pid is not None)


def _label_values(values: list[Any]) -> tuple[LabelValue, ...]:
    return tuple(
        LabelValue(label=_str(item.get("label")), value=_str(item.get("value")))
        for item in values
        if isinstance(item, dict)
    )


def _parse_team_boxscore(data: Json) -> TeamBoxscore:
    players: dict[int, PlayerBoxscore] = {}
    for entry in _obj(data, "players").values():
        if not isinstance(entry, dict):
            continue
        player_id = _int(_obj(entry, "person").get("id"))
        if player_id is not None:
            players[player_id] = _parse_player_boxscore(entry)
    return TeamBoxscore(
        batting_order=_ids(_list(data, "battingOrder")),
        batters=_ids(_list(data, "batters")),
        pitchers=_ids(_list(data, "pitchers")),
        notes=_label_values(_list(data, "note")),
        info=tuple(
            InfoSection(title=_str(section.get("title")), fields=_label_values(_list(section, "fieldList")))
            for section in _list(data, "info")
            if isinstance(section, dict)
        ),
        players=players,
    )


def _parse_totals(data: Json) -> LineTotals:
    return LineTotals(
        runs=_int(data.get("runs")),
        hits=_int(data.get("hits")),
        errors=_int(data.get("errors")),
        left_on_base=_int(data.get("leftOnBase")),
    )


def _parse_linescore(data: Json) -> Linescore:
    teams = _obj(data, "teams")
    return Linescore(
        current_inning=_int(data.get("currentInning")),
        current_inning_ordinal=_str(data.get("currentInningOrdinal")),
        inning_state=_str(data.get("inningState")),
        outs=_int(data.get("outs")),
        scheduled_innings=_int(data.get("scheduledInnings")) or 9,
        home=_parse_totals(_obj(teams, "home")),
        away=_parse_totals(_obj(teams, "away")),
        innings=tuple(
            InningLine(
                num=_int(inning.get("num")) or 0,
                home=_parse_totals(_obj(inning, "home")),
                away=_parse_totals(_obj(inning, "away")),
            )
            for inning in _list(data, "innings")
            if isinstance(inning, dict)
        ),
    )


def _parse_sub_event(data: Json) -> SubEvent:
    details = _obj(data, "details")
    return SubEvent(
        index=_int(data.get("index")) or 0,
        event=_str(details.get("event")),
        event_type=_str(details.get("eventType")),
        description=_str(details.get("description")),
        player_id=_int(_obj(data, "player").get("id")),
        is_scoring_play=bool(details.get("isScoringPlay", False)),
        is_out=bool(details.get("isOut", False)),
        home_score=_int(details.get("homeScore")),
        away_score=_int(details.get("awayScore")),
    )


def parse_play(data: Json, fallback_index: int) -> Play:
    about = _obj(data, "about")
    result = _obj(data, "result")
    matchup = _obj(data, "matchup")
    index = _int(about.get("atBatIndex", data.get("atBatIndex")))
    sub_events = tuple(
        _parse_sub_event(event)
        for event in _list(data, "playEvents")
        if isinstance(event, dict) and event.get("type") == "action"
    )
    return Play(
        sequence_index=fallback_index if index is None else index,
        is_complete=bool(about.get("isComplete", False)),
        is_scoring_play=bool(about.get("isScoringPlay", False)),
        inning=_int(about.get("inning")),
        is_top_inning=bool(about.get("isTopInning", True)),
        outs=_int(_obj(data, "count").get("outs")),
        event=_str(result.get("event")),
        event_type=_str(result.get("eventType")),
        description=_str(result.get("description")),
        rbi=_int(result.get("rbi")),
        home_score=_int(result.get("homeScore")),
        away_score=_int(result.get("awayScore")),
        batter_id=_int(_obj(matchup, "batter").get("id")),
        pitcher_id=_int(_obj(matchup, "pitcher").get("id")),
        sub_events=sub_events,
    )


def parse_live_feed(data: Json, game_pk: int) -> LiveFeed:
    game_data = _obj(data, "gameData")
    live_data = _obj(data, "liveData")
    teams = _obj(game_data, "teams")
    box_teams = _obj(_obj(live_data, "boxscore"), "teams")
    weather = _obj(game_data, "weather")
    game_info = _obj(game_data, "gameInfo")
    probables = _obj(game_data, "probablePitchers")

    players: dict[int, PlayerProfile] = {}
    for entry in _obj(game_data, "players").values():
        if isinstance(entry, dict) and (profile := _parse_profile(entry)) is not None:
            players[profile.id] = profile

    plays = tuple(
        parse_play(play, position)
        for position, play in enumerate(_list(_obj(live_data, "plays"), "allPlays"))
        if isinstance(play, dict)
    )

    return LiveFeed(
        game_pk=_int(data.get("gamePk")) or game_pk,
        timestamp=_str(_obj(data, "metaData").get("timeStamp")),
        status=parse_status(_obj(game_data, "status")),
        home=_parse_team(_obj(teams, "home")),
        away=_parse_team(_obj(teams, "away")),
        date_time=_str(_obj(game_data, "datetime").get("dateTime")),
        venue_name=_str(_obj(game_data, "venue").get("name")),
        weather=Weather(
            condition=_str(weather.get("condition")),
            temp=_str(weather.get("temp")),
            wind=_str(weather.get("wind")),
        ),
        game_info=GameInfo(
            attendance=_int(game_info.get("attendance")),
            first_pitch=_str(game_info.get("firstPitch")),
            duration_minutes=_int(game_info.get("gameDurationMinutes")),
        ),
        probable_pitchers=ProbablePitchers(
            home_id=_int(_obj(probables, "home").get("id")),
            away_id=_int(_obj(probables, "away").get("id")),
        ),
        players=players,
        home_box=_parse_team_boxscore(_obj(box_teams, "home")),
        away_box=_parse_team_boxscore(_obj(box_teams, "away")),
        linescore=_parse_linescore(_obj(live_data, "linescore")),
        plays=plays,
    )


def _parse_schedule_team(data: Json) -> ScheduleTeam:
    team = _obj(data, "team")
    record = _obj(data, "leagueRecord")
    return ScheduleTeam(
        id=_int(team.get("id")) or 0,
        name=_str(team.get("name")),
        wins=_int(record.get("wins")),
        losses=_int(record.get("losses")),
        score=_int(data.get("score")),
    )


def parse_schedule_entry(data: Json) -> ScheduleEntry:
    teams = _obj(data, "teams")
    return ScheduleEntry(
        game_pk=_int(data.get("gamePk")) or 0,
        game_date=_str(data.get("gameDate")),
        official_date=_str(data.get("officialDate")),
        status=parse_status(_obj(data, "status")),
        home=_parse_schedule_team(_obj(teams, "home")),
        away=_parse_schedule_team(_obj(teams, "away")),
        venue_name=_str(_obj(data, "venue").get("name")),
        broadcasts=tuple(
            Broadcast(
                name=_str(item.get("name")),
                type=_str(item.get("type")),
                home_away=_str(item.get("homeAway")),
                is_national=bool(item.get("isNational", False)),
                call_sign=_str(item.get("callSign")),
            )
            for item in _list(data, "broadcasts")
            if isinstance(item, dict)
        ),
        reschedule_date=_str(data.get("rescheduleDate")),
        reschedule_game_date=_str(data.get("rescheduleGameDate")),
        rescheduled_from=_str(data.get("rescheduledFrom")),
        description=_str(data.get("description")),
        double_header=_str(data.get("doubleHeader")),
        game_number=_int(data.get("gameNumber")),
    )


def parse_schedule(data: Json) -> list[ScheduleEntry]:
    entries: list[ScheduleEntry] = []
    for day in _list(data, "dates"):
        for game in _list(day, "games"):
            if isinstance(game, dict):
                entries.append(parse_schedule_entry(game))
    return entries


def parse_content(data: Json) -> GameContent:
    items = _list(_obj(_obj(data, "highlights"), "highlights"), "items")
    highlights = tuple(
        Highlight(
            id=_str(item.get("id")),
            slug=_str(item.get("slug")),
            title=_str(item.get("title") or item.get("headline")),
            description=_str(item.get("description")),
            duration=_str(item.get("duration")),
            date=_str(item.get("date")),
        )
        for item in items
        if isinstance(item, dict) and item.get("id")
    )

    media: list[MediaFeed] = []
    for epg in _list(_obj(data, "media"), "epg"):
        title = _str(epg.get("title")) if isinstance(epg, dict) else ""
        if title == "MLBTV":
            media.extend(
                MediaFeed(kind="tv", feed_type=_str(feed.get("mediaFeedType")), call_letters=_str(feed.get("callLetters")))
                for feed in _list(epg, "items")
                if isinstance(feed, dict)
            )
        elif title == "Audio":
            media.extend(
                MediaFeed(kind="radio", feed_type=_str(feed.get("type")), call_letters=_str(feed.get("callLetters")))
                for feed in _list(epg, "items")
                if isinstance(feed, dict)
            )
    return GameContent(highlights=highlights, media=tuple(media))


def parse_standings(data: Json) -> list[DivisionStandings]:
    divisions: list[DivisionStandings] = []
    for record in _list(data, "records"):
        division = _obj(record, "division")
        division_id = _int(division.get("id"))
        if division_id is None:
            continue
        teams = tuple(
            TeamStandingsRecord(
                team_id=_int(_obj(team, "team").get("id")) or 0,
                team_name=_str(_obj(team, "team").get("name")),
                wins=_int(team.get("wins")) or 0,
                losses=_int(team.get("losses")) or 0,
                games_back=_str(team.get("gamesBack")) or "-",
                division_rank=_str(team.get("divisionRank")),
                streak=_str(_obj(team, "streak").get("streakCode")),
            )
            for team in _list(record, "teamRecords")
            if isinstance(team, dict)
        )
        divisions.append(DivisionStandings(division_id=division_id, division_name=_str(division.get("name")), teams=teams))
    return divisions


def parse_splits(data: Json) -> dict[int, SplitLine]:
    """Read each person's ``vsPlayerTotal`` hitting line.

    People with no history against the pitcher get an empty ``SplitLine`` so
    the caller can tell "fetched, nothing there" from "not fetched".
    """
    splits: dict[int, SplitLine] = {}
    for person in _list(data, "people"):
        person_id = _int(person.get("id")) if isinstance(person, dict) else None
        if person_id is None:
            continue
        total = next(
            (s for s in _list(person, "stats") if isinstance(s, dict) and _obj(s, "type").get("displayName") == "vsPlayerTotal"),
            {},
        )
        first_split = next(iter(_list(total, "splits")), {})
        stat = _obj(first_split, "stat")
        splits[person_id] = SplitLine(
            at_bats=_int(stat.get("atBats")),
            hits=_int(stat.get("hits")),
            home_runs=_int(stat.get("homeRuns")),
            rbi=_int(stat.get("rbi")),
            strike_outs=_int(stat.get("strikeOuts")),
            avg=_str(stat.get("avg")),
            ops=_str(stat.get("ops")),
        )
    return splits

"""Thread title and root-message rendering for one game snapshot.

The root message is rebuilt from scratch on every refresh. Which sections
appear depends on the phase:

* Preview: summary, probable pitchers, starting lineups, division standings.
* Live / Final: summary with score, linescore, batting and pitching
  boxscores, team notes, highlights.
* Postponed: summary with the reason and the reschedule date only.

Anything the feed does not know yet renders as ``TBD`` or ``None``.
"""

from __future__ import annotations

import logging
from datetime import date, tzinfo
from typing import TYPE_CHECKING

from mlb_game_threads.domain.snapshot import SIDES, EventSnapshot, Side
from mlb_game_threads.domain.status import GamePhase
from mlb_game_threads.presentation.blocks import ContentBlock, EmbedField
from mlb_game_threads.presentation.formatting import (
    NONE,
    TBD,
    bold,
    code_block,
    dash,
    format_duration,
    format_game_date,
    format_time,
    parse_api_datetime,
    score_line,
)
from mlb_game_threads.presentation.links import (
    MLB_HOME,
    gameday_link,
    matchup_icon,
    sport_icon,
    team_color,
    video_link,
)
from mlb_game_threads.presentation.tables import Column, StatsTable, name_width

if TYPE_CHECKING:
    from mlb_game_threads.domain.player import PlayerInfo

logger = logging.getLogger(__name__)

HIGHLIGHT_LIMIT = 5
_MLB_AUTHOR = "Major League Baseball"


def team_name(snapshot: EventSnapshot, side: Side) -> str:
    team = snapshot.team(side)
    scheduled = snapshot.schedule.home if side == "home" else snapshot.schedule.away
    return team.team_name or team.name or scheduled.name or side.title()


def thread_title(snapshot: EventSnapshot, tz: tzinfo | None = None) -> str:
    title = f"{team_name(snapshot, 'away')} @ {team_name(snapshot, 'home')}"
    start = parse_api_datetime(snapshot.feed.date_time or snapshot.schedule.game_date)
    if start is None:
        logger.warning("Game %d has no valid start time", snapshot.event_id)
        return title
    return f"{title} - {format_game_date(start, tz)} @ {format_time(start, tz)}"


def root_blocks(snapshot: EventSnapshot, tz: tzinfo | None = None) -> list[ContentBlock]:
    blocks = [summary_block(snapshot, tz)]
    match snapshot.phase:
        case GamePhase.POSTPONED:
            pass
        case GamePhase.PREVIEW:
            blocks.append(probable_pitchers_block(snapshot))
            blocks.append(lineups_block(snapshot))
            blocks.extend(standings_blocks(snapshot))
        case _:
            blocks.append(linescore_block(snapshot))
            blocks.extend(batting_block(snapshot, side) for side in SIDES)
            blocks.append(pitching_block(snapshot))
            blocks.extend(team_info_blocks(snapshot))
            highlights = highlights_block(snapshot)
            if highlights is not None:
                blocks.append(highlights)
    return blocks


# -- summary ---------------------------------------------------------------


def _name_with_record(snapshot: EventSnapshot, side: Side) -> str:
    team = snapshot.team(side)
    name = team.name or team_name(snapshot, side)
    return f"{name} ({team.record})" if team.record else name


def summary_block(snapshot: EventSnapshot, tz: tzinfo | None = None) -> ContentBlock:
    home, away = snapshot.home, snapshot.away
    fields = [EmbedField(name="Venue", value=snapshot.feed.venue_name or snapshot.schedule.venue_name or TBD)]
    if snapshot.is_postponed:
        fields.append(EmbedField(name="Rescheduled", value=reschedule_text(snapshot, tz)))
    else:
        fields.extend(_weather_fields(snapshot))
        fields.extend(_broadcast_fields(snapshot))
        game_info = _game_info_field(snapshot, tz)
        if game_info is not None:
            fields.append(game_info)
    return ContentBlock(
        author_name=_MLB_AUTHOR,
        author_url=MLB_HOME,
        author_icon_url=sport_icon(),
        title=f"{_name_with_record(snapshot, 'away')} @ {_name_with_record(snapshot, 'home')}",
        url=gameday_link(snapshot.event_id),
        thumbnail_url=matchup_icon(home.id, away.id),
        description=summary_description(snapshot),
        color=team_color(home.id),
        fields=tuple(fields),
    )


def summary_description(snapshot: EventSnapshot) -> str:
    status = snapshot.status
    description = f"{bold('Game Status:')} {status.detailed_state or status.abstract_state or TBD}"
    phase = snapshot.phase
    if phase is GamePhase.POSTPONED:
        if status.reason:
            description += f" | {bold('Reason:')} {status.reason}"
        return description
    if phase is GamePhase.PREVIEW:
        return description

    linescore = snapshot.feed.linescore
    if phase is GamePhase.LIVE and linescore.inning_state:
        description += f" ({linescore.inning_state} {linescore.current_inning_ordinal})"
    score = score_line(
        linescore.home.runs, linescore.away.runs, team_name(snapshot, "home"), team_name(snapshot, "away")
    )
    return f"{description} | {bold('Score:')} {score}"


def reschedule_text(snapshot: EventSnapshot, tz: tzinfo | None = None) -> str:
    schedule = snapshot.schedule
    moment = parse_api_datetime(schedule.reschedule_game_date)
    if moment is not None:
        return f"{format_game_date(moment, tz)} @ {format_time(moment, tz)}"
    if schedule.reschedule_date:
        try:
            return date.fromisoformat(schedule.reschedule_date[:10]).strftime("%a %d %b %Y")
        except ValueError:
            return schedule.reschedule_date
    return TBD


def _weather_fields(snapshot: EventSnapshot) -> list[EmbedField]:
    weather = snapshot.feed.weather
    if not weather.is_known:
        return []
    conditions = ", ".join(part for part in (f"{weather.temp}° F" if weather.temp else "", weather.condition) if part)
    return [
        EmbedField(name="Weather", value=conditions or TBD, inline=True),
        EmbedField(name="Wind", value=weather.wind or TBD, inline=True),
    ]


def _feed_label(snapshot: EventSnapshot, feed_type: str) -> str:
    match feed_type.upper():
        case "HOME":
            return bold(f"{team_name(snapshot, 'home')}:")
        case "AWAY":
            return bold(f"{team_name(snapshot, 'away')}:")
        case "NATIONAL":
            return bold("National:")
        case _:
            return ""


def _listing(rows: list[tuple[str, str]]) -> str:
    if not rows:
        return NONE
    return "\n".join(f"{label} {value}".strip() for label, value in rows)


def _broadcast_fields(snapshot: EventSnapshot) -> list[EmbedField]:
    content = snapshot.content
    if content.media:
        tv = [(_feed_label(snapshot, feed.feed_type), feed.call_letters) for feed in content.tv_feeds()]
        radio = [(_feed_label(snapshot, feed.feed_type), feed.call_letters) for feed in content.radio_feeds()]
    else:
        broadcasts = snapshot.schedule.broadcasts
        if not broadcasts:
            return []
        tv = [(_feed_label(snapshot, b.market), b.call_sign or b.name) for b in broadcasts if b.is_tv]
        radio = [(_feed_label(snapshot, b.market), b.call_sign or b.name) for b in broadcasts if b.is_radio]
    return [
        EmbedField(name="TV", value=_listing(tv), inline=True),
        EmbedField(name="Radio", value=_listing(radio), inline=True),
    ]


def _game_info_field(snapshot: EventSnapshot, tz: tzinfo | None) -> EmbedField | None:
    info = snapshot.feed.game_info
    if info.attendance is None and not info.first_pitch and info.duration_minutes is None:
        return None
    first_pitch = parse_api_datetime(info.first_pitch)
    value = "\n".join(
        [
            f"{bold('Attendance:')} {f'{info.attendance:,}' if info.attendance is not None else TBD}",
            f"{bold('First Pitch:')} {format_time(first_pitch, tz) if first_pitch else TBD}",
            f"{bold('Length:')} {format_duration(info.duration_minutes)}",
        ]
    )
    return EmbedField(name="Game Info", value=value)


# -- preview ---------------------------------------------------------------


def _pitcher_line(snapshot: EventSnapshot, side: Side) -> str:
    label = bold(team_name(snapshot, side))
    pitcher = snapshot.probable_pitcher(side)
    if pitcher is None:
        return f"{label} - {TBD}"
    name = pitcher.profile.full_name or pitcher.profile.display_name
    season = pitcher.season_pitching_summary()
    return f"{label} - {name} ({season})" if season else f"{label} - {name}"


def probable_pitchers_block(snapshot: EventSnapshot) -> ContentBlock:
    return ContentBlock(
        title="Probable Pitchers",
        description="\n".join(_pitcher_line(snapshot, side) for side in SIDES),
        color=team_color(snapshot.home.id),
    )


def _lineup_name(player: PlayerInfo | None, player_id: int) -> tuple[str, str]:
    if player is None:
        return f"#{player_id}", "-"
    return player.profile.display_name, player.boxscore.position or player.profile.position or "-"


def lineup_text(snapshot: EventSnapshot, side: Side) -> str:
    order = snapshot.boxscore(side).batting_order
    if not order:
        return TBD
    rows = []
    for slot, batter_id in enumerate(order, start=1):
        name, position = _lineup_name(snapshot.player(batter_id), batter_id)
        row = bold(f"{slot}) {name} - {position}")
        split = snapshot.batter_split(batter_id)
        if split is not None and not split.is_empty:
            row += (
                f" ({dash(split.hits)}-{dash(split.at_bats)} | "
                f"{dash(split.home_runs)} HR, {dash(split.rbi)} RBI, {dash(split.strike_outs)} K)"
            )
        rows.append(row)
    return "\n".join(rows)


def lineups_block(snapshot: EventSnapshot) -> ContentBlock:
    return ContentBlock(
        title="Starting Lineups",
        fields=tuple(
            EmbedField(name=team_name(snapshot, side), value=lineup_text(snapshot, side), inline=True) for side in SIDES
        ),
        color=team_color(snapshot.home.id),
    )


def standings_blocks(snapshot: EventSnapshot) -> list[ContentBlock]:
    blocks = []
    seen: set[int] = set()
    for side in SIDES:
        team = snapshot.team(side)
        division = snapshot.division_for(team)
        if division is None or division.division_id in seen:
            continue
        seen.add(division.division_id)
        table = StatsTable(
            [
                Column("Team", name_width(record.team_name for record in division.teams)),
                Column("W", 4, "right"),
                Column("L", 4, "right"),
                Column("GB", 6, "right"),
                Column("STRK", 6, "right"),
            ],
            [
                (record.team_name, record.wins, record.losses, record.games_back, record.streak or "-")
                for record in division.teams
            ],
        )
        blocks.append(
            ContentBlock(
                title=division.division_name or "Standings",
                description=code_block(table.render()),
                color=team_color(team.id),
            )
        )
    return blocks


# -- live / final ----------------------------------------------------------


def linescore_block(snapshot: EventSnapshot) -> ContentBlock:
    linescore = snapshot.feed.linescore
    innings = max(linescore.scheduled_innings, len(linescore.innings))
    by_number = {inning.num: inning for inning in linescore.innings}
    names = {side: team_name(snapshot, side) for side in SIDES}
    columns = [Column("", name_width(names.values()))]
    columns.extend(Column(str(n), 3, "right") for n in range(1, innings + 1))
    columns.extend([Column("R", 4, "right"), Column("H", 4, "right"), Column("E", 4, "right")])

    table = StatsTable(columns)
    for side in SIDES:
        totals = linescore.home if side == "home" else linescore.away
        row: list[object] = [names[side]]
        for n in range(1, innings + 1):
            inning = by_number.get(n)
            runs = None if inning is None else (inning.home if side == "home" else inning.away).runs
            row.append("" if runs is None else runs)
        row.extend([dash(totals.runs), dash(totals.hits), dash(totals.errors)])
        table.add_row(row)

    return ContentBlock(
        title="Linescore",
        description=code_block(table.render()),
        color=team_color(snapshot.home.id),
    )


def batting_block(snapshot: EventSnapshot, side: Side) -> ContentBlock:
    box = snapshot.boxscore(side)
    rows: list[tuple[object, ...]] = []
    for batter_id in box.batters:
        player = snapshot.player(batter_id)
        if player is None or player.boxscore.batting is None:
            continue
        stats = player.boxscore.batting
        season = player.boxscore.season_batting
        positions = "-".join(player.boxscore.all_positions) or player.boxscore.position
        slot = player.boxscore.lineup_slot
        rows.append(
            (
                "" if slot is None else slot,
                f"{stats.note}{player.profile.display_name} - {positions}",
                dash(stats.at_bats),
                dash(stats.runs),
                dash(stats.hits),
                dash(stats.rbi),
                dash(stats.base_on_balls),
                dash(stats.strike_outs),
                dash(stats.left_on_base),
                dash(season.avg if season else None),
                dash(season.obp if season else None),
                dash(season.slg if season else None),
            )
        )

    if rows:
        columns = [Column("", 3), Column("", name_width(str(row[1]) for row in rows))]
        columns.extend(Column(label, 4, "right") for label in ("AB", "R", "H", "RBI", "BB", "K", "LOB"))
        columns.extend(Column(label, 6, "right") for label in ("AVG", "OBP", "SLG"))
        description = code_block(StatsTable(columns, rows).render())
    else:
        description = NONE
    if box.notes:
        description += "\n" + "\n".join(f"{note.label}-{note.value}" for note in box.notes)

    return ContentBlock(
        title=f"{team_name(snapshot, side)} Batting",
        description=description,
        color=team_color(snapshot.team(side).id),
    )


def pitching_lines(snapshot: EventSnapshot, side: Side) -> str:
    lines = []
    for pitcher_id in snapshot.boxscore(side).pitchers:
        player = snapshot.player(pitcher_id)
        if player is None:
            continue
        pitching = player.boxscore.pitching
        note = f" {pitching.note}" if pitching is not None and pitching.note else ""
        lines.append(f"{player.profile.display_name}{note} ({dash(player.game_pitching_summary())})")
    return "\n".join(lines) or NONE


def pitching_block(snapshot: EventSnapshot) -> ContentBlock:
    return ContentBlock(
        title="Pitching",
        fields=tuple(EmbedField(name=team_name(snapshot, side), value=pitching_lines(snapshot, side)) for side in SIDES),
        color=team_color(snapshot.home.id),
    )


def team_info_blocks(snapshot: EventSnapshot) -> list[ContentBlock]:
    blocks = []
    for side in SIDES:
        sections = [section for section in snapshot.boxscore(side).info if section.fields]
        if not sections:
            continue
        fields = tuple(
            EmbedField(
                name=section.title.capitalize() or "Info",
                value="\n".join(f"{bold(item.label)}: {item.value}" for item in section.fields),
            )
            for section in sections
        )
        blocks.append(
            ContentBlock(
                title=f"{team_name(snapshot, side)} Notes",
                fields=fields,
                color=team_color(snapshot.team(side).id),
            )
        )
    return blocks


def highlights_block(snapshot: EventSnapshot) -> ContentBlock | None:
    highlights = [h for h in snapshot.content.latest_highlights(HIGHLIGHT_LIMIT) if h.slug]
    if not highlights:
        return None
    lines = []
    for highlight in highlights:
        line = f"[{highlight.title or highlight.slug}]({video_link(highlight.slug)})"
        if highlight.duration:
            line += f" ({highlight.duration})"
        lines.append(line)
    return ContentBlock(title="Highlights", description="\n".join(lines), color=team_color(snapshot.home.id))

from __future__ import annotations

from typing import TYPE_CHECKING

from mlb_game_threads.presentation.blocks import ContentBlock
from mlb_game_threads.presentation.formatting import bold, inning_header, score_line
from mlb_game_threads.presentation.links import gameday_link, player_icon, player_link, team_color
from mlb_game_threads.presentation.summary import team_name

if TYPE_CHECKING:
    from mlb_game_threads.domain.play import Play, SubEvent
    from mlb_game_threads.domain.player import PlayerInfo
    from mlb_game_threads.domain.snapshot import EventSnapshot, Side

UNKNOWN_PLAY = "Play details unavailable"


def batting_side(play: Play) -> Side:
    return "away" if play.is_top_inning else "home"


def _score(snapshot: EventSnapshot, home_score: int | None, away_score: int | None) -> str:
    line = score_line(home_score, away_score, team_name(snapshot, "home"), team_name(snapshot, "away"))
    return f"{bold('Score:')} {line}"


def play_block(snapshot: EventSnapshot, play: Play) -> ContentBlock:
    """Announcement for a completed plate appearance.

    Renders even when the batter or pitcher is missing from the roster.
    """
    batter = snapshot.player(play.batter_id)
    pitcher = snapshot.player(play.pitcher_id)

    lines = [play.description or play.event or UNKNOWN_PLAY]
    if play.is_scoring_play:
        lines.append(_score(snapshot, play.home_score, play.away_score))

    footer = ""
    if batter is not None and pitcher is not None:
        footer = f"{batter.profile.display_name} vs. {pitcher.profile.display_name}"

    return ContentBlock(
        author_name=inning_header(play),
        title=play.event or "Play",
        url=gameday_link(snapshot.event_id),
        description="\n".join(lines),
        color=team_color(snapshot.team(batting_side(play)).id),
        thumbnail_url=player_icon(batter.id) if batter is not None else "",
        footer=footer,
    )


def sub_event_block(snapshot: EventSnapshot, play: Play, sub_event: SubEvent, player: PlayerInfo) -> ContentBlock:
    text = sub_event.description or sub_event.event or UNKNOWN_PLAY
    lines = [f"{bold(sub_event.event)}: {text}" if sub_event.event and sub_event.description else text]
    if sub_event.is_scoring_play:
        lines.append(_score(snapshot, sub_event.home_score, sub_event.away_score))

    return ContentBlock(
        author_name=player.profile.display_name,
        author_url=player_link(player.id),
        author_icon_url=player_icon(player.id),
        title=inning_header(play),
        description="\n".join(lines),
        color=team_color(snapshot.team(batting_side(play)).id),
    )

"""Small text helpers shared by the summary and play renderers."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mlb_game_threads.domain.play import Play

TBD = "TBD"
NONE = "None"


def bold(text: str) -> str:
    return f"**{text}**" if text else ""


def code_block(text: str) -> str:
    return f"```\n{text}\n```"


def dash(value: object) -> str:
    if value is None or value == "":
        return "-"
    return str(value)


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def score_line(home_score: int | None, away_score: int | None, home_name: str, away_name: str) -> str:
    """Render a score as ``"<high>-<low> <leader>"``, or ``"<n>-<n>"`` when tied.

    Unknown scores count as zero.
    """
    home = home_score or 0
    away = away_score or 0
    if home == away:
        return f"{home}-{away}"
    if home > away:
        return f"{home}-{away} {home_name}".rstrip()
    return f"{away}-{home} {away_name}".rstrip()


def inning_header(play: Play) -> str:
    if play.inning is None:
        return ""
    half = "Top" if play.is_top_inning else "Bottom"
    header = f"{half} {ordinal(play.inning)}"
    if play.outs is not None:
        header += f", {play.outs} out" if play.outs == 1 else f", {play.outs} outs"
    return header


def parse_api_datetime(value: str) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def format_time(moment: datetime, tz: tzinfo | None = None) -> str:
    """``07:05PM EDT`` style wall-clock time, in *tz* or the local zone."""
    return moment.astimezone(tz).strftime("%I:%M%p %Z").strip()


def format_game_date(moment: datetime, tz: tzinfo | None = None) -> str:
    return moment.astimezone(tz).strftime("%a %d %b %Y")


def format_duration(minutes: int | None) -> str:
    if minutes is None:
        return TBD
    return f"{minutes // 60}:{minutes % 60:02d}"

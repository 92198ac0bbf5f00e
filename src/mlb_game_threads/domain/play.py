from dataclasses import dataclass

_LOGGABLE_EVENT_TYPES = frozenset(
    {
        "offensive_substitution",
        "defensive_substitution",
        "defensive_switch",
        "pitching_substitution",
        "balk",
        "wild_pitch",
        "passed_ball",
        "error",
        "field_error",
        "stolen_base",
        "caught_stealing",
    }
)
_LOGGABLE_EVENT_PREFIXES = ("stolen_base_", "caught_stealing_")


@dataclass(frozen=True)
class SubEvent:
    """A notable action inside a plate appearance that is not its result."""

    index: int
    event: str = ""
    event_type: str = ""
    description: str = ""
    player_id: int | None = None
    is_scoring_play: bool = False
    is_out: bool = False
    home_score: int | None = None
    away_score: int | None = None

    @property
    def is_loggable(self) -> bool:
        if self.is_scoring_play:
            return True
        if self.event_type in _LOGGABLE_EVENT_TYPES:
            return True
        if self.event_type.startswith(_LOGGABLE_EVENT_PREFIXES):
            return True
        # pickoff attempts only matter when they record the out
        return self.event_type.startswith("pickoff_") and self.is_out


@dataclass(frozen=True)
class Play:
    sequence_index: int
    is_complete: bool = False
    is_scoring_play: bool = False
    inning: int | None = None
    is_top_inning: bool = True
    outs: int | None = None
    event: str = ""
    event_type: str = ""
    description: str = ""
    rbi: int | None = None
    home_score: int | None = None
    away_score: int | None = None
    batter_id: int | None = None
    pitcher_id: int | None = None
    sub_events: tuple[SubEvent, ...] = ()

    def loggable_sub_events(self) -> list[SubEvent]:
        return [sub for sub in self.sub_events if sub.is_loggable]

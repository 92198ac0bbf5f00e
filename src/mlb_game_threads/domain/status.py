from dataclasses import dataclass
from enum import StrEnum


class GamePhase(StrEnum):
    PREVIEW = "Preview"
    LIVE = "Live"
    FINAL = "Final"
    POSTPONED = "Postponed"


_POSTPONED_CODES = frozenset({"D"})
_TERMINAL_PHASES = frozenset({GamePhase.FINAL, GamePhase.POSTPONED})


@dataclass(frozen=True)
class GameStatus:
    """Status block of the live feed.

    ``abstract_state`` is the coarse Preview/Live/Final classification;
    ``detailed_state`` and ``coded_state`` carry the postponement signal,
    which is orthogonal to it (a postponed game reports ``Final`` or
    ``Preview`` as its abstract state depending on when it was called).
    """

    abstract_state: str = ""
    detailed_state: str = ""
    coded_state: str = ""
    reason: str = ""

    @property
    def is_postponed(self) -> bool:
        return self.detailed_state == "Postponed" or self.coded_state in _POSTPONED_CODES

    @property
    def phase(self) -> GamePhase:
        if self.is_postponed:
            return GamePhase.POSTPONED
        if self.abstract_state == GamePhase.LIVE:
            return GamePhase.LIVE
        if self.abstract_state == GamePhase.FINAL:
            return GamePhase.FINAL
        return GamePhase.PREVIEW


def is_terminal(phase: GamePhase) -> bool:
    return phase in _TERMINAL_PHASES

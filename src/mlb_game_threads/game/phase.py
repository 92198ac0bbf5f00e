import logging

from mlb_game_threads.domain.status import GamePhase

logger = logging.getLogger(__name__)

_IN_PROGRESS = frozenset({GamePhase.LIVE, GamePhase.FINAL})


class CadencePolicy:
    """Chooses the refresh interval for a game and switches it once.

    Games are polled every ``preview_minutes`` until the game is first seen
    Live (or already Final), then every ``live_minutes``. The switch is one-shot:
    later observations never ask for another reschedule.
    """

    def __init__(self, preview_minutes: int = 10, live_minutes: int = 2) -> None:
        if preview_minutes <= 0 or live_minutes <= 0:
            msg = "refresh intervals must be positive"
            raise ValueError(msg)
        self.preview_minutes = preview_minutes
        self.live_minutes = live_minutes
        self._switched = False

    @property
    def switched(self) -> bool:
        return self._switched

    def initial_interval(self, phase: GamePhase) -> int:
        if phase not in _IN_PROGRESS:
            return self.preview_minutes
        self._switched = True
        return self.live_minutes

    def observe(self, phase: GamePhase) -> int | None:
        """Return the new interval if *phase* triggers the switch, else None."""
        if self._switched or phase not in _IN_PROGRESS:
            return None
        self._switched = True
        logger.debug("Phase %s observed; switching cadence to %d minutes", phase, self.live_minutes)
        return self.live_minutes

import pytest

from mlb_game_threads.domain.status import GamePhase
from mlb_game_threads.game.phase import CadencePolicy


class TestCadencePolicy:
    def test_preview_game_starts_at_preview_interval(self) -> None:
        policy = CadencePolicy(preview_minutes=10, live_minutes=2)
        assert policy.initial_interval(GamePhase.PREVIEW) == 10
        assert not policy.switched

    def test_game_already_live_starts_at_live_interval(self) -> None:
        policy = CadencePolicy(preview_minutes=10, live_minutes=2)
        assert policy.initial_interval(GamePhase.LIVE) == 2
        assert policy.switched
        assert policy.observe(GamePhase.LIVE) is None

    def test_switches_exactly_once(self) -> None:
        policy = CadencePolicy(preview_minutes=10, live_minutes=2)
        policy.initial_interval(GamePhase.PREVIEW)

        observed = [policy.observe(phase) for phase in (GamePhase.PREVIEW, GamePhase.LIVE, GamePhase.LIVE)]

        assert observed == [None, 2, None]

    def test_final_also_triggers_switch(self) -> None:
        policy = CadencePolicy()
        assert policy.observe(GamePhase.FINAL) == 2
        assert policy.observe(GamePhase.LIVE) is None

    def test_postponed_never_switches(self) -> None:
        policy = CadencePolicy()
        assert policy.observe(GamePhase.POSTPONED) is None
        assert not policy.switched

    @pytest.mark.parametrize(("preview", "live"), [(0, 2), (10, 0), (-1, 2)])
    def test_rejects_non_positive_intervals(self, preview: int, live: int) -> None:
        with pytest.raises(ValueError, match="must be positive"):
            CadencePolicy(preview_minutes=preview, live_minutes=live)

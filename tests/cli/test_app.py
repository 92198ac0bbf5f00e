import logging
import os
from collections.abc import Iterator
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from mlb_game_threads.cli.app import app, build_preview
from mlb_game_threads.domain.result import Err, Ok
from tests.fakes.gateway import FakeGateway, gateway_error
from tests.helpers import GAME_PK, make_feed, make_play, make_schedule_entry

runner = CliRunner()

MISSING_CONFIG = "/nonexistent/gamethread.yaml"


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """The CLI callback reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _gateway(*plays_args: int) -> FakeGateway:
    gateway = FakeGateway(make_feed("Live", plays=[make_play(i) for i in plays_args]), [make_schedule_entry()])
    gateway.close = AsyncMock()  # type: ignore[attr-defined]
    return gateway


class TestMain:
    def test_no_command_exits_cleanly(self) -> None:
        result = runner.invoke(app, [])
        assert result.exit_code == 0


class TestRunCommand:
    def test_missing_token_exits_with_error(self) -> None:
        with patch("mlb_game_threads.cli.app.run_bot", new_callable=AsyncMock) as run_bot:
            result = runner.invoke(app, ["run", "--config", MISSING_CONFIG])

        assert result.exit_code == 1
        assert "DISCORD_BOT_TOKEN" in result.output
        run_bot.assert_not_called()

    def test_flags_override_settings(self) -> None:
        with (
            patch.dict(os.environ, {"DISCORD_BOT_TOKEN": "test-token"}),
            patch("mlb_game_threads.cli.app.run_bot", new_callable=AsyncMock) as run_bot,
        ):
            result = runner.invoke(app, ["run", "--dev", "--team-id", "147", "--config", MISSING_CONFIG])

        assert result.exit_code == 0
        settings, discord_config = run_bot.await_args.args
        assert settings.dev.enabled is True
        assert settings.team_id == 147
        assert discord_config.bot_token == "test-token"


class TestPreviewCommand:
    def test_prints_thread(self) -> None:
        gateway = _gateway(0)
        with patch("mlb_game_threads.cli.app.StatsApiClient", return_value=gateway):
            result = runner.invoke(app, ["preview", str(GAME_PK), "--config", MISSING_CONFIG])

        assert result.exit_code == 0, result.output
        assert "Thread: Away @ Home" in result.output
        assert "Linescore" in result.output
        assert "Announcements: 1" in result.output
        gateway.close.assert_awaited_once()  # type: ignore[attr-defined]

    def test_timecode_is_passed_to_feed(self) -> None:
        gateway = _gateway()
        with patch("mlb_game_threads.cli.app.StatsApiClient", return_value=gateway):
            runner.invoke(app, ["preview", str(GAME_PK), "--timecode", "20240405_230500", "--config", MISSING_CONFIG])

        assert ("feed", (GAME_PK, "20240405_230500")) in gateway.calls

    def test_failed_load_exits_with_error(self) -> None:
        gateway = _gateway()
        gateway.feed_result = gateway_error()
        with patch("mlb_game_threads.cli.app.StatsApiClient", return_value=gateway):
            result = runner.invoke(app, ["preview", str(GAME_PK), "--config", MISSING_CONFIG])

        assert result.exit_code == 1
        assert "live feed unavailable" in result.output
        gateway.close.assert_awaited_once()  # type: ignore[attr-defined]


class TestBuildPreview:
    async def test_collects_title_blocks_and_plays(self) -> None:
        result = await build_preview(_gateway(0, 1), GAME_PK)

        assert isinstance(result, Ok)
        assert result.value.title.startswith("Away @ Home")
        assert result.value.blocks[0].description.startswith("**Game Status:** In Progress")
        assert [a.sequence_index for a in result.value.announcements] == [0, 1]

    async def test_load_failure_is_err(self) -> None:
        gateway = _gateway()
        gateway.schedule_result = gateway_error("schedule")

        result = await build_preview(gateway, GAME_PK)

        assert isinstance(result, Err)
        assert result.error.endpoint == "schedule"

from __future__ import annotations

from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

import pytest
from config import ConfigurationSet

from mlb_game_threads.config import BotSettings, DevSettings, build_overrides, create_config, load_bot_settings

if TYPE_CHECKING:
    from pathlib import Path

MISSING = "/nonexistent/gamethread.yaml"


def test_create_config_returns_defaults() -> None:
    cfg = create_config(yaml_path=MISSING)
    assert isinstance(cfg, ConfigurationSet)
    assert cfg["refresh.preview_minutes"] == 10
    assert cfg["refresh.live_minutes"] == 2
    assert cfg["schedule.daily_hour"] == 5


def test_default_settings() -> None:
    settings = load_bot_settings(create_config(yaml_path=MISSING))
    assert settings == BotSettings()
    assert settings.tz is None
    assert settings.dev == DevSettings()


def test_yaml_overrides_defaults(tmp_path: Path) -> None:
    yaml_file = tmp_path / "gamethread.yaml"
    yaml_file.write_text(
        "schedule:\n"
        "  team_id: 147\n"
        "refresh:\n"
        "  live_minutes: 3\n"
        "display:\n"
        "  timezone: America/New_York\n"
        "dev:\n"
        "  timecodes:\n"
        "    - '20240405_230000'\n"
        "    - '20240405_231000'\n"
    )

    settings = load_bot_settings(create_config(yaml_path=str(yaml_file)))

    assert settings.team_id == 147
    assert settings.live_minutes == 3
    assert settings.preview_minutes == 10
    assert settings.tz == ZoneInfo("America/New_York")
    assert settings.dev.timecodes == ("20240405_230000", "20240405_231000")


def test_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    yaml_file = tmp_path / "gamethread.yaml"
    yaml_file.write_text("refresh:\n  preview_minutes: 15\n")

    monkeypatch.setenv("GAMETHREAD__REFRESH__PREVIEW_MINUTES", "20")
    monkeypatch.setenv("GAMETHREAD__DEV__ENABLED", "true")
    monkeypatch.setenv("GAMETHREAD__DEV__TIMECODES", "20240405_230000, 20240405_231000")

    settings = load_bot_settings(create_config(yaml_path=str(yaml_file)))

    assert settings.preview_minutes == 20
    assert settings.dev.enabled is True
    assert settings.dev.timecodes == ("20240405_230000", "20240405_231000")


def test_overrides_beat_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GAMETHREAD__SCHEDULE__TEAM_ID", "111")
    monkeypatch.setenv("GAMETHREAD__DEV__ENABLED", "false")

    cfg = create_config(yaml_path=MISSING, overrides=build_overrides(dev=True, team_id=147))
    settings = load_bot_settings(cfg)

    assert settings.team_id == 147
    assert settings.dev.enabled is True


def test_build_overrides_skips_unset_values() -> None:
    assert build_overrides() == {}
    assert build_overrides(team_id=147) == {"schedule": {"team_id": 147}}
    assert build_overrides(dev=False) == {"dev": {"enabled": False}}


def test_custom_defaults() -> None:
    defaults = {
        "schedule": {"team_id": "", "daily_hour": 9},
        "refresh": {"preview_minutes": 30, "live_minutes": 1},
        "dev": {"replay_seconds": 0},
    }
    settings = load_bot_settings(create_config(yaml_path=MISSING, defaults=defaults))
    assert settings.daily_hour == 9
    assert settings.preview_minutes == 30
    assert settings.dev.replay_seconds == 0.0


@pytest.mark.parametrize("key", ["PREVIEW_MINUTES", "LIVE_MINUTES"])
def test_non_positive_interval_rejected(key: str, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(f"GAMETHREAD__REFRESH__{key}", "0")
    with pytest.raises(ValueError, match="must be positive"):
        load_bot_settings(create_config(yaml_path=MISSING))

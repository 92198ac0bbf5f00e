from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, cast
from zoneinfo import ZoneInfo

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import tzinfo

_DEFAULTS: dict[str, object] = {
    "schedule": {
        "team_id": "",
        "daily_hour": 5,
    },
    "refresh": {
        "preview_minutes": 10,
        "live_minutes": 2,
    },
    "display": {
        "timezone": "",
    },
    "dev": {
        "enabled": False,
        "schedule_date": "",
        "timecodes": [],
        "replay_seconds": 5,
    },
}

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class DevSettings:
    """Replay mode: one game day, refreshed from recorded feed timecodes."""

    enabled: bool = False
    schedule_date: str = ""
    timecodes: tuple[str, ...] = ()
    replay_seconds: float = 5.0


@dataclass(frozen=True)
class BotSettings:
    team_id: int | None = None
    daily_hour: int = 5
    preview_minutes: int = 10
    live_minutes: int = 2
    timezone: str = ""
    dev: DevSettings = field(default_factory=DevSettings)

    @property
    def tz(self) -> tzinfo | None:
        return ZoneInfo(self.timezone) if self.timezone else None


def create_config(
    yaml_path: str = "gamethread.yaml",
    env_prefix: str = "GAMETHREAD",
    defaults: dict[str, object] | None = None,
    *,
    overrides: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.
    Environment keys use ``__`` between sections, e.g. ``GAMETHREAD__REFRESH__LIVE_MINUTES``.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if overrides:
        layers.insert(0, config_from_dict(overrides))
    return ConfigurationSet(*layers)


def build_overrides(*, dev: bool | None = None, team_id: int | None = None) -> dict[str, object]:
    overrides: dict[str, object] = {}
    if team_id is not None:
        overrides["schedule"] = {"team_id": team_id}
    if dev is not None:
        overrides["dev"] = {"enabled": dev}
    return overrides


def _as_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def _as_optional_int(value: object) -> int | None:
    if value is None or str(value).strip() == "":
        return None
    return int(str(value))


def _as_strings(value: object) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    return tuple(str(item) for item in cast("Iterable[object]", value))


def load_bot_settings(cfg: ConfigurationSet | None = None) -> BotSettings:
    if cfg is None:
        cfg = create_config()
    settings = BotSettings(
        team_id=_as_optional_int(cfg.get("schedule.team_id")),
        daily_hour=int(str(cfg["schedule.daily_hour"])),
        preview_minutes=int(str(cfg["refresh.preview_minutes"])),
        live_minutes=int(str(cfg["refresh.live_minutes"])),
        timezone=str(cfg.get("display.timezone") or ""),
        dev=DevSettings(
            enabled=_as_bool(cfg.get("dev.enabled", False)),
            schedule_date=str(cfg.get("dev.schedule_date") or ""),
            timecodes=_as_strings(cfg.get("dev.timecodes")),
            replay_seconds=float(str(cfg["dev.replay_seconds"])),
        ),
    )
    if settings.preview_minutes <= 0 or settings.live_minutes <= 0:
        msg = "refresh intervals must be positive"
        raise ValueError(msg)
    return settings

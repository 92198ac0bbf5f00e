"""Shared pytest fixtures for test modules."""

from __future__ import annotations

import os

import pytest

_ENV_PREFIXES = ("GAMETHREAD__", "DISCORD_")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove GAMETHREAD__ and DISCORD_ env vars so tests are isolated from the shell."""
    for key in list(os.environ):
        if key.startswith(_ENV_PREFIXES):
            monkeypatch.delenv(key)

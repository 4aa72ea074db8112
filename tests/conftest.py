# tests/conftest.py
from __future__ import annotations

from pathlib import Path

import pytest

from ffvideo.common import settings as settings_mod


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Fresh settings per test; never read a developer's .env."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("APP_ENV", "test")
    settings_mod.get_settings.cache_clear()
    yield
    settings_mod.get_settings.cache_clear()


@pytest.fixture()
def video_file(tmp_path) -> Path:
    p = tmp_path / "media" / "clip.avi"
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(b"RIFF....AVI fake payload")
    return p

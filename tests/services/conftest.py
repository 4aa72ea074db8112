# tests/services/conftest.py
from __future__ import annotations

import pytest
from starlette.testclient import TestClient

from ffvideo.common.settings import get_settings
from ffvideo.services.api.app import create_app
from ffvideo.services.api.deps import get_media_probe, get_transcoder
from ffvideo.services.video.transcoder import Transcoder

from fakes import FakeProbe, FakeRunner, write_png


@pytest.fixture()
def api_env(monkeypatch, tmp_path):
    """media root + scratch dirs under tmp_path, exported through the environment."""
    media = tmp_path / "media"
    media.mkdir(exist_ok=True)
    monkeypatch.setenv("MEDIA_ROOT", str(media))
    monkeypatch.setenv("TEMP_DIR", str(tmp_path / "scratch"))
    monkeypatch.setenv("PERSISTENT_DIR", str(tmp_path / "encoded"))
    get_settings.cache_clear()
    return tmp_path


@pytest.fixture()
def fake_runner() -> FakeRunner:
    return FakeRunner(writer=lambda out: write_png(out, size=(400, 300)))


@pytest.fixture()
def api_client(api_env, fake_runner):
    """
    A TestClient whose probe/transcoder dependencies are replaced with fakes,
    so no ffmpeg binary is needed.
    """
    probe = FakeProbe()
    app = create_app()
    app.dependency_overrides[get_media_probe] = lambda: probe
    app.dependency_overrides[get_transcoder] = lambda: Transcoder(
        fake_runner, probe=probe, settings=get_settings()
    )
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()

import json
import subprocess

import pytest

import ffvideo.services.probe.ffprobe_adapter as ffprobe_mod
from ffvideo.domain.enums import ProbeMode
from ffvideo.common.settings import get_settings
from ffvideo.services.ffmpeg.errors import ToolInvocationError
from ffvideo.services.probe.factory import build_probe
from ffvideo.services.probe.ffmpeg_text_adapter import FFmpegTextProbe
from ffvideo.services.probe.ffprobe_adapter import FFprobeAdapter

from fakes import BANNER, FakeRunner

FFPROBE = "/opt/ffmpeg/bin/ffprobe"


def _completed(stdout="", returncode=0, stderr=""):
    def _run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)
    return _run


def test_text_probe_scrapes_banner(video_file):
    runner = FakeRunner(lines=BANNER)
    info = FFmpegTextProbe(runner=runner).probe(video_file)

    assert runner.calls == [["/fake/ffmpeg", "-i", str(video_file)]]
    assert info.duration == 90.5
    assert info.video_codec == "h264"
    assert info.resolution == (1920, 1080)
    assert info.audio_codec == "aac"
    assert info.stereo is True
    assert info.raw_lines.format_line.strip().startswith("Duration:")


def test_text_probe_short_banner_degrades(video_file, caplog):
    runner = FakeRunner(lines=["  Duration: 00:00:03.00, start: 0.000000, bitrate: 5 kb/s"])
    info = FFmpegTextProbe(runner=runner).probe(video_file)
    assert info.duration == 3.0
    assert info.fps == 0
    assert info.sample_rate == 0
    assert any("fewer than three" in r.getMessage() for r in caplog.records)


def test_text_probe_missing_file(tmp_path):
    runner = FakeRunner()
    with pytest.raises(FileNotFoundError):
        FFmpegTextProbe(runner=runner).probe(tmp_path / "nope.mp4")
    assert runner.calls == []


def test_ffprobe_adapter_parses_json(monkeypatch, video_file):
    payload = {
        "format": {"duration": "12.5", "bit_rate": "2000000", "format_name": "avi"},
        "streams": [{"codec_type": "video", "codec_name": "mpeg4", "width": 320, "height": 240,
                     "avg_frame_rate": "25/1"}],
    }
    monkeypatch.setattr(ffprobe_mod.subprocess, "run", _completed(stdout=json.dumps(payload)))
    info = FFprobeAdapter(ffprobe_bin=FFPROBE).probe(video_file)
    assert info.duration == 12.5
    assert info.bitrate == 2000
    assert info.fps == 25
    assert info.audio_codec == "unknown"
    assert info.container == "avi"


def test_ffprobe_adapter_nonzero_exit(monkeypatch, video_file):
    monkeypatch.setattr(ffprobe_mod.subprocess, "run", _completed(returncode=1, stderr="Invalid data"))
    with pytest.raises(ToolInvocationError) as ei:
        FFprobeAdapter(ffprobe_bin=FFPROBE).probe(video_file)
    assert ei.value.output == "Invalid data"
    assert FFPROBE in str(ei.value)


def test_ffprobe_adapter_invalid_json(monkeypatch, video_file):
    monkeypatch.setattr(ffprobe_mod.subprocess, "run", _completed(stdout="{not json"))
    with pytest.raises(ToolInvocationError, match="invalid JSON"):
        FFprobeAdapter(ffprobe_bin=FFPROBE).probe(video_file)


def test_ffprobe_adapter_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        FFprobeAdapter(ffprobe_bin=FFPROBE).probe(tmp_path / "missing.mp4")


def test_build_probe_follows_mode(monkeypatch):
    monkeypatch.setenv("PROBE__FFPROBE_BIN", FFPROBE)
    assert isinstance(build_probe(get_settings()), FFprobeAdapter)

    monkeypatch.setenv("PROBE__MODE", ProbeMode.text.value)
    get_settings.cache_clear()
    probe = build_probe(get_settings(), runner=FakeRunner())
    assert isinstance(probe, FFmpegTextProbe)

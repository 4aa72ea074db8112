import subprocess

import pytest

import ffvideo.services.ffmpeg.runner as runner_mod
from ffvideo.services.ffmpeg.errors import ToolInvocationError, ToolNotFoundError
from ffvideo.common.settings import Settings
from ffvideo.services.api.deps import get_runner
from ffvideo.services.ffmpeg.runner import FFmpegRunner, resolve_binary

FFMPEG = "/opt/ffmpeg/bin/ffmpeg"


class _FakeRun:
    def __init__(self, returncode=0, stdout="", exc=None):
        self.returncode = returncode
        self.stdout = stdout
        self.exc = exc
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        if self.exc is not None:
            raise self.exc
        return subprocess.CompletedProcess(cmd, self.returncode, stdout=self.stdout)


def test_resolve_binary_missing(monkeypatch):
    monkeypatch.setattr(runner_mod.shutil, "which", lambda name: None)
    with pytest.raises(ToolNotFoundError):
        resolve_binary("ffmpeg")


def test_resolve_binary_explicit_path_untouched():
    assert resolve_binary(FFMPEG) == FFMPEG


def test_command_prefixes_binary_and_banner_flag():
    r = FFmpegRunner(FFMPEG)
    assert r.command("-i", "a.mp4") == [FFMPEG, "-hide_banner", "-i", "a.mp4"]


def test_run_captures_combined_output(monkeypatch):
    fake = _FakeRun(returncode=0, stdout="line one\nline two\n")
    monkeypatch.setattr(runner_mod.subprocess, "run", fake)

    res = FFmpegRunner(FFMPEG, timeout_sec=12).run([FFMPEG, "-i", "in.mp4", "out.mkv"])
    assert res.lines == ["line one", "line two"]
    cmd, kwargs = fake.calls[0]
    assert cmd == [FFMPEG, "-i", "in.mp4", "out.mkv"]
    assert kwargs["stderr"] is subprocess.STDOUT
    assert kwargs["timeout"] == 12
    assert "shell" not in kwargs


def test_any_nonzero_is_failure_by_default(monkeypatch):
    monkeypatch.setattr(runner_mod.subprocess, "run", _FakeRun(returncode=69, stdout="boom"))
    with pytest.raises(ToolInvocationError) as ei:
        FFmpegRunner(FFMPEG).run([FFMPEG, "-i", "my clip.mp4", "out.mkv"])
    assert ei.value.rc == 69
    assert ei.value.output == "boom"
    assert "'my clip.mp4'" in str(ei.value)
    assert ei.value.command_line.startswith(FFMPEG)


def test_legacy_exit_status_only_fails_on_one(monkeypatch):
    monkeypatch.setattr(runner_mod.subprocess, "run", _FakeRun(returncode=69))
    r = FFmpegRunner(FFMPEG, legacy_exit_status=True)
    assert r.run([FFMPEG, "-version"]).returncode == 69

    monkeypatch.setattr(runner_mod.subprocess, "run", _FakeRun(returncode=1))
    with pytest.raises(ToolInvocationError):
        r.run([FFMPEG, "-version"])


def test_check_false_tolerates_exit_status(monkeypatch):
    monkeypatch.setattr(runner_mod.subprocess, "run", _FakeRun(returncode=1, stdout="Stream #0:0"))
    res = FFmpegRunner(FFMPEG).run([FFMPEG, "-i", "x.mp4"], check=False)
    assert res.returncode == 1


def test_timeout_becomes_invocation_error(monkeypatch):
    exc = subprocess.TimeoutExpired(cmd=[FFMPEG], timeout=3)
    monkeypatch.setattr(runner_mod.subprocess, "run", _FakeRun(exc=exc))
    with pytest.raises(ToolInvocationError, match="timed out after 3"):
        FFmpegRunner(FFMPEG).run([FFMPEG, "-i", "x.mp4", "y.mp4"], timeout=3, check=False)


def test_launch_failure_becomes_invocation_error(monkeypatch):
    monkeypatch.setattr(runner_mod.subprocess, "run", _FakeRun(exc=FileNotFoundError("no such file")))
    with pytest.raises(ToolInvocationError, match="Failed to execute"):
        FFmpegRunner(FFMPEG).run([FFMPEG, "-version"])


def test_injected_settings_reach_the_runner():
    cfg = Settings(ffmpeg={"bin": FFMPEG, "timeout_sec": 7, "hide_banner": False, "legacy_exit_status": True})
    r = get_runner(cfg)
    assert r.ffmpeg_bin == FFMPEG
    assert r.timeout_sec == 7
    assert r.legacy_exit_status is True
    assert r.command("-version") == [FFMPEG, "-version"]

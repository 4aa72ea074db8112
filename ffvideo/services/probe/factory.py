from __future__ import annotations

from typing import Optional

from ffvideo.common.settings import Settings, get_settings
from ffvideo.domain.enums import ProbeMode
from ffvideo.domain.ports.probe import MediaProbePort
from ffvideo.services.ffmpeg.runner import FFmpegRunner
from ffvideo.services.probe.ffmpeg_text_adapter import FFmpegTextProbe
from ffvideo.services.probe.ffprobe_adapter import FFprobeAdapter


def build_probe(settings: Optional[Settings] = None, runner: Optional[FFmpegRunner] = None) -> MediaProbePort:
    """Pick the probe implementation configured by `probe.mode`."""
    cfg = settings or get_settings()
    if cfg.probe.mode == ProbeMode.text:
        return FFmpegTextProbe(runner=runner or FFmpegRunner(settings=cfg))
    return FFprobeAdapter(ffprobe_bin=cfg.probe.ffprobe_bin, timeout_sec=cfg.probe.timeout_sec)

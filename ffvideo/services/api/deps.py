# ffvideo/services/api/deps.py
from __future__ import annotations
from fastapi import Depends

from ffvideo.common.settings import Settings, get_settings
from ffvideo.domain.ports.probe import MediaProbePort
from ffvideo.services.ffmpeg.runner import FFmpegRunner
from ffvideo.services.probe.factory import build_probe
from ffvideo.services.video.transcoder import Transcoder


def get_runner(cfg: Settings = Depends(get_settings)) -> FFmpegRunner:
    return FFmpegRunner(settings=cfg)


def get_media_probe(
    cfg: Settings = Depends(get_settings),
    runner: FFmpegRunner = Depends(get_runner),
) -> MediaProbePort:
    """
    Provide the configured MediaProbePort (ffprobe JSON or ffmpeg text) via DI.
    """
    return build_probe(cfg, runner=runner)


def get_transcoder(
    cfg: Settings = Depends(get_settings),
    runner: FFmpegRunner = Depends(get_runner),
    probe: MediaProbePort = Depends(get_media_probe),
) -> Transcoder:
    return Transcoder(runner, probe=probe, settings=cfg)

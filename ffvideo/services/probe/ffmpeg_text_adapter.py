# ffvideo/services/probe/ffmpeg_text_adapter.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from ffvideo.common.logging import get_logger
from ffvideo.common.probe.ffmpeg_text import filter_info_lines, parse_raw_info
from ffvideo.domain.entities.media_info import MediaInfo
from ffvideo.domain.ports.probe import MediaProbePort
from ffvideo.services.ffmpeg.runner import FFmpegRunner

logger = get_logger(__name__)


class FFmpegTextProbe(MediaProbePort):
    """
    MediaProbePort that scrapes the `ffmpeg -i <file>` banner.
    For ffmpeg builds/environments where ffprobe is unavailable.
    """

    def __init__(self, runner: Optional[FFmpegRunner] = None):
        self.runner = runner or FFmpegRunner()

    def probe(self, path: Path) -> MediaInfo:
        if not Path(path).is_file():
            raise FileNotFoundError(f"File not found: {path}")

        # No output file is given, so ffmpeg always exits non-zero here;
        # only launch errors and timeouts are failures.
        result = self.runner.run(self.runner.command("-i", str(path)), check=False)
        raw = filter_info_lines(result.lines)
        if not all(raw.as_tuple()):
            logger.warning("ffmpeg reported fewer than three stream/duration lines for %s", path)
        return parse_raw_info(raw)

# ffvideo/services/video/video.py
from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Optional, Tuple

from ffvideo.common.logging import get_logger
from ffvideo.domain.entities.media_info import MediaInfo, RawInfo
from ffvideo.domain.ports.probe import MediaProbePort
from ffvideo.services.probe.factory import build_probe

logger = get_logger(__name__)


class Video:
    """
    Read-only view of one media file.

    The file is probed exactly once, on construction; every accessor afterwards
    reads the cached MediaInfo and never touches the tool again. Missing metadata
    shows up as a zero/"unknown" sentinel, never as an exception.
    """

    def __init__(self, path: Path | str, *, probe: Optional[MediaProbePort] = None):
        self.path = Path(path)
        if not self.path.is_file():
            raise FileNotFoundError(f"Video file not found: {self.path}")
        self._info = (probe or build_probe()).probe(self.path)
        logger.debug("probed %s: %s", self.path, self._info)

    def __repr__(self) -> str:
        return f"Video({str(self.path)!r})"

    # ---- file --------------------------------------------------------------
    def open(self) -> BinaryIO:
        """Read-only binary handle over the source; the caller closes it."""
        return self.path.open("rb")

    @property
    def html5_source_type(self) -> str:
        return "video/" + self.path.suffix.lstrip(".").lower()

    # ---- metadata ----------------------------------------------------------
    @property
    def info(self) -> MediaInfo:
        return self._info

    @property
    def raw_info(self) -> Optional[RawInfo]:
        """The scraped banner lines (text probe only)."""
        return self._info.raw_lines

    @property
    def duration(self) -> float:
        return self._info.duration

    @property
    def start_point(self) -> float:
        return self._info.start

    @property
    def video_bitrate(self) -> int:
        return self._info.bitrate

    @property
    def video_codec(self) -> str:
        return self._info.video_codec

    @property
    def resolution(self) -> Tuple[int, int]:
        return self._info.resolution

    @property
    def width(self) -> int:
        return self._info.width

    @property
    def height(self) -> int:
        return self._info.height

    @property
    def fps(self) -> int:
        return self._info.fps

    @property
    def audio_codec(self) -> str:
        return self._info.audio_codec

    @property
    def sample_rate(self) -> int:
        return self._info.sample_rate

    @property
    def audio_bitrate(self) -> int:
        return self._info.audio_bitrate

    @property
    def is_stereo(self) -> bool:
        return self._info.stereo


def open_video(path: Path | str, *, probe: Optional[MediaProbePort] = None) -> Video:
    return Video(path, probe=probe)

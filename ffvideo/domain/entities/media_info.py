# ffvideo/domain/entities/media_info.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class RawInfo:
    """
    The three diagnostic lines `ffmpeg -i` prints that we care about, in order:
    container/duration line, first video stream line, first audio stream line.
    Missing lines are empty strings.
    """
    format_line: str = ""
    video_line: str = ""
    audio_line: str = ""

    @classmethod
    def from_lines(cls, lines: Tuple[str, ...] | list[str]) -> "RawInfo":
        padded = list(lines[:3]) + [""] * (3 - min(len(lines), 3))
        return cls(*padded)

    def as_tuple(self) -> Tuple[str, str, str]:
        return (self.format_line, self.video_line, self.audio_line)


@dataclass(frozen=True)
class MediaInfo:
    """
    Normalized, framework-free metadata of one media file.
    Every field has a zero/unknown sentinel; parsers never raise on missing data.
    Bitrates are kb/s.
    """
    duration: float = 0.0
    start: float = 0.0
    bitrate: int = 0
    video_codec: str = "unknown"
    width: int = 0
    height: int = 0
    fps: int = 0
    audio_codec: str = "unknown"
    sample_rate: int = 0
    audio_bitrate: int = 0
    stereo: bool = False
    container: Optional[str] = None

    # Optional raw payload for debugging
    raw_lines: Optional[RawInfo] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def resolution(self) -> Tuple[int, int]:
        return (self.width, self.height)

# ffvideo/common/probe/ffmpeg_text.py
"""
Metadata scraping for the human-readable banner `ffmpeg -i <file>` prints on stderr.

Only three lines are looked at (see RawInfo); every extractor is a pure function of
one line and falls back to a zero/unknown sentinel when its pattern is absent.
"""
from __future__ import annotations

import re
from typing import Iterable, Tuple

from ffvideo.domain.entities.media_info import MediaInfo, RawInfo

_INFO_LINE = re.compile(r"^\s*(Duration:|Stream).+", re.I)

_DURATION = re.compile(r"Duration:\s+([:.\d]+),", re.I)
_START = re.compile(r"start:\s+([:.\d]+),", re.I)
_BITRATE = re.compile(r"bitrate:\s+(\d+)\s+kb/s", re.I)
_VIDEO_CODEC = re.compile(r"Video:\s+(\w+)(\s+\(.+)?,", re.I)
_RESOLUTION = re.compile(r",\s+([\dx]+)\s*(,|\[SAR)", re.I)
_FPS = re.compile(r",\s+(\d+)\s+fps,", re.I)
_AUDIO_CODEC = re.compile(r"Audio:\s+(\w+)(\s+\(.+)?,", re.I)
_SAMPLE_RATE = re.compile(r",\s+(\d+)\s+Hz,", re.I)
_AUDIO_BITRATE = re.compile(r",\s+(\d+)\s+kb/s", re.I)
_STEREO = re.compile(r",\s+stereo,", re.I)


def filter_info_lines(lines: Iterable[str]) -> RawInfo:
    """Keep the first three "Duration:"/"Stream" lines, in output order."""
    kept = [ln for ln in lines if _INFO_LINE.match(ln)]
    return RawInfo.from_lines(kept[:3])


def parse_duration(line: str) -> float:
    m = _DURATION.search(line)
    if not m:
        return 0.0
    parts = m.group(1).split(":")
    if len(parts) != 3:
        return 0.0
    try:
        return int(parts[0]) * 3600 + int(parts[1]) * 60 + float(parts[2])
    except ValueError:
        return 0.0


def parse_start(line: str) -> float:
    m = _START.search(line)
    try:
        return float(m.group(1)) if m else 0.0
    except ValueError:
        return 0.0


def parse_bitrate(line: str) -> int:
    m = _BITRATE.search(line)
    return int(m.group(1)) if m else 0


def parse_codec(line: str, kind: str = "video") -> str:
    rx = _VIDEO_CODEC if kind == "video" else _AUDIO_CODEC
    m = rx.search(line)
    return m.group(1) if m else "unknown"


def parse_resolution(line: str) -> Tuple[int, int]:
    m = _RESOLUTION.search(line)
    if not m:
        return (0, 0)
    parts = m.group(1).split("x")
    if len(parts) != 2 or not all(parts):
        return (0, 0)
    return (int(parts[0]), int(parts[1]))


def parse_fps(line: str) -> int:
    m = _FPS.search(line)
    return int(m.group(1)) if m else 0


def parse_sample_rate(line: str) -> int:
    m = _SAMPLE_RATE.search(line)
    return int(m.group(1)) if m else 0


def parse_audio_bitrate(line: str) -> int:
    m = _AUDIO_BITRATE.search(line)
    return int(m.group(1)) if m else 0


def parse_stereo(line: str) -> bool:
    return bool(_STEREO.search(line))


def parse_raw_info(raw: RawInfo) -> MediaInfo:
    width, height = parse_resolution(raw.video_line)
    return MediaInfo(
        duration=parse_duration(raw.format_line),
        start=parse_start(raw.format_line),
        bitrate=parse_bitrate(raw.format_line),
        video_codec=parse_codec(raw.video_line, "video"),
        width=width,
        height=height,
        fps=parse_fps(raw.video_line),
        audio_codec=parse_codec(raw.audio_line, "audio"),
        sample_rate=parse_sample_rate(raw.audio_line),
        audio_bitrate=parse_audio_bitrate(raw.audio_line),
        stereo=parse_stereo(raw.audio_line),
        raw_lines=raw,
    )

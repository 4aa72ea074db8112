# ffvideo/common/probe/ffprobe_helpers.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ffvideo.domain.entities.media_info import MediaInfo


def build_ffprobe_cmd(
    input_path: str | Path,
    ffprobe_bin: str = "ffprobe",
    extra_args: Iterable[str] | None = None,
) -> List[str]:
    """
    Build a robust ffprobe command that emits JSON we can parse consistently.
    """
    if isinstance(input_path, Path):
        input_path = str(input_path)
    base = [
        ffprobe_bin,
        "-v", "error",
        "-show_streams",
        "-show_format",
        "-print_format", "json",
        "--",  # Stop option parsing in case of weird filenames
        input_path,
    ]
    if extra_args:
        # Insert before the "--" separator so they are still read as options
        base = base[:-2] + list(extra_args) + base[-2:]
    return base


def _maybe_int(x) -> Optional[int]:
    try:
        return int(float(x))
    except (TypeError, ValueError):
        return None


def _maybe_float(x) -> Optional[float]:
    try:
        return float(x)
    except (TypeError, ValueError):
        return None


def _fps_from_fraction(fr: str | None) -> Optional[float]:
    # ffprobe reports rates as "num/den"; "0/0" means unknown
    if not fr or "/" not in fr:
        return _maybe_float(fr)
    num, den = fr.split("/", 1)
    n, d = _maybe_float(num), _maybe_float(den)
    if n is None or not d:
        return None
    return n / d


def _kbps(x) -> int:
    bps = _maybe_int(x)
    return bps // 1000 if bps else 0


def _is_stereo(a_stream: Dict[str, Any]) -> bool:
    layout = a_stream.get("channel_layout")
    if layout:
        return str(layout).lower() == "stereo"
    return _maybe_int(a_stream.get("channels")) == 2


def parse_ffprobe(data: Dict[str, Any]) -> MediaInfo:
    """
    Map ffprobe JSON onto MediaInfo using the same sentinels as the text scraper.
    Safe to call in unit tests with fixture JSON.
    """
    fmt = (data or {}).get("format", {}) or {}
    streams = (data or {}).get("streams", []) or []

    v_stream = next((s for s in streams if s.get("codec_type") == "video"), None) or {}
    a_stream = next((s for s in streams if s.get("codec_type") == "audio"), None) or {}

    fps = _fps_from_fraction(v_stream.get("avg_frame_rate")) or _fps_from_fraction(v_stream.get("r_frame_rate"))

    return MediaInfo(
        duration=_maybe_float(fmt.get("duration")) or 0.0,
        start=_maybe_float(fmt.get("start_time")) or 0.0,
        bitrate=_kbps(fmt.get("bit_rate")),
        video_codec=v_stream.get("codec_name") or "unknown",
        width=_maybe_int(v_stream.get("width")) or 0,
        height=_maybe_int(v_stream.get("height")) or 0,
        fps=int(round(fps)) if fps else 0,
        audio_codec=a_stream.get("codec_name") or "unknown",
        sample_rate=_maybe_int(a_stream.get("sample_rate")) or 0,
        audio_bitrate=_kbps(a_stream.get("bit_rate")),
        stereo=_is_stereo(a_stream) if a_stream else False,
        container=fmt.get("format_name"),
        raw=dict(data or {}),
    )

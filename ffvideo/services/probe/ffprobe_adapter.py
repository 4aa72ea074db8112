# ffvideo/services/probe/ffprobe_adapter.py
from __future__ import annotations

import json
import shlex
import subprocess
from pathlib import Path
from typing import Optional

from ffvideo.common.settings import get_settings
from ffvideo.common.logging import get_logger
from ffvideo.common.probe.ffprobe_helpers import build_ffprobe_cmd, parse_ffprobe
from ffvideo.domain.entities.media_info import MediaInfo
from ffvideo.domain.ports.probe import MediaProbePort
from ffvideo.services.ffmpeg.errors import ToolInvocationError
from ffvideo.services.ffmpeg.runner import resolve_binary

logger = get_logger(__name__)


class FFprobeAdapter(MediaProbePort):
    """
    MediaProbePort backed by ffprobe's JSON report (-show_format -show_streams).
    """

    def __init__(self, ffprobe_bin: Optional[str] = None, timeout_sec: Optional[int] = None):
        cfg = get_settings()
        self.ffprobe_bin = resolve_binary(ffprobe_bin or cfg.probe.ffprobe_bin)
        self.timeout_sec = int(timeout_sec or cfg.probe.timeout_sec)

    # ---- Port API -------------------------------------------------------------
    def probe(self, path: Path) -> MediaInfo:
        if not path:
            raise ValueError("No path provided to probe().")
        if not Path(path).is_file():
            raise FileNotFoundError(f"File not found: {path}")

        cmd = build_ffprobe_cmd(path, ffprobe_bin=self.ffprobe_bin)
        logger.debug("ffprobe cmd: %s", shlex.join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout_sec,
                check=False,  # we handle rc manually to attach stderr
            )
        except subprocess.TimeoutExpired as e:
            raise ToolInvocationError(f"ffprobe timed out after {self.timeout_sec}s", cmd=cmd) from e
        except OSError as e:
            raise ToolInvocationError("Failed to execute ffprobe (OS error).", cmd=cmd, output=str(e)) from e

        if proc.returncode != 0:
            raise ToolInvocationError(
                f"ffprobe returned non-zero exit code -=[{shlex.join(cmd)}]=-",
                cmd=cmd,
                rc=proc.returncode,
                output=proc.stderr,
            )

        try:
            data = json.loads(proc.stdout or "{}")
        except json.JSONDecodeError as e:
            raise ToolInvocationError("ffprobe produced invalid JSON", cmd=cmd, output=proc.stdout) from e

        return parse_ffprobe(data)

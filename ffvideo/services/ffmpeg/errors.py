# ffvideo/services/ffmpeg/errors.py
from __future__ import annotations

import shlex
from typing import Optional, Sequence


class FFmpegError(RuntimeError):
    """Adapter-level error for ffmpeg/ffprobe invocations."""

    def __init__(
        self,
        message: str,
        *,
        cmd: Optional[Sequence[str]] = None,
        rc: Optional[int] = None,
        output: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cmd = list(cmd) if cmd else None
        self.rc = rc
        self.output = output

    @property
    def command_line(self) -> str:
        return shlex.join(self.cmd) if self.cmd else ""


class ToolInvocationError(FFmpegError):
    """The tool could not be run, timed out, or reported failure."""


class ToolNotFoundError(ToolInvocationError):
    """The configured binary is not on PATH."""


class UnsupportedFormatError(ValueError):
    """Requested container is outside the format-only encode allow-list."""

    def __init__(self, fmt: str) -> None:
        super().__init__(f"Unknown format '{fmt}' provided")
        self.format = fmt

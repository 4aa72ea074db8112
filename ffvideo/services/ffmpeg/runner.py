# ffvideo/services/ffmpeg/runner.py
from __future__ import annotations

import shlex
import shutil
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ffvideo.common.logging import get_logger
from ffvideo.common.settings import Settings, get_settings
from ffvideo.services.ffmpeg.errors import ToolInvocationError, ToolNotFoundError

logger = get_logger(__name__)


def resolve_binary(candidate: str) -> str:
    """
    Bare names are looked up on PATH (for nicer errors); explicit paths are used as given.
    """
    if "/" in candidate or "\\" in candidate:
        return candidate
    resolved = shutil.which(candidate)
    if not resolved:
        raise ToolNotFoundError(f"{candidate} not found on PATH; install ffmpeg or configure its path.")
    return resolved


@dataclass(frozen=True)
class ToolResult:
    cmd: List[str]
    returncode: int
    output: str = ""
    lines: List[str] = field(default_factory=list)


class FFmpegRunner:
    """
    Runs ffmpeg-family binaries with an argv list (never through a shell) and
    captures stdout+stderr as one text stream.
    Safe for use from worker threads (no shared mutable state).
    """

    def __init__(
        self,
        ffmpeg_bin: Optional[str] = None,
        timeout_sec: Optional[int] = None,
        *,
        legacy_exit_status: Optional[bool] = None,
        settings: Optional[Settings] = None,
    ):
        cfg = settings or get_settings()
        self.ffmpeg_bin = resolve_binary(ffmpeg_bin or cfg.ffmpeg.bin)
        self.timeout_sec = int(timeout_sec or cfg.ffmpeg.timeout_sec)
        self.legacy_exit_status = cfg.ffmpeg.legacy_exit_status if legacy_exit_status is None else legacy_exit_status
        self.hide_banner = cfg.ffmpeg.hide_banner

    def command(self, *args: str) -> List[str]:
        cmd = [self.ffmpeg_bin]
        if self.hide_banner:
            cmd.append("-hide_banner")
        return cmd + [str(a) for a in args]

    def is_failure(self, returncode: int) -> bool:
        if self.legacy_exit_status:
            return returncode == 1
        return returncode != 0

    def run(self, cmd: Sequence[str], *, timeout: Optional[float] = None, check: bool = True) -> ToolResult:
        """
        Execute `cmd` and return its combined output.
        With check=True a failing exit status raises ToolInvocationError carrying the
        full command line; with check=False only launch errors and timeouts raise.
        """
        cmd = [str(c) for c in cmd]
        limit = timeout if timeout is not None else self.timeout_sec
        logger.debug("ffmpeg cmd: %s", shlex.join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                timeout=limit,
                check=False,  # we handle rc manually to attach output
            )
        except subprocess.TimeoutExpired as e:
            raise ToolInvocationError(
                f"{cmd[0]} timed out after {limit}s -=[{shlex.join(cmd)}]=-", cmd=cmd
            ) from e
        except OSError as e:
            raise ToolInvocationError(
                f"Failed to execute {cmd[0]} (OS error: {e}) -=[{shlex.join(cmd)}]=-", cmd=cmd
            ) from e

        output = proc.stdout or ""
        result = ToolResult(cmd=cmd, returncode=proc.returncode, output=output, lines=output.splitlines())
        if check and self.is_failure(proc.returncode):
            logger.warning("ffmpeg exited with %s: %s", proc.returncode, shlex.join(cmd))
            raise ToolInvocationError(
                f"{cmd[0]} returned exit code {proc.returncode} -=[{shlex.join(cmd)}]=-",
                cmd=cmd,
                rc=proc.returncode,
                output=output,
            )
        return result

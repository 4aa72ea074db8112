# ffvideo/services/video/transcoder.py
from __future__ import annotations

import shlex
from decimal import Decimal
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from ffvideo.common.logging import get_logger
from ffvideo.common.settings import Settings, get_settings
from ffvideo.common.strings.splitters import options_to_args
from ffvideo.domain.enums import CacheKey
from ffvideo.domain.policies.output_paths import persistent_output_path, temp_output_path
from ffvideo.domain.ports.hashing import HashingPort
from ffvideo.domain.ports.images import ImageOpsPort
from ffvideo.domain.ports.probe import MediaProbePort
from ffvideo.services.ffmpeg.errors import ToolInvocationError, UnsupportedFormatError
from ffvideo.services.ffmpeg.runner import FFmpegRunner
from ffvideo.services.hashing.simple_hashing import SimpleHashing
from ffvideo.services.images.pillow_image import PillowImageOps
from ffvideo.services.probe.factory import build_probe
from ffvideo.services.video.video import Video, open_video

logger = get_logger(__name__)

ThumbCallback = Callable[[bytes], bytes]


def _seconds(offset: float) -> str:
    """Plain decimal seconds for ffmpeg's time parser: no exponent, no rounding."""
    s = format(Decimal(repr(float(offset) + 0.0)), "f")
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


class Transcoder:
    """
    Operations that produce new files from a Video: re-encode, still frame, thumbnail.

    Each call is one blocking ffmpeg run. Results are new, independent values:
    a freshly probed Video for encodes, raw bytes or a caller-owned Path for frames.
    Scratch files are removed on every failure path.
    """

    def __init__(
        self,
        runner: Optional[FFmpegRunner] = None,
        *,
        probe: Optional[MediaProbePort] = None,
        images: Optional[ImageOpsPort] = None,
        hasher: Optional[HashingPort] = None,
        settings: Optional[Settings] = None,
    ):
        self.cfg = settings or get_settings()
        self.runner = runner or FFmpegRunner(settings=self.cfg)
        self.probe = probe or build_probe(self.cfg, runner=self.runner)
        self.images = images or PillowImageOps()
        self.hasher = hasher or SimpleHashing()

    # ---- re-encode ---------------------------------------------------------
    def encode(
        self,
        video: Video,
        *,
        audio_codec: str,
        video_codec: str,
        extension: str,
        persistent_dir: Optional[Path | str] = None,
        extra_options: str | Sequence[str] | None = None,
        strict: bool = False,
        timeout: Optional[float] = None,
    ) -> Video:
        """Re-encode into `extension` with explicit codecs (`-c:v`/`-c:a`)."""
        ext = extension.strip().lstrip(".")
        if not ext:
            raise UnsupportedFormatError(extension)
        dst, cached = self._destination(video, ext, persistent_dir, "video_format_implicit_tmpfile_")
        if cached:
            return self._open(dst)

        args: List[str] = ["-y", "-i", str(video.path)]
        if strict:
            args += ["-strict", "experimental"]
        args += options_to_args(extra_options)
        args += ["-c:v", video_codec.lower(), "-c:a", audio_codec.lower(), str(dst)]

        self._run_into(
            self.runner.command(*args),
            dst,
            f"Unable to convert video into '.{ext}' using {audio_codec}:{video_codec}",
            timeout,
        )
        return self._open(dst)

    def encode_format(
        self,
        video: Video,
        fmt: str,
        *,
        persistent_dir: Optional[Path | str] = None,
        timeout: Optional[float] = None,
    ) -> Video:
        """Re-encode into a known container, letting ffmpeg pick its default codecs."""
        ext = str(fmt).lower().lstrip(".")
        if ext not in self.cfg.encode_formats:
            raise UnsupportedFormatError(fmt)

        dst, cached = self._destination(video, ext, persistent_dir, "video_format_tmpfile_")
        if cached:
            return self._open(dst)

        self._run_into(
            self.runner.command("-y", "-i", str(video.path), str(dst)),
            dst,
            f"Unable to convert video into '{ext}'",
            timeout,
        )
        return self._open(dst)

    # ---- frames ------------------------------------------------------------
    def screenshot(
        self,
        video: Video,
        offset: Optional[float] = None,
        *,
        return_file: bool = False,
        timeout: Optional[float] = None,
    ) -> bytes | Path:
        """
        Grab one frame at `offset` seconds; negative offsets count back from the end.
        Returns the image bytes (scratch file removed), or with return_file=True the
        scratch file itself, which the caller then owns.
        """
        offset = self.cfg.screenshot_offset if offset is None else float(offset)
        tmp = temp_output_path("video_screenshot_", self.cfg.screenshot_format, self.cfg.temp_dir)
        at = _seconds(offset)
        seek = ["-sseof", at] if offset < 0 else ["-ss", at]
        cmd = self.runner.command(
            *seek, "-i", str(video.path), "-frames:v", "1", "-an", "-f", "image2", "-y", str(tmp)
        )

        keep = False
        try:
            self._run_into(cmd, tmp, f"Unable to take a screenshot at {at}s", timeout)
            if tmp.stat().st_size == 0:
                raise ToolInvocationError(
                    f"No frame decoded at {at}s -=[{shlex.join(cmd)}]=-", cmd=cmd
                )
            if return_file:
                keep = True
                return tmp
            return tmp.read_bytes()
        finally:
            if not keep:
                tmp.unlink(missing_ok=True)

    def thumbnail(
        self,
        video: Video,
        prop: Optional[int] = None,
        callback: Optional[ThumbCallback] = None,
        *,
        offset: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        """
        Screenshot shrunk to fit a `prop` x `prop` square (aspect kept; frames that
        already fit are left alone), optionally passed through `callback`.
        """
        prop = int(prop or self.cfg.thumb_size)
        shot = self.screenshot(video, offset, return_file=True, timeout=timeout)
        try:
            with self.images.open(shot) as img:
                width, height = img.geometry
                if width > prop or height > prop:
                    img.fit_within(prop)
                content = img.to_bytes()
                if callback is not None:
                    content = callback(content)
            return content
        finally:
            shot.unlink(missing_ok=True)

    # ---- internals ---------------------------------------------------------
    def _open(self, path: Path) -> Video:
        return open_video(path, probe=self.probe)

    def _cache_key(self, video: Video) -> str:
        if self.cfg.cache_key == CacheKey.content:
            return self.hasher.sha256_file(video.path)
        return self.hasher.md5_text(str(video.path))

    def _destination(
        self, video: Video, ext: str, persistent_dir: Optional[Path | str], prefix: str
    ) -> Tuple[Path, bool]:
        """Returns (destination, already_encoded)."""
        if persistent_dir is None:
            return temp_output_path(prefix, ext, self.cfg.temp_dir), False

        Path(persistent_dir).mkdir(parents=True, exist_ok=True)
        dst = persistent_output_path(persistent_dir, self._cache_key(video), video.path, ext)
        if dst.is_file():
            logger.info("reusing encoded %s for %s", dst, video.path)
            return dst, True
        return dst, False

    def _run_into(self, cmd: List[str], dst: Path, failure: str, timeout: Optional[float]) -> None:
        try:
            self.runner.run(cmd, timeout=timeout)
        except ToolInvocationError as e:
            dst.unlink(missing_ok=True)
            logger.warning("%s (rc=%s)", failure, e.rc)
            raise ToolInvocationError(
                f"{failure} -=[{shlex.join(cmd)}]=-", cmd=cmd, rc=e.rc, output=e.output
            ) from e

# ffvideo/services/api/routers/videos.py
from __future__ import annotations

from http import HTTPStatus
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from ffvideo.common.logging import get_logger
from ffvideo.common.path.safe import safe_join
from ffvideo.common.settings import Settings, get_settings
from ffvideo.domain.ports.probe import MediaProbePort
from ffvideo.services.api.deps import get_media_probe, get_transcoder
from ffvideo.services.ffmpeg.errors import ToolInvocationError, UnsupportedFormatError
from ffvideo.services.schemas.media import EncodeRequest, MediaInfoRead
from ffvideo.services.video.transcoder import Transcoder
from ffvideo.services.video.video import Video, open_video

logger = get_logger(__name__)

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/videos", tags=["videos"])

_IMAGE_MIME = {"png": "image/png", "jpg": "image/jpeg", "jpeg": "image/jpeg", "bmp": "image/bmp"}


def _load(rel_path: str, settings: Settings, probe: MediaProbePort) -> Video:
    """Resolve `rel_path` under media_root and probe it, mapping failures to HTTP errors."""
    try:
        path = safe_join(settings.media_root, rel_path)
    except ValueError as e:
        raise HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail="Path escapes media root") from e
    try:
        return open_video(path, probe=probe)
    except FileNotFoundError as e:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Video not found") from e
    except ToolInvocationError as e:
        logger.exception("probe failed for %s", path)
        raise HTTPException(status_code=HTTPStatus.BAD_GATEWAY, detail=e.message) from e


def _read(video: Video, settings: Settings) -> MediaInfoRead:
    try:
        rel = video.path.relative_to(settings.media_root.resolve())
    except ValueError:
        rel = video.path
    return MediaInfoRead.from_info(str(rel), video.html5_source_type, video.info)


@router.get("/info", response_model=MediaInfoRead)
def video_info(
    path: str = Query(..., description="Path relative to the media root"),
    settings: Settings = Depends(get_settings),
    probe: MediaProbePort = Depends(get_media_probe),
) -> MediaInfoRead:
    return _read(_load(path, settings, probe), settings)


@router.get("/screenshot")
def video_screenshot(
    path: str = Query(...),
    offset: Optional[float] = Query(None, description="Seconds; negative counts back from the end"),
    settings: Settings = Depends(get_settings),
    transcoder: Transcoder = Depends(get_transcoder),
) -> Response:
    video = _load(path, settings, transcoder.probe)
    try:
        content = transcoder.screenshot(video, offset)
    except ToolInvocationError as e:
        raise HTTPException(status_code=HTTPStatus.BAD_GATEWAY, detail=e.message) from e
    return Response(content=content, media_type=_IMAGE_MIME.get(settings.screenshot_format, "image/png"))


@router.get("/thumbnail")
def video_thumbnail(
    path: str = Query(...),
    size: Optional[int] = Query(None, ge=16, le=4096),
    settings: Settings = Depends(get_settings),
    transcoder: Transcoder = Depends(get_transcoder),
) -> Response:
    video = _load(path, settings, transcoder.probe)
    try:
        content = transcoder.thumbnail(video, size)
    except ToolInvocationError as e:
        raise HTTPException(status_code=HTTPStatus.BAD_GATEWAY, detail=e.message) from e
    return Response(content=content, media_type=_IMAGE_MIME.get(settings.screenshot_format, "image/png"))


@router.post("/encode", response_model=MediaInfoRead)
def video_encode(
    req: EncodeRequest,
    settings: Settings = Depends(get_settings),
    transcoder: Transcoder = Depends(get_transcoder),
) -> MediaInfoRead | Response:
    """
    persist=true keeps the encode under the persistent dir and returns its metadata;
    otherwise the encoded file itself is the response body and the scratch copy is removed.
    """
    video = _load(req.path, settings, transcoder.probe)
    persistent_dir: Optional[Path] = None
    if req.persist:
        persistent_dir = settings.persistent_dir or (settings.media_root / ".encoded")
    try:
        out = transcoder.encode_format(video, req.format, persistent_dir=persistent_dir)
    except UnsupportedFormatError as e:
        raise HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=str(e)) from e
    except ToolInvocationError as e:
        raise HTTPException(status_code=HTTPStatus.BAD_GATEWAY, detail=e.message) from e

    if persistent_dir is not None:
        return _read(out, settings)
    try:
        with out.open() as fh:
            content = fh.read()
    finally:
        out.path.unlink(missing_ok=True)
    return Response(content=content, media_type=out.html5_source_type)

# ffvideo/services/schemas/media.py
from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from ffvideo.domain.entities.media_info import MediaInfo


class MediaInfoRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    path: str
    mime_type: str = Field(..., examples=["video/mp4"])
    duration: float
    start: float
    bitrate: int = Field(..., description="Container bitrate, kb/s")
    video_codec: str
    width: int
    height: int
    fps: int
    audio_codec: str
    sample_rate: int
    audio_bitrate: int = Field(..., description="kb/s")
    stereo: bool
    container: Optional[str] = None

    @classmethod
    def from_info(cls, path: str, mime_type: str, info: MediaInfo) -> "MediaInfoRead":
        return cls(
            path=path,
            mime_type=mime_type,
            duration=info.duration,
            start=info.start,
            bitrate=info.bitrate,
            video_codec=info.video_codec,
            width=info.width,
            height=info.height,
            fps=info.fps,
            audio_codec=info.audio_codec,
            sample_rate=info.sample_rate,
            audio_bitrate=info.audio_bitrate,
            stereo=info.stereo,
            container=info.container,
        )


class EncodeRequest(BaseModel):
    path: str = Field(..., examples=["clips/intro.avi"])
    format: str = Field(..., examples=["mp4"])
    persist: bool = Field(False, description="Write into the persistent dir and reuse earlier results")

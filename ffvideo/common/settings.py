# ffvideo/common/settings.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Optional
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from ffvideo.common.strings.splitters import csv_to_list
from ffvideo.domain.enums import CacheKey, EncodeFormat, ImageFormat, ProbeMode

# Call-site defaults; Settings exposes both for overriding.
SCREENSHOT_OFFSET = -4  # seconds before the end of the stream
THUMB_PROP = 200  # thumbnail bounding square, px


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class APIConfig(BaseModel):
    prefix: str = "/api"

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "OPTIONS"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False


class FFmpegConfig(BaseModel):
    bin: str = "ffmpeg"  # FFMPEG__BIN
    timeout_sec: int = Field(600, ge=1, description="Upper bound for a single ffmpeg invocation")
    hide_banner: bool = True
    # Only exit status 1 counts as failure when set (ffmpeg wrappers of old did this).
    legacy_exit_status: bool = False

    @field_validator("hide_banner", "legacy_exit_status", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v)


class ProbeConfig(BaseModel):
    mode: ProbeMode = ProbeMode.json
    ffprobe_bin: str = "ffprobe"  # PROBE__FFPROBE_BIN
    timeout_sec: int = Field(30, ge=1)


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "ffvideo"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # -------- Paths --------
    media_root: Path = Path("./media")
    temp_dir: Optional[Path] = Field(default=None, description="Scratch dir for outputs; system temp if unset")
    persistent_dir: Optional[Path] = Field(default=None, description="Default dir for reusable encodes")

    # -------- Sub-configs --------
    ffmpeg: FFmpegConfig = FFmpegConfig()
    probe: ProbeConfig = ProbeConfig()
    api: APIConfig = APIConfig()

    # -------- Screenshots / thumbnails --------
    screenshot_offset: float = Field(SCREENSHOT_OFFSET, description="Seconds; negative counts back from the end")
    screenshot_format: ImageFormat = ImageFormat.PNG
    thumb_size: int = Field(THUMB_PROP, ge=16, le=4096, description="Bounding square for thumbnails")

    # -------- Encoding --------
    cache_key: CacheKey = CacheKey.path
    encode_formats: Annotated[List[str], NoDecode] = Field(default_factory=lambda: [f.value for f in EncodeFormat])

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("encode_formats", mode="before")
    @classmethod
    def _split_formats(cls, v):
        # may narrow the allow-list, never widen it
        out = [s.lower().lstrip(".") for s in csv_to_list(v)]
        unknown = [s for s in out if s not in {f.value for f in EncodeFormat}]
        if unknown:
            raise ValueError(f"unsupported encode formats: {', '.join(unknown)}")
        return out


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from ffvideo.common.settings import get_settings
        cfg = get_settings()
    """
    s = Settings()  # pydantic_settings will read from .env automatically
    if s.app_env in ("development", "test"):
        for p in (s.temp_dir, s.persistent_dir):
            if p is not None:
                p.mkdir(parents=True, exist_ok=True)
    return s

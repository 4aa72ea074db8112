from ffvideo.domain.enums.file_format import EncodeFormat, ImageFormat
from ffvideo.domain.enums.probe_mode import ProbeMode
from ffvideo.domain.enums.cache_key import CacheKey
__all__ = [
    "EncodeFormat",
    "ImageFormat",
    "ProbeMode",
    "CacheKey",
]

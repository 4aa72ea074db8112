from ffvideo.services.schemas.media import (
    MediaInfoRead,
    EncodeRequest,
)
__all__ = [
    "MediaInfoRead",
    "EncodeRequest",
]

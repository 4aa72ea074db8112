# ffvideo/domain/enums/file_format.py
from __future__ import annotations

from enum import StrEnum


class EncodeFormat(StrEnum):
    """Containers ffmpeg can both read and write; the format-only encode allow-list."""
    MOV = "mov"
    WEBM = "webm"
    MPG = "mpg"
    MP4 = "mp4"
    AVI = "avi"
    FLAC = "flac"
    FLV = "flv"
    MPEG = "mpeg"
    OGV = "ogv"
    SWF = "swf"
    WMV = "wmv"
    MKV = "mkv"
    THREE_GP = "3gp"
    THREE_G2 = "3g2"
    AMC = "amc"
    H264 = "h264"
    M2P = "m2p"
    M4V = "m4v"
    MOI = "moi"
    MTS = "mts"
    VOB = "vob"
    XVID = "xvid"


class ImageFormat(StrEnum):
    PNG = "png"
    JPG = "jpg"
    JPEG = "jpeg"
    BMP = "bmp"

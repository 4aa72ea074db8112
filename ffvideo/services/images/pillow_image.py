# ffvideo/services/images/pillow_image.py
from __future__ import annotations

import io
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Tuple

from PIL import Image

from ffvideo.domain.ports.images import ImageHandle, ImageOpsPort


class PillowImage(ImageHandle):
    """Thin wrapper over a PIL image: geometry, fit-within resize, serialization."""

    def __init__(self, img: Image.Image, fmt: Optional[str] = None):
        self.img = img
        # keep the source container when re-encoding (PNG screenshots stay PNG)
        self.format = (fmt or img.format or "PNG").upper()

    @property
    def geometry(self) -> Tuple[int, int]:
        return self.img.size

    def fit_within(self, size: int) -> None:
        # Image.thumbnail keeps aspect ratio and only ever shrinks
        self.img.thumbnail((int(size), int(size)), Image.Resampling.LANCZOS)

    def to_bytes(self) -> bytes:
        img = self.img
        if self.format == "JPEG" and img.mode not in ("RGB", "L"):
            img = img.convert("RGB")
        buf = io.BytesIO()
        img.save(buf, format=self.format)
        return buf.getvalue()


class PillowImageOps(ImageOpsPort):
    @contextmanager
    def open(self, path: Path) -> Iterator[PillowImage]:
        img = Image.open(path)
        try:
            img.load()
            yield PillowImage(img)
        finally:
            img.close()

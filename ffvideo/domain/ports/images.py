from __future__ import annotations

from pathlib import Path
from typing import ContextManager, Protocol, Tuple


class ImageHandle(Protocol):
    @property
    def geometry(self) -> Tuple[int, int]: ...    # (width, height)

    def fit_within(self, size: int) -> None: ...  # keeps aspect ratio

    def to_bytes(self) -> bytes: ...


class ImageOpsPort(Protocol):
    def open(self, path: Path) -> ContextManager[ImageHandle]: ...

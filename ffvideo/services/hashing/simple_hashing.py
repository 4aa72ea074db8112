from __future__ import annotations

import hashlib
from pathlib import Path

from ffvideo.domain.ports.hashing import HashingPort


class SimpleHashing(HashingPort):
    """
    Cache keys for reusable encodes: md5 of the source path string, or a streaming
    SHA-256 of the file contents when the key must follow the bytes.
    """

    def md5_text(self, text: str) -> str:
        return hashlib.md5(text.encode("utf-8")).hexdigest()

    def sha256_file(self, path: Path, chunk_size: int = 1024 * 1024) -> str:
        if not isinstance(path, Path):
            path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"File to hash not found: {path}")

        h = hashlib.sha256()
        # Buffered read in fixed chunks
        with path.open("rb") as f:
            for chunk in iter(lambda: f.read(chunk_size), b""):
                h.update(chunk)
        return h.hexdigest()

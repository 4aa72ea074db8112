# ffvideo/common/path/safe.py
from __future__ import annotations

from pathlib import Path


def resolve_root(root: Path | str) -> Path:
    """Resolve a media/output root directory."""
    return Path(root).expanduser().resolve()


def safe_join(root: Path | str, rel: Path | str) -> Path:
    """
    Join 'root' and a relative path, ensuring the result stays inside 'root'.
    Raises ValueError if the joined path escapes the root.
    """
    r = resolve_root(root)
    p = (r / str(rel)).resolve()
    if not p.is_relative_to(r):
        raise ValueError(f"path {p} escapes root {r}")
    return p

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Optional

from ffvideo.common.path.safe import safe_join


def replace_extension(name: str, ext: str) -> str:
    """
    Swap the trailing extension of a basename (case-insensitive), e.g.
    ("Clip.AVI", "mp4") -> "Clip.mp4". Names without an extension get one appended.
    """
    ext = ext.lstrip(".")
    p = Path(name)
    if p.suffix:
        return p.with_suffix(f".{ext}").name
    return f"{name}.{ext}"


def persistent_output_path(root: Path | str, key: str, source: Path, ext: str) -> Path:
    """
    Domain policy for reusable encodes: <root>/<key><source name with new ext>.
    The same (key, source name, ext) always maps to the same file.
    """
    return safe_join(root, f"{key}{replace_extension(Path(source).name, ext)}")


def temp_output_path(prefix: str, ext: str, directory: Optional[Path] = None) -> Path:
    """Create a unique, empty scratch file and return its path. The caller owns it."""
    if directory is not None:
        Path(directory).mkdir(parents=True, exist_ok=True)
    suffix = f".{ext.lstrip('.')}" if ext else ""
    with tempfile.NamedTemporaryFile("wb", prefix=prefix, suffix=suffix, delete=False,
                                     dir=str(directory) if directory else None) as tf:
        return Path(tf.name)

from __future__ import annotations
from enum import StrEnum

class CacheKey(StrEnum):
    path = "path"
    content = "content"

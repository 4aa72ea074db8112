from __future__ import annotations
from enum import StrEnum

class ProbeMode(StrEnum):
    json = "json"
    text = "text"

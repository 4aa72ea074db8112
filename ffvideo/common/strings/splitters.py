import shlex
from typing import List, Sequence


def csv_to_list(v: str | Sequence[str] | None) -> List[str]:
    if v is None:
        return []
    if isinstance(v, (list, tuple)):
        return [str(s).strip() for s in v if s and str(s).strip()]
    return [s.strip() for s in str(v).split(",") if s.strip()]


def options_to_args(v: str | Sequence[str] | None) -> List[str]:
    """
    Normalize extra command-line options into an argv fragment.
    Strings are split shell-style ("-preset fast -crf 23"), sequences are copied.
    """
    if v is None:
        return []
    if isinstance(v, str):
        return shlex.split(v)
    return [str(a) for a in v if str(a) != ""]

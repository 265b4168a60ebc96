"""Conversions between seconds and ``mm:ss`` text."""

import re
from typing import Optional

_TIME_RE = re.compile(r"(\d{1,2}):(\d{2})", re.ASCII)


def format_time(seconds: int) -> str:
    minutes, remaining = divmod(int(seconds), 60)
    return f"{minutes:02d}:{remaining:02d}"


def parse_time(text: str) -> Optional[int]:
    """Parse strict ``m:ss`` / ``mm:ss``; anything else gives ``None``."""
    match = _TIME_RE.fullmatch(text)
    if not match:
        return None
    minutes, seconds = int(match.group(1)), int(match.group(2))
    if seconds >= 60:
        return None
    return minutes * 60 + seconds

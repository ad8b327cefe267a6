"""Timestamp parsing and formatting."""

import re

_LEADING_INT = re.compile(r"[-+]?\d+")


def _to_int(field: str) -> int:
    """Lenient integer parse: optional sign and leading digits, 0 when there are none."""
    match = _LEADING_INT.match(field.strip())
    return int(match.group(0)) if match else 0


def parse_timestamp(token: str) -> int:
    """Convert MM:SS or HH:MM:SS to seconds. Any other shape gives 0."""
    parts = token.split(":")
    if len(parts) == 2:
        return _to_int(parts[0]) * 60 + _to_int(parts[1])
    if len(parts) == 3:
        return _to_int(parts[0]) * 3600 + _to_int(parts[1]) * 60 + _to_int(parts[2])
    return 0


def format_time(seconds: float) -> str:
    """Format seconds to HH:MM:SS or MM:SS."""
    total = int(max(seconds, 0))
    h = total // 3600
    m = (total % 3600) // 60
    s = total % 60
    if h > 0:
        return f"{h:02d}:{m:02d}:{s:02d}"
    return f"{m:02d}:{s:02d}"

"""Parsing of human-friendly loop intervals ("30m", "1h30m", "90")."""

import math
import re

_UNITS = {"s": 1, "m": 60, "h": 3600, "d": 86400}
_PART = re.compile(r"(\d+(?:\.\d+)?)([smhd])")


def parse_interval(value: str) -> float:
    """Convert an interval string to seconds.

    Bare numbers are seconds. ``"0"`` (or an empty string) means run once.
    """
    text = (value or "").strip().lower()
    if not text:
        return 0.0

    try:
        seconds = float(text)
    except ValueError:
        pass
    else:
        if seconds < 0 or not math.isfinite(seconds):
            raise ValueError(f"Interval must be a non-negative number: {value!r}")
        return seconds

    pos = 0
    total = 0.0
    for match in _PART.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _UNITS[match.group(2)]
        pos = match.end()

    if pos != len(text):
        raise ValueError(f"Invalid interval: {value!r} (use e.g. 90, 30m, 1h30m)")
    return total

"""Score extraction from free-form model responses."""

import re

from ..models import SCORE_NA

_LABELLED_SCORE = re.compile(r"(?:score|rating):\s*(\d+)", re.IGNORECASE | re.ASCII)
_ANY_NUMBER = re.compile(r"(\d+)", re.ASCII)


def extract_score(text: str) -> str:
    """
    Pull a numeric score out of a model response.

    Prefers a ``Score: N`` or ``Rating: N`` label, falls back to the first
    run of digits anywhere in the text, and returns ``"N/A"`` otherwise.
    The fallback can pick up an unrelated number such as a CPU name.
    """
    match = _LABELLED_SCORE.search(text or "")
    if match:
        return match.group(1)
    match = _ANY_NUMBER.search(text or "")
    if match:
        return match.group(1)
    return SCORE_NA


def parse_score(value: str) -> int:
    """Numeric value of a stored score; anything unparseable is 0."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0

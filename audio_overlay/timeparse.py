"""Time expression parsing.

Accepted forms are ``HH:MM:SS.ms``, ``MM:SS.ms``, ``SS.ms`` and bare seconds.
Every colon-separated segment may carry a fractional part.
"""

import re
from decimal import Decimal

from .errors import InvalidTimeFormat
from .models import TimeSpec

_NUMBER_RE = re.compile(r"^(?:\d+(?:\.\d*)?|\.\d+)$")

# weight of each segment, counted from the right
_SEGMENT_WEIGHTS = (Decimal(1), Decimal(60), Decimal(3600))


def parse_time(text: str) -> TimeSpec:
    """Parse a time expression into a :class:`TimeSpec`."""
    if text is None:
        raise InvalidTimeFormat("")
    cleaned = str(text).strip()

    if _NUMBER_RE.match(cleaned):
        return TimeSpec(Decimal(cleaned))

    parts = cleaned.split(":")
    if len(parts) > len(_SEGMENT_WEIGHTS):
        raise InvalidTimeFormat(text)

    total = Decimal(0)
    for part, weight in zip(reversed(parts), _SEGMENT_WEIGHTS):
        if not _NUMBER_RE.match(part):
            raise InvalidTimeFormat(text)
        total += Decimal(part) * weight
    return TimeSpec(total)


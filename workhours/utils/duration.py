"""Net worked hours for a single work entry."""
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

MAX_SPAN_HOURS = 24

_STAMP_FORMAT = "%Y-%m-%d %H:%M"


def round_half_up(value: float, places: int = 2) -> float:
    """
    Round a float to ``places`` decimals, halves away from zero.

    Rounds the shortest decimal representation of the float, so values such
    as 2.675 round up to 2.68 rather than down as the built-in ``round`` does.

    Examples:
        >>> round_half_up(2.675)
        2.68
        >>> round_half_up(0.25, 1)
        0.3
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def parse_instant(day: Optional[str], clock: Optional[str]) -> Optional[datetime]:
    """Combine a ``YYYY-MM-DD`` date and an ``HH:mm`` time, or None if unparseable."""
    if not day or not clock:
        return None
    try:
        return datetime.strptime(f"{day} {clock}", _STAMP_FORMAT)
    except (TypeError, ValueError):
        return None


def _break_hours(entry) -> float:
    # Break parts are interpreted against the start date; a missing part is "00".
    day = getattr(entry, "start_date", None)
    start = parse_instant(
        day,
        f"{getattr(entry, 'break_start_hour', None) or '00'}:{getattr(entry, 'break_start_min', None) or '00'}",
    )
    end = parse_instant(
        day,
        f"{getattr(entry, 'break_end_hour', None) or '00'}:{getattr(entry, 'break_end_min', None) or '00'}",
    )
    if start is None or end is None or end <= start:
        return 0.0
    return (end - start).total_seconds() / 3600


def compute_duration_hours(entry) -> float:
    """
    Compute net worked hours for an entry, rounded to 2 decimals.

    Never raises: an unparseable date/time, an end at or before the start, or
    a span over 24 hours all give 0. A break that cannot be parsed or ends
    before it starts is ignored; a break longer than the work clamps to 0.

    Args:
        entry: Any object exposing the work entry date, time and break fields

    Returns:
        Hours as a non-negative float

    Examples:
        9:00 to 17:00 with a 12:00-13:00 break gives 7.0
        17:00 to 9:00 on the same day gives 0.0
    """
    start = parse_instant(getattr(entry, "start_date", None), getattr(entry, "start_time", None))
    end = parse_instant(getattr(entry, "end_date", None), getattr(entry, "end_time", None))
    if start is None or end is None or end <= start:
        return 0.0

    hours = (end - start).total_seconds() / 3600
    if hours > MAX_SPAN_HOURS:
        return 0.0

    if getattr(entry, "has_break", False):
        pause = _break_hours(entry)
        hours = max(0.0, hours - min(pause, hours))

    return round_half_up(hours, 2)

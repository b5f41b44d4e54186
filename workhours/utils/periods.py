"""Period boundaries and period filtering."""
import calendar
from datetime import date, timedelta
from typing import Iterable, Optional

from workhours.models.report import Period, PeriodType


def resolve_period(
    kind: PeriodType,
    reference: Optional[date] = None,
    from_: Optional[date] = None,
    to: Optional[date] = None,
) -> Period:
    """
    Compute the inclusive date range for a period selector.

    Args:
        kind: week, month, year or custom
        reference: Day the week/month/year is taken around (defaults to today)
        from_: Start bound for custom periods
        to: End bound for custom periods

    Returns:
        Period with both bounds set, except custom periods which keep
        whatever bounds the caller gave

    Examples:
        >>> resolve_period(PeriodType.WEEK, date(2025, 1, 8)).from_
        datetime.date(2025, 1, 6)
    """
    kind = PeriodType(kind)
    if kind == PeriodType.CUSTOM:
        return Period(kind=kind, from_=from_, to=to)

    day = reference or date.today()

    if kind == PeriodType.WEEK:
        monday = day - timedelta(days=day.weekday())
        return Period(kind=kind, from_=monday, to=monday + timedelta(days=6))

    if kind == PeriodType.MONTH:
        last_day = calendar.monthrange(day.year, day.month)[1]
        return Period(
            kind=kind,
            from_=day.replace(day=1),
            to=day.replace(day=last_day),
        )

    return Period(kind=kind, from_=date(day.year, 1, 1), to=date(day.year, 12, 31))


def in_period(start_date: Optional[str], period: Period) -> bool:
    """Check whether a ``YYYY-MM-DD`` start date falls inside a period."""
    if period.from_ is None and period.to is None:
        return True
    # An undated entry belongs to no bounded period.
    if not start_date:
        return False
    # Zero-padded ISO dates compare correctly as strings.
    if period.from_ is not None and start_date < period.from_.isoformat():
        return False
    if period.to is not None and start_date > period.to.isoformat():
        return False
    return True


def filter_by_period(entries: Iterable, period: Period) -> list:
    """Select the entries whose start date lies in the period, keeping order."""
    return [e for e in entries if in_period(getattr(e, "start_date", None), period)]

"""Period summaries: totals, per-category and per-day buckets."""
from typing import Iterable, Mapping, Optional

from workhours.models.category import DEFAULT_CATEGORY
from workhours.models.client import Client
from workhours.models.report import Bucket, CategoryBucket, Summary
from workhours.utils.duration import compute_duration_hours, round_half_up
from workhours.utils.rates import entry_rate


def aggregate(
    entries: Iterable,
    clients: Optional[Mapping[str, Client]] = None,
    fallback_rate: float = 0.0,
) -> Summary:
    """
    Summarize hours and amounts over a list of entries.

    Each entry's amount is rounded to cents before it is added to any total,
    so totals never drift from the sum of what an invoice would show.

    Args:
        entries: Work entries, already filtered to the wanted period
        clients: ``{id: Client}`` registry used for rate defaults
        fallback_rate: Rate used when an entry resolves to no rate

    Returns:
        Summary with totals, unique days, per-category buckets sorted by
        amount descending, and per-date buckets keyed by start date
    """
    total_hours = 0.0
    total_amount = 0.0
    count = 0
    categories: dict[str, list[float]] = {}
    days: dict[str, list[float]] = {}

    for entry in entries:
        hours = compute_duration_hours(entry)
        amount = round_half_up(hours * entry_rate(entry, clients, fallback_rate), 2)
        total_hours += hours
        total_amount += amount
        count += 1

        category = getattr(entry, "category", None) or DEFAULT_CATEGORY
        bucket = categories.setdefault(category, [0.0, 0.0])
        bucket[0] += hours
        bucket[1] += amount

        day = getattr(entry, "start_date", None) or ""
        bucket = days.setdefault(day, [0.0, 0.0])
        bucket[0] += hours
        bucket[1] += amount

    unique_days = len(days)
    total_hours = round_half_up(total_hours, 2)

    by_category = sorted(
        (
            CategoryBucket(
                name=name,
                hours=round_half_up(hours, 1),
                amount=round_half_up(amount, 2),
            )
            for name, (hours, amount) in categories.items()
        ),
        key=lambda b: -b.amount,
    )
    by_date = {
        day: Bucket(hours=round_half_up(hours, 1), amount=round_half_up(amount, 2))
        for day, (hours, amount) in days.items()
    }

    return Summary(
        total_hours=total_hours,
        total_amount=round_half_up(total_amount, 2),
        unique_days=unique_days,
        avg_hours_per_day=round_half_up(total_hours / unique_days, 2) if unique_days else 0.0,
        by_category=by_category,
        by_date=by_date,
        entry_count=count,
    )

"""Invoice line building."""
from typing import Iterable, Mapping, Optional

from workhours.models.category import DEFAULT_CATEGORY
from workhours.models.client import Client
from workhours.models.report import Invoice, InvoiceLine, Period
from workhours.utils.duration import compute_duration_hours, round_half_up
from workhours.utils.rates import entry_rate


def _sort_key(entry) -> tuple[str, str]:
    return (getattr(entry, "start_date", None) or "", getattr(entry, "start_time", None) or "")


def build_invoice(
    entries: Iterable,
    rate_override: Optional[float] = None,
    clients: Optional[Mapping[str, Client]] = None,
    fallback_rate: float = 0.0,
    period: Optional[Period] = None,
) -> Invoice:
    """
    Build one invoice line per entry plus grand totals.

    Args:
        entries: Work entries, already filtered to the invoiced period
        rate_override: Rate applied to every line when given and positive
        clients: ``{id: Client}`` registry used for rate defaults
        fallback_rate: Rate used when an entry resolves to no rate
        period: Invoiced period; its bounds become the invoice bounds

    Returns:
        Invoice with lines ordered by start date and time
    """
    use_override = rate_override is not None and rate_override > 0

    lines = []
    for entry in sorted(entries, key=_sort_key):
        hours = compute_duration_hours(entry)
        rate = float(rate_override) if use_override else entry_rate(entry, clients, fallback_rate)
        lines.append(
            InvoiceLine(
                date=entry.start_date,
                hours=hours,
                rate=rate,
                amount=round_half_up(hours * rate, 2),
                category=getattr(entry, "category", None) or DEFAULT_CATEGORY,
            )
        )

    if period is not None and (period.from_ is not None or period.to is not None):
        start = period.from_.isoformat() if period.from_ else None
        end = period.to.isoformat() if period.to else None
    elif lines:
        start, end = lines[0].date, lines[-1].date
    else:
        start = end = None

    return Invoice(
        lines=lines,
        total_hours=round_half_up(sum(line.hours for line in lines), 2),
        total_amount=round_half_up(sum(line.amount for line in lines), 2),
        from_=start,
        to=end,
    )

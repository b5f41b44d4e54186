"""Hourly rate resolution for work entries."""
from typing import Mapping, Optional, Tuple

from workhours.models.client import Client


def _positive(rate: Optional[float]) -> bool:
    return rate is not None and rate > 0


def resolve_rate(
    entry,
    client: Optional[Client] = None,
    activity: Optional[Client] = None,
    fallback: float = 0.0,
) -> float:
    """
    Determine the billable hourly rate of an entry.

    Precedence: the entry's own rate, then the activity default, then the
    client default, then ``fallback``. Zero or missing rates are skipped.
    An unresolved rate is 0, never an error.

    Args:
        entry: Work entry (anything with an ``hourly_rate`` attribute)
        client: Client the entry is billed to, if known
        activity: Activity the entry belongs to, if known
        fallback: Rate used when nothing else applies

    Returns:
        Hourly rate
    """
    entry_rate = getattr(entry, "hourly_rate", None)
    if _positive(entry_rate):
        return float(entry_rate)
    if activity is not None and _positive(activity.default_rate):
        return float(activity.default_rate)
    if client is not None and _positive(client.default_rate):
        return float(client.default_rate)
    return float(fallback or 0.0)


def lookup_references(
    entry,
    clients: Optional[Mapping[str, Client]],
) -> Tuple[Optional[Client], Optional[Client]]:
    """Find the (client, activity) records an entry points to."""
    if not clients:
        return None, None
    client_id = getattr(entry, "client_id", None) or getattr(entry, "employer_id", None)
    activity_id = getattr(entry, "activity_id", None)
    client = clients.get(client_id) if client_id else None
    activity = clients.get(activity_id) if activity_id else None
    return client, activity


def entry_rate(
    entry,
    clients: Optional[Mapping[str, Client]] = None,
    fallback: float = 0.0,
) -> float:
    """Resolve an entry's rate using a ``{id: Client}`` registry."""
    client, activity = lookup_references(entry, clients)
    return resolve_rate(entry, client=client, activity=activity, fallback=fallback)

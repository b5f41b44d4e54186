"""Report service - feeds stored entries into the hours/invoice pipeline."""
import logging
from typing import Optional

from workhours.models.report import Invoice, Period, Summary
from workhours.services.auth_service import AuthService
from workhours.services.client_service import ClientService
from workhours.services.work_entry_service import WorkEntryService
from workhours.utils.aggregation import aggregate
from workhours.utils.invoice import build_invoice
from workhours.utils.periods import filter_by_period

logger = logging.getLogger(__name__)


class ReportService:
    """Service building summaries and invoices for a user.

    All arithmetic happens in the pure pipeline; this class only loads the
    entries, the client registry and the user's default rate.
    """

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.entries = WorkEntryService(db)
        self.clients = ClientService(db)
        self.users = AuthService(db)

    async def _load(self, user_id: str, period: Period):
        entries, skipped = await self.entries.load_entries(
            user_id, from_=period.from_, to=period.to
        )
        if skipped:
            logger.warning("Skipped %d unreadable entries for user %s", skipped, user_id)

        registry = await self.clients.get_registry(user_id)
        user = await self.users.get_user_by_id(user_id)
        fallback = user.default_hourly_rate or 0.0

        return filter_by_period(entries, period), skipped, registry, fallback

    async def summary(self, user_id: str, period: Period) -> Summary:
        """
        Summarize a user's hours and amounts over a period.

        Raises:
            ValueError: If the user does not exist
        """
        entries, skipped, registry, fallback = await self._load(user_id, period)

        result = aggregate(entries, clients=registry, fallback_rate=fallback)
        result.skipped_entries = skipped
        result.period = period
        return result

    async def invoice_preview(
        self,
        user_id: str,
        period: Period,
        hourly_rate: Optional[float] = None,
    ) -> Invoice:
        """
        Build the invoice for a period.

        Args:
            user_id: User ID
            period: Invoiced period (open bounds allowed)
            hourly_rate: Rate applied to every line instead of resolved rates

        Raises:
            ValueError: If the user does not exist
        """
        entries, skipped, registry, fallback = await self._load(user_id, period)

        invoice = build_invoice(
            entries,
            rate_override=hourly_rate,
            clients=registry,
            fallback_rate=fallback,
            period=period,
        )
        invoice.skipped_entries = skipped
        return invoice

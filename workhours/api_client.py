"""Async HTTP client for the work hours API.

Authentication state lives on a ``Session`` held by each client instance, so
several accounts can be used side by side.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

import httpx

from workhours.models.client import Client, ClientCreate, ClientUpdate
from workhours.models.report import Invoice, PeriodType, Summary
from workhours.models.user import User
from workhours.models.work_entry import WorkEntry, WorkEntryCreate, WorkEntryUpdate
from workhours.utils.aggregation import aggregate
from workhours.utils.periods import filter_by_period, resolve_period

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:4000"


class ApiError(Exception):
    """Raised when the API answers with an error status."""

    def __init__(self, status_code: int, detail: Any):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


@dataclass
class Session:
    """An authenticated session: bearer token plus the logged-in user."""

    token: str
    user: User

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class WorkHoursClient:
    """Client for the work hours API.

    Example:
        async with WorkHoursClient("http://localhost:4000") as api:
            await api.login("me@example.com", "password123")
            entries = await api.list_work_entries()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[Session] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.session = session
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "WorkHoursClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, auth: bool = True, **kwargs) -> httpx.Response:
        headers = kwargs.pop("headers", {})
        if auth:
            if self.session is None:
                raise ApiError(401, "Not authenticated")
            headers.update(self.session.headers)

        response = await self._http.request(method, path, headers=headers, **kwargs)
        if response.is_error:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            logger.debug("%s %s failed with %s", method, path, response.status_code)
            raise ApiError(response.status_code, detail)
        return response

    @staticmethod
    def _params(**values) -> dict[str, str]:
        return {key: str(value) for key, value in values.items() if value is not None}

    # Auth

    async def register(self, email: str, password: str, first_name: str, last_name: str) -> User:
        response = await self._request(
            "POST",
            "/auth/register",
            auth=False,
            json={
                "email": email,
                "password": password,
                "first_name": first_name,
                "last_name": last_name,
            },
        )
        return User.model_validate(response.json())

    async def login(self, email: str, password: str) -> Session:
        """Log in and keep the resulting session on this client."""
        response = await self._request(
            "POST",
            "/auth/login",
            auth=False,
            json={"email": email, "password": password},
        )
        body = response.json()
        self.session = Session(token=body["access_token"], user=User.model_validate(body["user"]))
        return self.session

    def logout(self) -> None:
        self.session = None

    async def me(self) -> User:
        response = await self._request("GET", "/auth/me")
        return User.model_validate(response.json())

    # Work entries

    async def list_work_entries(
        self,
        from_: Optional[date] = None,
        to: Optional[date] = None,
    ) -> list[WorkEntry]:
        response = await self._request("GET", "/work-entries", params=self._params(**{"from": from_, "to": to}))
        return [WorkEntry.model_validate(item) for item in response.json()]

    async def create_work_entry(self, entry: WorkEntryCreate) -> WorkEntry:
        response = await self._request("POST", "/work-entries", json=entry.model_dump(exclude_none=True))
        return WorkEntry.model_validate(response.json())

    async def update_work_entry(self, entry_id: str, changes: WorkEntryUpdate) -> WorkEntry:
        response = await self._request(
            "PUT",
            f"/work-entries/{entry_id}",
            json=changes.model_dump(exclude_unset=True),
        )
        return WorkEntry.model_validate(response.json())

    async def delete_work_entry(self, entry_id: str) -> None:
        await self._request("DELETE", f"/work-entries/{entry_id}")

    # Clients

    async def list_clients(self) -> list[Client]:
        response = await self._request("GET", "/clients")
        return [Client.model_validate(item) for item in response.json()]

    async def create_client(self, client: ClientCreate) -> Client:
        response = await self._request("POST", "/clients", json=client.model_dump(mode="json", exclude_none=True))
        return Client.model_validate(response.json())

    async def update_client(self, client_id: str, changes: ClientUpdate) -> Client:
        response = await self._request(
            "PUT",
            f"/clients/{client_id}",
            json=changes.model_dump(mode="json", exclude_unset=True),
        )
        return Client.model_validate(response.json())

    async def delete_client(self, client_id: str) -> None:
        await self._request("DELETE", f"/clients/{client_id}")

    # Invoices and summaries

    async def invoice_preview(
        self,
        from_: Optional[date] = None,
        to: Optional[date] = None,
        hourly_rate: Optional[float] = None,
    ) -> Invoice:
        body: dict[str, Any] = {}
        if self.session is not None:
            body["user_id"] = self.session.user.id
        if from_ is not None:
            body["from"] = from_.isoformat()
        if to is not None:
            body["to"] = to.isoformat()
        if hourly_rate is not None:
            body["hourly_rate"] = hourly_rate

        response = await self._request("POST", "/invoice-preview", json=body)
        return Invoice.model_validate(response.json())

    async def summary(
        self,
        period: PeriodType = PeriodType.MONTH,
        reference: Optional[date] = None,
        from_: Optional[date] = None,
        to: Optional[date] = None,
    ) -> Summary:
        params = self._params(**{
            "period": PeriodType(period).value,
            "reference": reference,
            "from": from_,
            "to": to,
        })
        response = await self._request("GET", "/reports/summary", params=params)
        return Summary.model_validate(response.json())

    async def local_summary(
        self,
        period: PeriodType = PeriodType.MONTH,
        reference: Optional[date] = None,
        from_: Optional[date] = None,
        to: Optional[date] = None,
    ) -> Summary:
        """Fetch entries and clients, then summarize in-process.

        Uses the same pipeline as the server, so the result matches
        ``summary()`` for the same period.
        """
        resolved = resolve_period(period, reference=reference, from_=from_, to=to)
        entries = await self.list_work_entries(from_=resolved.from_, to=resolved.to)
        registry = {client.id: client for client in await self.list_clients()}
        fallback = 0.0
        if self.session is not None:
            fallback = self.session.user.default_hourly_rate or 0.0

        result = aggregate(filter_by_period(entries, resolved), clients=registry, fallback_rate=fallback)
        result.period = resolved
        return result

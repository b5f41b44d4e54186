"""Integration tests for invoice and report endpoints."""
import codecs

import pytest


def entry_payload(day, start_time="09:00", end_time="17:00", **overrides):
    payload = {
        "start_date": day,
        "start_time": start_time,
        "end_date": day,
        "end_time": end_time,
    }
    payload.update(overrides)
    return payload


async def add_entries(app_client, headers, *payloads):
    for payload in payloads:
        response = await app_client.post("/work-entries", json=payload, headers=headers)
        assert response.status_code == 201


@pytest.mark.asyncio
class TestInvoicePreview:
    """Tests for POST /invoice-preview and GET /invoices/preview."""

    async def test_preview_lines_and_totals(self, app_client, auth_headers):
        await add_entries(
            app_client,
            auth_headers,
            entry_payload("2025-01-07", hourly_rate=50, category="Formation"),
            entry_payload("2025-01-06", end_time="13:00", hourly_rate=40),
        )

        response = await app_client.post(
            "/invoice-preview",
            json={"from": "2025-01-01", "to": "2025-01-31"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert [line["date"] for line in data["lines"]] == ["2025-01-06", "2025-01-07"]
        assert data["lines"][0] == {
            "date": "2025-01-06",
            "hours": 4.0,
            "rate": 40.0,
            "amount": 160.0,
            "category": "Standard",
        }
        assert data["lines"][1]["category"] == "Formation"
        assert data["total_hours"] == 12.0
        assert data["total_amount"] == 560.0
        assert data["from"] == "2025-01-01"
        assert data["to"] == "2025-01-31"

    async def test_preview_rate_override(self, app_client, auth_headers):
        await add_entries(
            app_client,
            auth_headers,
            entry_payload("2025-01-06", hourly_rate=50),
            entry_payload("2025-01-07"),
        )

        response = await app_client.post(
            "/invoice-preview",
            json={"from": "2025-01-01", "to": "2025-01-31", "hourly_rate": 30},
            headers=auth_headers,
        )

        data = response.json()
        assert [line["rate"] for line in data["lines"]] == [30.0, 30.0]
        assert data["total_amount"] == 480.0

    async def test_preview_excludes_entries_outside_range(self, app_client, auth_headers):
        await add_entries(
            app_client,
            auth_headers,
            entry_payload("2024-12-31", hourly_rate=50),
            entry_payload("2025-01-31", hourly_rate=50),
            entry_payload("2025-02-01", hourly_rate=50),
        )

        response = await app_client.get(
            "/invoices/preview",
            params={"from": "2025-01-01", "to": "2025-01-31"},
            headers=auth_headers,
        )

        assert [line["date"] for line in response.json()["lines"]] == ["2025-01-31"]

    async def test_preview_for_other_user_forbidden(self, app_client, login_as):
        headers, _ = await login_as("marie@example.com")
        _, other = await login_as("paul@example.com")

        response = await app_client.post(
            "/invoice-preview",
            json={"user_id": other["user"]["id"]},
            headers=headers,
        )

        assert response.status_code == 403

    async def test_preview_with_own_user_id(self, app_client, login_as):
        headers, body = await login_as("marie@example.com")

        response = await app_client.post(
            "/invoice-preview",
            json={"user_id": body["user"]["id"]},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["lines"] == []

    async def test_rates_fall_back_to_client_then_user_default(self, app_client, login_as):
        headers, body = await login_as("marie@example.com")
        await app_client.put(
            f"/users/{body['user']['id']}",
            json={"default_hourly_rate": 45},
            headers=headers,
        )
        client = await app_client.post(
            "/clients",
            json={"name": "Acme", "default_rate": 40},
            headers=headers,
        )
        await add_entries(
            app_client,
            headers,
            entry_payload("2025-01-06", client_id=client.json()["id"]),
            entry_payload("2025-01-07"),
            entry_payload("2025-01-08", client_id=client.json()["id"], hourly_rate=60),
        )

        response = await app_client.get("/invoices/preview", headers=headers)

        assert [line["rate"] for line in response.json()["lines"]] == [40.0, 45.0, 60.0]

    async def test_preview_requires_auth(self, app_client):
        response = await app_client.post("/invoice-preview", json={})

        assert response.status_code == 401


@pytest.mark.asyncio
class TestInvoiceExport:
    """Tests for GET /invoices/export.csv."""

    async def test_export_csv(self, app_client, auth_headers):
        await add_entries(app_client, auth_headers, entry_payload("2025-01-06", hourly_rate=50))

        response = await app_client.get(
            "/invoices/export.csv",
            params={"from": "2025-01-01", "to": "2025-01-31"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="facture_2025-01-01_2025-01-31.csv"' in response.headers["content-disposition"]
        assert response.content.startswith(codecs.BOM_UTF8)

        rows = response.content.decode("utf-8-sig").splitlines()
        assert rows == [
            "Date;Heures;Taux;Montant;Catégorie",
            "2025-01-06;8.00;50.00;400.00;Standard",
            "Total;8.00;;400.00;",
        ]


@pytest.mark.asyncio
class TestSummary:
    """Tests for GET /reports/summary."""

    async def test_month_summary(self, app_client, auth_headers):
        await add_entries(
            app_client,
            auth_headers,
            entry_payload("2025-01-06", hourly_rate=50),
            entry_payload("2025-01-06", start_time="18:00", end_time="20:00", hourly_rate=50, category="Weekend"),
            entry_payload("2025-01-20", hourly_rate=40),
            entry_payload("2025-02-03", hourly_rate=40),
        )

        response = await app_client.get(
            "/reports/summary",
            params={"period": "month", "reference": "2025-01-15"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_hours"] == 18.0
        assert data["total_amount"] == 820.0
        assert data["unique_days"] == 2
        assert data["avg_hours_per_day"] == 9.0
        assert data["entry_count"] == 3
        assert [b["name"] for b in data["by_category"]] == ["Standard", "Weekend"]
        assert data["by_date"]["2025-01-06"] == {"hours": 10.0, "amount": 500.0}
        assert data["period"]["from"] == "2025-01-01"
        assert data["period"]["to"] == "2025-01-31"

    async def test_week_summary(self, app_client, auth_headers):
        await add_entries(
            app_client,
            auth_headers,
            entry_payload("2025-01-05", hourly_rate=50),
            entry_payload("2025-01-06", hourly_rate=50),
            entry_payload("2025-01-12", hourly_rate=50),
            entry_payload("2025-01-13", hourly_rate=50),
        )

        response = await app_client.get(
            "/reports/summary",
            params={"period": "week", "reference": "2025-01-08"},
            headers=auth_headers,
        )

        data = response.json()
        assert sorted(data["by_date"]) == ["2025-01-06", "2025-01-12"]
        assert data["total_amount"] == 800.0

    async def test_empty_summary(self, app_client, auth_headers):
        response = await app_client.get(
            "/reports/summary",
            params={"period": "custom", "from": "2025-01-01", "to": "2025-01-31"},
            headers=auth_headers,
        )

        data = response.json()
        assert data["total_hours"] == 0.0
        assert data["unique_days"] == 0
        assert data["avg_hours_per_day"] == 0.0
        assert data["by_category"] == []

    async def test_malformed_stored_entries_are_skipped(self, app_client, login_as, test_db):
        headers, body = await login_as("marie@example.com")
        await add_entries(app_client, headers, entry_payload("2025-01-06", hourly_rate=50))
        await test_db["work_entries"].insert_one(
            {"user_id": body["user"]["id"], "start_date": "2025-01-07"}
        )

        response = await app_client.get(
            "/reports/summary",
            params={"period": "custom"},
            headers=headers,
        )

        data = response.json()
        assert data["entry_count"] == 1
        assert data["skipped_entries"] == 1
        assert data["total_amount"] == 400.0

    async def test_invalid_period(self, app_client, auth_headers):
        response = await app_client.get(
            "/reports/summary",
            params={"period": "fortnight"},
            headers=auth_headers,
        )

        assert response.status_code == 422

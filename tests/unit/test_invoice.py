"""Tests for the invoice line builder and CSV export."""
from datetime import date
from types import SimpleNamespace


def make_entry(start_date, start_time="09:00", end_time="17:00", hourly_rate=None, category=None):
    return SimpleNamespace(
        start_date=start_date,
        start_time=start_time,
        end_date=start_date,
        end_time=end_time,
        has_break=False,
        category=category,
        hourly_rate=hourly_rate,
        client_id=None,
        activity_id=None,
        employer_id=None,
    )


class TestBuildInvoice:
    """Tests for build_invoice."""

    def test_one_line_per_entry(self):
        from workhours.utils.invoice import build_invoice

        invoice = build_invoice([
            make_entry("2025-01-06", hourly_rate=50),
            make_entry("2025-01-06", start_time="18:00", end_time="20:00", hourly_rate=50),
        ])

        assert len(invoice.lines) == 2
        assert invoice.total_hours == 10.0
        assert invoice.total_amount == 500.0

    def test_scenario_b_line(self):
        """Scenario B: 8 hours at 50 is 400."""
        from workhours.utils.invoice import build_invoice

        invoice = build_invoice([make_entry("2025-01-06", hourly_rate=50)])
        line = invoice.lines[0]

        assert line.date == "2025-01-06"
        assert line.hours == 8.0
        assert line.rate == 50.0
        assert line.amount == 400.0
        assert line.category == "Standard"

    def test_rate_override_applies_to_every_line(self):
        from workhours.utils.invoice import build_invoice

        invoice = build_invoice(
            [make_entry("2025-01-06", hourly_rate=50), make_entry("2025-01-07")],
            rate_override=30,
        )

        assert [line.rate for line in invoice.lines] == [30.0, 30.0]
        assert invoice.total_amount == 480.0

    def test_zero_override_is_ignored(self):
        from workhours.utils.invoice import build_invoice

        invoice = build_invoice([make_entry("2025-01-06", hourly_rate=50)], rate_override=0)

        assert invoice.lines[0].rate == 50.0

    def test_lines_sorted_by_date_and_time(self):
        from workhours.utils.invoice import build_invoice

        invoice = build_invoice([
            make_entry("2025-01-08"),
            make_entry("2025-01-06", start_time="14:00", end_time="15:00"),
            make_entry("2025-01-06", start_time="08:00", end_time="09:00"),
        ])

        assert [(line.date, line.hours) for line in invoice.lines] == [
            ("2025-01-06", 1.0),
            ("2025-01-06", 1.0),
            ("2025-01-08", 8.0),
        ]
        assert invoice.from_ == "2025-01-06"
        assert invoice.to == "2025-01-08"

    def test_period_bounds_become_invoice_bounds(self):
        from workhours.models.report import Period
        from workhours.utils.invoice import build_invoice

        period = Period(from_=date(2025, 1, 1), to=date(2025, 1, 31))
        invoice = build_invoice([make_entry("2025-01-06")], period=period)

        assert invoice.from_ == "2025-01-01"
        assert invoice.to == "2025-01-31"

    def test_empty_invoice(self):
        from workhours.utils.invoice import build_invoice

        invoice = build_invoice([])

        assert invoice.lines == []
        assert invoice.total_hours == 0.0
        assert invoice.total_amount == 0.0
        assert invoice.from_ is None
        assert invoice.to is None

    def test_totals_are_sums_of_rounded_lines(self):
        from workhours.utils.invoice import build_invoice

        entries = [make_entry("2025-01-06", end_time="09:20", hourly_rate=10.01) for _ in range(3)]
        invoice = build_invoice(entries)

        assert [line.amount for line in invoice.lines] == [3.3, 3.3, 3.3]
        assert invoice.total_amount == 9.9
        assert invoice.total_hours == 0.99

    def test_idempotent(self):
        from datetime import datetime
        from workhours.models.client import Client
        from workhours.utils.invoice import build_invoice

        now = datetime(2025, 1, 1)
        registry = {
            "c1": Client(_id="c1", user_id="u1", name="Acme", default_rate=40, created_at=now, updated_at=now),
        }
        billed = make_entry("2025-01-07")
        billed.client_id = "c1"
        entries = [billed, make_entry("2025-01-06", end_time="12:30"), make_entry("2025-01-08", hourly_rate=55)]

        first = build_invoice(entries, clients=registry, fallback_rate=45)
        second = build_invoice(entries, clients=registry, fallback_rate=45)

        assert first.model_dump() == second.model_dump()
        assert [line.rate for line in first.lines] == [45.0, 40.0, 55.0]

    def test_does_not_reorder_input(self):
        from workhours.utils.invoice import build_invoice

        entries = [make_entry("2025-01-08"), make_entry("2025-01-06")]
        build_invoice(entries)

        assert [e.start_date for e in entries] == ["2025-01-08", "2025-01-06"]


class TestInvoiceCsv:
    """Tests for CSV export."""

    def test_csv_layout(self):
        from workhours.utils.export import invoice_to_csv
        from workhours.utils.invoice import build_invoice

        invoice = build_invoice([make_entry("2025-01-06", hourly_rate=50, category="Formation")])
        content = invoice_to_csv(invoice)

        assert content.startswith("\ufeff")
        rows = content.lstrip("\ufeff").splitlines()
        assert rows[0] == "Date;Heures;Taux;Montant;Catégorie"
        assert rows[1] == "2025-01-06;8.00;50.00;400.00;Formation"
        assert rows[2] == "Total;8.00;;400.00;"

    def test_csv_without_bom(self):
        from workhours.utils.export import invoice_to_csv
        from workhours.utils.invoice import build_invoice

        content = invoice_to_csv(build_invoice([]), bom=False)

        assert content.splitlines() == ["Date;Heures;Taux;Montant;Catégorie", "Total;0.00;;0.00;"]

    def test_filename(self):
        from workhours.models.report import Invoice
        from workhours.utils.export import csv_filename

        assert csv_filename(Invoice(lines=[], total_hours=0, total_amount=0)) == "facture_debut_fin.csv"
        invoice = Invoice(lines=[], total_hours=0, total_amount=0, from_="2025-01-01", to="2025-01-31")
        assert csv_filename(invoice) == "facture_2025-01-01_2025-01-31.csv"

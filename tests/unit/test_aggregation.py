"""Tests for the period aggregator."""
from types import SimpleNamespace


def make_entry(
    start_date="2025-01-06",
    start_time="09:00",
    end_time="17:00",
    category=None,
    hourly_rate=None,
    has_break=False,
    client_id=None,
):
    return SimpleNamespace(
        start_date=start_date,
        start_time=start_time,
        end_date=start_date,
        end_time=end_time,
        has_break=has_break,
        break_start_hour="12",
        break_start_min="00",
        break_end_hour="13",
        break_end_min="00",
        category=category,
        hourly_rate=hourly_rate,
        client_id=client_id,
        activity_id=None,
        employer_id=None,
    )


class TestAggregate:
    """Tests for aggregate."""

    def test_scenario_a_totals(self):
        """Scenario A: 7 hours at 50 is 350."""
        from workhours.utils.aggregation import aggregate

        summary = aggregate([make_entry(hourly_rate=50, has_break=True)])

        assert summary.total_hours == 7.0
        assert summary.total_amount == 350.0
        assert summary.unique_days == 1
        assert summary.avg_hours_per_day == 7.0

    def test_same_day_two_categories(self):
        """Scenario D: one date bucket, two category buckets."""
        from workhours.utils.aggregation import aggregate

        summary = aggregate([
            make_entry(start_time="08:00", end_time="12:00", category="Standard", hourly_rate=50),
            make_entry(start_time="14:00", end_time="16:00", category="Formation", hourly_rate=60),
        ])

        assert summary.by_date["2025-01-06"].hours == 6.0
        assert summary.by_date["2025-01-06"].amount == 320.0
        assert len(summary.by_category) == 2
        assert {b.name for b in summary.by_category} == {"Standard", "Formation"}
        assert summary.unique_days == 1

    def test_categories_sorted_by_amount_descending(self):
        from workhours.utils.aggregation import aggregate

        summary = aggregate([
            make_entry(category="Support", hourly_rate=10),
            make_entry(category="Formation", hourly_rate=90),
            make_entry(category="Weekend", hourly_rate=40),
        ])

        assert [b.name for b in summary.by_category] == ["Formation", "Weekend", "Support"]

    def test_missing_category_is_standard(self):
        from workhours.utils.aggregation import aggregate

        summary = aggregate([make_entry(category=None), make_entry(category="")])

        assert [b.name for b in summary.by_category] == ["Standard"]
        assert summary.by_category[0].hours == 16.0

    def test_category_hours_rounded_to_one_decimal(self):
        from workhours.utils.aggregation import aggregate

        summary = aggregate([make_entry(end_time="09:20", hourly_rate=30)])

        assert summary.total_hours == 0.33
        assert summary.by_category[0].hours == 0.3
        assert summary.by_category[0].amount == 9.9

    def test_amount_rounded_per_entry_before_summing(self):
        from workhours.utils.aggregation import aggregate

        # 0.33h * 10.01 = 3.3033 -> 3.30 per entry
        entries = [make_entry(end_time="09:20", hourly_rate=10.01) for _ in range(3)]
        summary = aggregate(entries)

        assert summary.total_amount == 9.9

    def test_unique_days_and_average(self):
        from workhours.utils.aggregation import aggregate

        summary = aggregate([
            make_entry(start_date="2025-01-06"),
            make_entry(start_date="2025-01-06", start_time="18:00", end_time="20:00"),
            make_entry(start_date="2025-01-07", end_time="11:00"),
        ])

        assert summary.total_hours == 12.0
        assert summary.unique_days == 2
        assert summary.avg_hours_per_day == 6.0
        assert summary.entry_count == 3

    def test_empty_input(self):
        from workhours.utils.aggregation import aggregate

        summary = aggregate([])

        assert summary.total_hours == 0.0
        assert summary.total_amount == 0.0
        assert summary.unique_days == 0
        assert summary.avg_hours_per_day == 0.0
        assert summary.by_category == []
        assert summary.by_date == {}

    def test_broken_entry_counts_as_zero(self):
        from workhours.utils.aggregation import aggregate

        summary = aggregate([
            make_entry(hourly_rate=50),
            make_entry(start_time="17:00", end_time="09:00", hourly_rate=50),
        ])

        assert summary.total_hours == 8.0
        assert summary.total_amount == 400.0

    def test_uses_client_registry_and_fallback(self):
        from datetime import datetime
        from workhours.models.client import Client
        from workhours.utils.aggregation import aggregate

        now = datetime(2025, 1, 1)
        registry = {
            "c1": Client(_id="c1", user_id="u1", name="Acme", default_rate=40, created_at=now, updated_at=now),
        }
        summary = aggregate(
            [make_entry(client_id="c1"), make_entry(start_date="2025-01-07")],
            clients=registry,
            fallback_rate=20,
        )

        assert summary.total_amount == 8 * 40 + 8 * 20

    def test_idempotent(self):
        from workhours.utils.aggregation import aggregate

        entries = [
            make_entry(category="Standard", hourly_rate=50, has_break=True),
            make_entry(start_date="2025-01-07", category="Formation", hourly_rate=65),
        ]

        first = aggregate(entries)
        second = aggregate(entries)

        assert first.model_dump() == second.model_dump()

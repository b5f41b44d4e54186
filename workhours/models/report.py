"""Report and invoice model definitions.

Everything here is derived from work entries and never stored.
"""
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PeriodType(str, Enum):
    """Period selectors."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    CUSTOM = "custom"


class Period(BaseModel):
    """Inclusive date range; an open bound is None."""

    kind: PeriodType = PeriodType.CUSTOM
    from_: Optional[date] = Field(default=None, alias="from")
    to: Optional[date] = None

    model_config = {"populate_by_name": True}


class Bucket(BaseModel):
    """Hours and amount summed over a group of entries."""

    hours: float = 0.0
    amount: float = 0.0


class CategoryBucket(Bucket):
    """Bucket for one category."""

    name: str


class Summary(BaseModel):
    """Aggregate figures over a set of entries."""

    total_hours: float
    total_amount: float
    unique_days: int
    avg_hours_per_day: float
    by_category: list[CategoryBucket]
    by_date: dict[str, Bucket]
    entry_count: int = 0
    skipped_entries: int = 0
    period: Optional[Period] = None


class InvoiceLine(BaseModel):
    """One billable line."""

    date: str
    hours: float
    rate: float
    amount: float
    category: str


class Invoice(BaseModel):
    """Invoice lines and grand totals, without any formatting."""

    lines: list[InvoiceLine]
    total_hours: float
    total_amount: float
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    skipped_entries: int = 0

    model_config = {"populate_by_name": True}


class InvoicePreviewRequest(BaseModel):
    """Invoice preview request body."""

    user_id: Optional[str] = None
    from_: Optional[date] = Field(default=None, alias="from")
    to: Optional[date] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)

    model_config = {"populate_by_name": True}

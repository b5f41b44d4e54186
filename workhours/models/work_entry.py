"""Work entry model definitions."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^\d{2}:\d{2}$"
CLOCK_PART_PATTERN = r"^\d{1,2}$"


class Location(BaseModel):
    """Where the work took place (informational only)."""

    city: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class WorkEntryFields(BaseModel):
    """Optional fields shared by stored entries and create payloads."""

    has_break: bool = False
    break_start_hour: Optional[str] = None
    break_start_min: Optional[str] = None
    break_end_hour: Optional[str] = None
    break_end_min: Optional[str] = None
    category: Optional[str] = None
    hourly_rate: Optional[float] = None
    client_id: Optional[str] = None
    client_name: Optional[str] = None
    activity_id: Optional[str] = None
    activity_name: Optional[str] = None
    employer_id: Optional[str] = None  # legacy unified client/project reference
    project_name: Optional[str] = None
    location: Optional[Location] = None
    comment: Optional[str] = None


class WorkEntryCreate(WorkEntryFields):
    """Work entry creation model.

    Only the shape of dates and times is checked here. An entry whose end is
    before its start is still accepted and simply counts as zero hours.
    """

    start_date: str = Field(pattern=DATE_PATTERN)
    start_time: str = Field(pattern=TIME_PATTERN)
    end_date: str = Field(pattern=DATE_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)
    break_start_hour: Optional[str] = Field(default=None, pattern=CLOCK_PART_PATTERN)
    break_start_min: Optional[str] = Field(default=None, pattern=CLOCK_PART_PATTERN)
    break_end_hour: Optional[str] = Field(default=None, pattern=CLOCK_PART_PATTERN)
    break_end_min: Optional[str] = Field(default=None, pattern=CLOCK_PART_PATTERN)
    category: Optional[str] = Field(default=None, max_length=100)
    hourly_rate: Optional[float] = Field(default=None, ge=0)


class WorkEntryUpdate(BaseModel):
    """Work entry update model - all fields optional.

    Fields explicitly sent as null are cleared; omitted fields are kept.
    """

    start_date: Optional[str] = Field(default=None, pattern=DATE_PATTERN)
    start_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    end_date: Optional[str] = Field(default=None, pattern=DATE_PATTERN)
    end_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    has_break: Optional[bool] = None
    break_start_hour: Optional[str] = Field(default=None, pattern=CLOCK_PART_PATTERN)
    break_start_min: Optional[str] = Field(default=None, pattern=CLOCK_PART_PATTERN)
    break_end_hour: Optional[str] = Field(default=None, pattern=CLOCK_PART_PATTERN)
    break_end_min: Optional[str] = Field(default=None, pattern=CLOCK_PART_PATTERN)
    category: Optional[str] = Field(default=None, max_length=100)
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    client_id: Optional[str] = None
    client_name: Optional[str] = None
    activity_id: Optional[str] = None
    activity_name: Optional[str] = None
    employer_id: Optional[str] = None
    project_name: Optional[str] = None
    location: Optional[Location] = None
    comment: Optional[str] = None


class WorkEntry(WorkEntryFields):
    """Full work entry model with database fields.

    Date and time fields are plain strings: documents written before
    validation existed may hold anything, and the duration calculator
    degrades those to zero hours instead of failing.
    """

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    start_date: str
    start_time: str
    end_date: str
    end_time: str
    duration_hours: float = 0.0
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from quiet_hours.schemas.notification_schema import NotificationResponse


# ============================================================================
# Core Quiet Block Schemas
# ============================================================================


def wall_clock_time(v: Optional[dt.time]) -> Optional[dt.time]:
    """Block times are UTC wall-clock values; only a zero offset is accepted."""
    if v is None or v.tzinfo is None:
        return v
    if v.utcoffset() != dt.timedelta(0):
        raise ValueError("Times must be given in UTC without an offset")
    return v.replace(tzinfo=None)


class QuietBlockBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    is_recurring: bool = False
    recurrence_pattern: Optional[str] = Field(None, max_length=100)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("description", "recurrence_pattern")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_wall_clock(cls, v: Optional[dt.time]) -> Optional[dt.time]:
        return wall_clock_time(v)

    @model_validator(mode="after")
    def validate_time_range(self):
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class QuietBlockCreate(QuietBlockBase):
    pass


class QuietBlockUpdate(BaseModel):
    """Partial update; the time range is re-checked against stored values by the service."""

    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    date: Optional[dt.date] = None
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    is_recurring: Optional[bool] = None
    recurrence_pattern: Optional[str] = Field(None, max_length=100)
    is_active: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("description", "recurrence_pattern")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_wall_clock(cls, v: Optional[dt.time]) -> Optional[dt.time]:
        return wall_clock_time(v)

    @model_validator(mode="after")
    def validate_time_range(self):
        if self.start_time is not None and self.end_time is not None and self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class QuietBlockResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    is_recurring: bool
    recurrence_pattern: Optional[str] = None
    is_active: bool
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


class QuietBlockMutationResponse(BaseModel):
    """Result of a create/update: the block plus what happened to its reminder"""

    quiet_block: QuietBlockResponse
    reminder_scheduled: bool
    reminder_error: Optional[str] = None
    notification: Optional[NotificationResponse] = None


class QuietBlockListResponse(BaseModel):
    items: List[QuietBlockResponse]
    total: int

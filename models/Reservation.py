import datetime as dt
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

def truncate_to_day(value):
    """Drops the time of day from datetimes and ISO strings, dates pass through."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, str) and value:
        return dt.datetime.fromisoformat(value).date()
    return value

class ReservationStatus(str, Enum):
    CONFIRMED = "confirmed"
    CANCELED = "canceled"
    COMPLETED = "completed"

class ReservationCreate(BaseModel):
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    party_size: int = Field(2, ge=1)
    table_id: Optional[int] = None
    special_requests: Optional[str] = None

    # "2024-06-01T19:30:00" books the day 2024-06-01
    @field_validator("date", mode="before")
    @classmethod
    def day_only(cls, value):
        return truncate_to_day(value)

class ReservationUpdate(BaseModel):
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    party_size: Optional[int] = Field(None, ge=1)
    table_id: Optional[int] = None
    status: Optional[ReservationStatus] = None
    special_requests: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def day_only(cls, value):
        return truncate_to_day(value)

class Reservation(BaseModel):
    id: int
    customer_name: str
    customer_phone: str
    customer_email: str = ""
    date: dt.date
    time: str
    party_size: int
    table_id: int
    status: ReservationStatus
    special_requests: str = ""
    created_by: int
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True

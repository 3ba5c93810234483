from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from src.events_api.core.dates import to_utc_naive
from src.events_api.schemas.fields import NonEmptyStr, UtcDatetime


class EventWrite(BaseModel):
    """Full set of writable event columns, used for both create and replace.

    Datetimes may carry an offset; they are stored as naive UTC.
    """

    name: NonEmptyStr = Field(max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    location: str | None = Field(default=None, max_length=255)
    from_date: datetime
    to_date: datetime
    contact: str | None = Field(default=None, max_length=255)

    @field_validator("from_date", "to_date")
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        return to_utc_naive(v)

    @model_validator(mode="after")
    def check_range(self) -> "EventWrite":
        if self.to_date < self.from_date:
            raise ValueError("to_date must not be before from_date")
        return self


class EventCreate(EventWrite):
    pass


class EventUpdate(EventWrite):
    pass


class EventRead(BaseModel):
    id: int
    name: str
    description: str | None
    location: str | None
    from_date: UtcDatetime
    to_date: UtcDatetime
    contact: str | None
    user_id: int

    model_config = {"from_attributes": True}


class EventCreated(BaseModel):
    id: int

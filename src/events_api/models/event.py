"""Event model - always owned by exactly one user."""

from pydantic import NaiveDatetime
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class Event(SQLModel, table=True):
    """A calendar entry. from_date/to_date are naive UTC."""

    __tablename__ = "events"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    location: str | None = Field(default=None, max_length=255)
    from_date: NaiveDatetime = Field(index=True, sa_type=DateTime(timezone=False))
    to_date: NaiveDatetime = Field(sa_type=DateTime(timezone=False))
    contact: str | None = Field(default=None, max_length=255)
    user_id: int = Field(foreign_key="users.id", index=True)

"""User model."""

from pydantic import NaiveDatetime
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from src.events_api.models.base import utc_now

# Columns a user may change through the generic key/value profile update
UPDATABLE_PROFILE_FIELDS = frozenset({"email", "first_name", "last_name", "phone_number"})


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    hashed_password: str = Field(max_length=255)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    phone_number: str = Field(max_length=32)
    created_at: NaiveDatetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=False))
    updated_at: NaiveDatetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=False))

from pydantic import BaseModel, EmailStr

from src.events_api.schemas.fields import NonEmptyStr, UtcDatetime


class UserRead(BaseModel):
    id: int
    email: EmailStr
    first_name: str
    last_name: str
    phone_number: str
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = {"from_attributes": True}


class UserFieldUpdate(BaseModel):
    """Change one profile column. ``key`` is checked against an allow-list."""

    key: NonEmptyStr
    value: NonEmptyStr

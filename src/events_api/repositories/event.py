"""Repository for Event entity.

Every query takes the owner's id.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import delete, update
from sqlmodel import select

from src.events_api.models import Event
from src.events_api.repositories.base import BaseRepository


class EventRepository(BaseRepository[Event]):
    model = Event

    async def list_for_owner(self, user_id: int) -> list[Event]:
        result = await self.session.execute(
            select(Event).where(Event.user_id == user_id).order_by(Event.from_date, Event.id)
        )
        return list(result.scalars().all())

    async def list_for_owner_between(
        self, user_id: int, start: datetime, end: datetime
    ) -> list[Event]:
        """Events whose from_date falls in the half-open range [start, end)."""
        result = await self.session.execute(
            select(Event)
            .where(
                Event.user_id == user_id,
                Event.from_date >= start,
                Event.from_date < end,
            )
            .order_by(Event.from_date, Event.id)
        )
        return list(result.scalars().all())

    async def get_for_owner(self, event_id: int, user_id: int) -> Event | None:
        result = await self.session.execute(
            select(Event).where(Event.id == event_id, Event.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def update_for_owner(self, event_id: int, user_id: int, values: dict[str, Any]) -> bool:
        """Replace the writable columns of an owned event. Returns True if a row matched."""
        result = await self.session.execute(
            update(Event)
            .where(Event.id == event_id, Event.user_id == user_id)  # type: ignore[arg-type]
            .values(**values)
        )
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def delete_for_owner(self, event_id: int, user_id: int) -> bool:
        """Delete an owned event. Returns True if a row was deleted."""
        result = await self.session.execute(
            delete(Event).where(
                Event.id == event_id, Event.user_id == user_id  # type: ignore[arg-type]
            )
        )
        return bool(result.rowcount)  # type: ignore[attr-defined]

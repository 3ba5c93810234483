"""Event service - CRUD over the caller's own events."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.events_api.core.dates import local_day_bounds
from src.events_api.core.logging import get_logger
from src.events_api.models import Event
from src.events_api.repositories import EventRepository
from src.events_api.schemas.event import EventCreate, EventUpdate

logger = get_logger(__name__)


class EventService:
    def __init__(self, event_repo: EventRepository, session: AsyncSession, default_timezone: str):
        self.event_repo = event_repo
        self.session = session
        self.default_timezone = default_timezone

    async def list_events(self, user_id: int) -> list[Event]:
        return await self.event_repo.list_for_owner(user_id)

    async def list_events_on_day(self, user_id: int, day: str, tz: str | None) -> list[Event]:
        """Events starting on ``day`` as seen in timezone ``tz``.

        Raises:
            ValueError: If the date or timezone can't be parsed.
        """
        start, end = local_day_bounds(day, tz, self.default_timezone)
        return await self.event_repo.list_for_owner_between(user_id, start, end)

    async def get_event(self, user_id: int, event_id: int) -> Event | None:
        return await self.event_repo.get_for_owner(event_id, user_id)

    async def create_event(self, user_id: int, data: EventCreate) -> Event:
        event = Event(**data.model_dump(), user_id=user_id)
        self.event_repo.add(event)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(event)
        logger.info("Event created", user_id=user_id, event_id=event.id)
        return event

    async def replace_event(self, user_id: int, event_id: int, data: EventUpdate) -> bool:
        """Overwrite every writable column. Returns False if the caller owns no such event."""
        try:
            updated = await self.event_repo.update_for_owner(event_id, user_id, data.model_dump())
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return updated

    async def delete_event(self, user_id: int, event_id: int) -> bool:
        """Returns False if the caller owns no such event."""
        try:
            deleted = await self.event_repo.delete_for_owner(event_id, user_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        if deleted:
            logger.info("Event deleted", user_id=user_id, event_id=event_id)
        return deleted

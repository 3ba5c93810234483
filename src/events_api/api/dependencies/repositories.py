"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.events_api.api.dependencies.db import DBSession
from src.events_api.repositories import EventRepository, UserRepository


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_event_repository(session: DBSession) -> EventRepository:
    return EventRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
EventRepo = Annotated[EventRepository, Depends(get_event_repository)]

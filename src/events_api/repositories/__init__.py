"""Repository layer - data access abstraction."""

from src.events_api.repositories.base import BaseRepository
from src.events_api.repositories.event import EventRepository
from src.events_api.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "EventRepository",
    "UserRepository",
]

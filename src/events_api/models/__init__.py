"""Model exports.

Import from here: `from src.events_api.models import User, Event`
"""

from src.events_api.models.base import utc_now
from src.events_api.models.event import Event
from src.events_api.models.user import UPDATABLE_PROFILE_FIELDS, User

__all__ = [
    "UPDATABLE_PROFILE_FIELDS",
    "Event",
    "User",
    "utc_now",
]

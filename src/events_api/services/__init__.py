from src.events_api.services.auth_service import AuthService, EmailAlreadyRegisteredError
from src.events_api.services.event_service import EventService
from src.events_api.services.password_reset_service import PasswordResetService
from src.events_api.services.user_service import UnknownProfileFieldError, UserService

__all__ = [
    "AuthService",
    "EmailAlreadyRegisteredError",
    "EventService",
    "PasswordResetService",
    "UnknownProfileFieldError",
    "UserService",
]

from src.events_api.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    LogoutRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    SetNewPasswordRequest,
    TokenPairResponse,
    VerifyResetTokenRequest,
)
from src.events_api.schemas.event import EventCreate, EventCreated, EventRead, EventUpdate
from src.events_api.schemas.messaging import SendMessageRequest
from src.events_api.schemas.user import UserFieldUpdate, UserRead

__all__ = [
    # Auth
    "AuthResponse",
    "ForgotPasswordRequest",
    "LoginRequest",
    "LogoutRequest",
    "MessageResponse",
    "RefreshRequest",
    "RegisterRequest",
    "SetNewPasswordRequest",
    "TokenPairResponse",
    "VerifyResetTokenRequest",
    # Event
    "EventCreate",
    "EventCreated",
    "EventRead",
    "EventUpdate",
    # Messaging
    "SendMessageRequest",
    # User
    "UserFieldUpdate",
    "UserRead",
]

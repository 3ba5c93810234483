"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.events_api.api.dependencies.clients import (
    Issuer,
    Registry,
    SettingsDep,
    UsedResetTokens,
)
from src.events_api.api.dependencies.db import DBSession
from src.events_api.api.dependencies.repositories import EventRepo, UserRepo
from src.events_api.services import AuthService, EventService, PasswordResetService, UserService


def get_auth_service(
    user_repo: UserRepo,
    session: DBSession,
    issuer: Issuer,
    registry: Registry,
    settings: SettingsDep,
) -> AuthService:
    return AuthService(
        user_repo,
        session,
        issuer,
        registry,
        tracking_enabled=settings.session_tracking_enabled,
    )


def get_password_reset_service(
    user_repo: UserRepo,
    session: DBSession,
    issuer: Issuer,
    used_tokens: UsedResetTokens,
    settings: SettingsDep,
) -> PasswordResetService:
    return PasswordResetService(
        user_repo,
        session,
        issuer,
        used_tokens,
        single_use=settings.reset_token_single_use,
    )


def get_user_service(user_repo: UserRepo, session: DBSession) -> UserService:
    return UserService(user_repo, session)


def get_event_service(
    event_repo: EventRepo, session: DBSession, settings: SettingsDep
) -> EventService:
    return EventService(event_repo, session, settings.default_timezone)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
PasswordResetServiceDep = Annotated[PasswordResetService, Depends(get_password_reset_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
EventServiceDep = Annotated[EventService, Depends(get_event_service)]

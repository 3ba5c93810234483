"""FastAPI dependency injection definitions."""

from src.events_api.api.dependencies.auth import CurrentIdentity, get_current_identity
from src.events_api.api.dependencies.clients import (
    BlobStoreDep,
    Issuer,
    RedisClient,
    Registry,
    SettingsDep,
    UsedResetTokens,
    get_blob_store,
    get_redis_client,
    get_session_registry,
    get_token_issuer,
    get_used_reset_tokens,
)
from src.events_api.api.dependencies.db import DBSession, get_db_session
from src.events_api.api.dependencies.repositories import (
    EventRepo,
    UserRepo,
    get_event_repository,
    get_user_repository,
)
from src.events_api.api.dependencies.services import (
    AuthServiceDep,
    EventServiceDep,
    PasswordResetServiceDep,
    UserServiceDep,
    get_auth_service,
    get_event_service,
    get_password_reset_service,
    get_user_service,
)

__all__ = [
    # Auth
    "CurrentIdentity",
    "get_current_identity",
    # Clients
    "BlobStoreDep",
    "Issuer",
    "RedisClient",
    "Registry",
    "SettingsDep",
    "UsedResetTokens",
    "get_blob_store",
    "get_redis_client",
    "get_session_registry",
    "get_token_issuer",
    "get_used_reset_tokens",
    # Database
    "DBSession",
    "get_db_session",
    # Repositories
    "EventRepo",
    "UserRepo",
    "get_event_repository",
    "get_user_repository",
    # Services
    "AuthServiceDep",
    "EventServiceDep",
    "PasswordResetServiceDep",
    "UserServiceDep",
    "get_auth_service",
    "get_event_service",
    "get_password_reset_service",
    "get_user_service",
]

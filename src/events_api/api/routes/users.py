"""Account endpoints: registration, login, token refresh, logout and the profile."""

from fastapi import APIRouter, HTTPException, status
from starlette.requests import Request

from src.events_api.api.dependencies import AuthServiceDep, CurrentIdentity, UserServiceDep
from src.events_api.core.rate_limit import auth_rate_limit, general_rate_limit, limiter
from src.events_api.core.security import TokenIdentity
from src.events_api.schemas.auth import (
    AuthResponse,
    LoginRequest,
    LogoutRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    TokenPairResponse,
)
from src.events_api.schemas.user import UserFieldUpdate, UserRead
from src.events_api.services import EmailAlreadyRegisteredError

router = APIRouter(prefix="/users", tags=["users"])

_TOKEN_PAIR_EXAMPLE = {
    "accessToken": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
    "refreshToken": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
}


@router.post(
    "/register",
    response_model=AuthResponse,
    responses={
        200: {
            "description": "Account created and logged in",
            "content": {
                "application/json": {
                    "example": {"id": 1, "email": "user@example.com", **_TOKEN_PAIR_EXAMPLE}
                }
            },
        },
        400: {"description": "Missing fields, mismatched confirmation or weak password"},
        409: {"description": "User already exists"},
    },
)
@limiter.limit(auth_rate_limit)
async def register(
    request: Request, data: RegisterRequest, service: AuthServiceDep
) -> AuthResponse:
    try:
        return await service.register(data)
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"description": "Invalid credentials"}},
)
@limiter.limit(auth_rate_limit)
async def login(request: Request, data: LoginRequest, service: AuthServiceDep) -> AuthResponse:
    result = await service.login(data.email, data.password)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    return result


@router.post("/logout", response_model=MessageResponse)
async def logout(
    identity: CurrentIdentity,
    service: AuthServiceDep,
    data: LogoutRequest | None = None,
) -> MessageResponse:
    """Revoke the refresh token sent in the body. Access tokens live until they expire."""
    await service.logout(identity, data.refresh_token if data else None)
    return MessageResponse(message="Logged out successfully")


@router.post(
    "/refresh",
    response_model=TokenPairResponse,
    responses={
        200: {
            "description": "New token pair; the submitted refresh token is revoked",
            "content": {"application/json": {"example": _TOKEN_PAIR_EXAMPLE}},
        },
        401: {"description": "No refresh token supplied"},
        403: {"description": "Invalid, revoked or already rotated refresh token"},
    },
)
async def refresh(service: AuthServiceDep, data: RefreshRequest | None = None) -> TokenPairResponse:
    if data is None or not data.refresh_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="You are not authenticated",
        )

    result = await service.refresh(data.refresh_token)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid refresh token",
        )
    return result


def _require_self(user_id: int, identity: TokenIdentity) -> None:
    # Other users' rows are reported as missing rather than forbidden
    if user_id != identity.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


@router.get("/{user_id}", response_model=UserRead)
async def get_user(user_id: int, identity: CurrentIdentity, service: UserServiceDep) -> UserRead:
    _require_self(user_id, identity)
    user = await service.get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserRead.model_validate(user)


@router.patch(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"description": "Field is not editable or value is invalid"},
        404: {"description": "User not found"},
        409: {"description": "Email already in use"},
    },
)
@limiter.limit(general_rate_limit)
async def update_user(
    request: Request,
    user_id: int,
    data: UserFieldUpdate,
    identity: CurrentIdentity,
    service: UserServiceDep,
) -> None:
    """Change one profile field: ``{"key": "first_name", "value": "Ada"}``."""
    _require_self(user_id, identity)
    try:
        updated = await service.update_field(user_id, data.key, data.value)
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except ValueError as e:
        # Unknown key or malformed value
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

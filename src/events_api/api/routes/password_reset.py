"""Forgotten-password flow: request a link, check a token, set a new password."""

from fastapi import APIRouter, HTTPException, status

from src.events_api.api.dependencies import PasswordResetServiceDep
from src.events_api.schemas.auth import (
    ForgotPasswordRequest,
    MessageResponse,
    SetNewPasswordRequest,
    VerifyResetTokenRequest,
)

router = APIRouter(tags=["password-reset"])


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    responses={
        404: {"description": "User not found"},
        500: {"description": "Failed to send email"},
    },
)
async def forgot_password(
    data: ForgotPasswordRequest, service: PasswordResetServiceDep
) -> MessageResponse:
    sent = await service.request_reset(str(data.email))
    if sent is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if not sent:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send email",
        )
    return MessageResponse(message="Password reset email sent")


@router.post(
    "/verify-reset-token",
    response_model=MessageResponse,
    responses={403: {"description": "Invalid token"}},
)
async def verify_reset_token(
    data: VerifyResetTokenRequest, service: PasswordResetServiceDep
) -> MessageResponse:
    if not await service.verify_reset(data.reset_token):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")
    return MessageResponse(message="Token is valid")


@router.post(
    "/set-new-password",
    response_model=MessageResponse,
    responses={403: {"description": "Invalid token"}},
)
async def set_new_password(
    data: SetNewPasswordRequest, service: PasswordResetServiceDep
) -> MessageResponse:
    if not await service.set_new_password(data.reset_token, data.password):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")
    return MessageResponse(message="Password updated")

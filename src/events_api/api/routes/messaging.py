import asyncio

from fastapi import APIRouter, HTTPException, status
from starlette.requests import Request

from src.events_api.api.dependencies import CurrentIdentity
from src.events_api.core.logging import get_logger
from src.events_api.core.notifications import send_sms
from src.events_api.core.rate_limit import general_rate_limit, limiter
from src.events_api.schemas.auth import MessageResponse
from src.events_api.schemas.messaging import SendMessageRequest

logger = get_logger(__name__)

router = APIRouter(tags=["messaging"])


@router.post(
    "/send-message",
    response_model=MessageResponse,
    responses={500: {"description": "Provider failed to send the message"}},
)
@limiter.limit(general_rate_limit)
async def send_message(
    request: Request, data: SendMessageRequest, identity: CurrentIdentity
) -> MessageResponse:
    sent = await asyncio.to_thread(send_sms, data.from_, data.to, data.message)
    if not sent:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send message",
        )
    logger.info("Message sent on behalf of user", user_id=identity.id)
    return MessageResponse(message="Message sent")

"""Event endpoints. Every query is scoped to the authenticated caller."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status
from starlette.requests import Request

from src.events_api.api.dependencies import CurrentIdentity, EventServiceDep
from src.events_api.core.rate_limit import general_rate_limit, limiter
from src.events_api.schemas.event import EventCreate, EventCreated, EventRead, EventUpdate

router = APIRouter(prefix="/events", tags=["events"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")


@router.get("", response_model=list[EventRead])
@limiter.limit(general_rate_limit)
async def list_events(
    request: Request, identity: CurrentIdentity, service: EventServiceDep
) -> list[EventRead]:
    events = await service.list_events(identity.id)
    return [EventRead.model_validate(event) for event in events]


@router.get(
    "/date",
    response_model=list[EventRead],
    responses={400: {"description": "Malformed date or unknown timezone"}},
)
@limiter.limit(general_rate_limit)
async def list_events_on_date(
    request: Request,
    identity: CurrentIdentity,
    service: EventServiceDep,
    date: Annotated[str, Query(min_length=1, examples=["2024-03-15"])],
    tz: Annotated[str | None, Query(examples=["Europe/Madrid", "+02:00"])] = None,
) -> list[EventRead]:
    """Events starting on ``date`` in the caller's timezone ``tz``."""
    try:
        events = await service.list_events_on_day(identity.id, date, tz)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return [EventRead.model_validate(event) for event in events]


@router.get("/{event_id}", response_model=EventRead, responses={404: {"description": "Not found"}})
@limiter.limit(general_rate_limit)
async def get_event(
    request: Request, event_id: int, identity: CurrentIdentity, service: EventServiceDep
) -> EventRead:
    event = await service.get_event(identity.id, event_id)
    if event is None:
        raise _not_found()
    return EventRead.model_validate(event)


@router.post("", response_model=EventCreated, status_code=status.HTTP_201_CREATED)
@limiter.limit(general_rate_limit)
async def create_event(
    request: Request, data: EventCreate, identity: CurrentIdentity, service: EventServiceDep
) -> EventCreated:
    event = await service.create_event(identity.id, data)
    return EventCreated(id=event.id)  # type: ignore[arg-type]


@router.put(
    "/{event_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Not found"}},
)
@limiter.limit(general_rate_limit)
async def replace_event(
    request: Request,
    event_id: int,
    data: EventUpdate,
    identity: CurrentIdentity,
    service: EventServiceDep,
) -> None:
    if not await service.replace_event(identity.id, event_id, data):
        raise _not_found()


@router.delete(
    "/{event_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Not found"}},
)
@limiter.limit(general_rate_limit)
async def delete_event(
    request: Request, event_id: int, identity: CurrentIdentity, service: EventServiceDep
) -> None:
    if not await service.delete_event(identity.id, event_id):
        raise _not_found()

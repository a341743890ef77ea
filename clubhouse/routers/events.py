"""Event API routes. Delegates to the lifecycle manager for every invariant."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from clubhouse.dependencies import get_access_token, get_event_manager
from clubhouse.domain import EventDraft
from clubhouse.schemas.event import EventPayload, EventOut
from clubhouse.services.event_service import EventLifecycleManager
from clubhouse.services.results import ErrorKind, OperationError, Result

logger = logging.getLogger(__name__)
router = APIRouter()

_STATUS_FOR_KIND = {
    ErrorKind.unauthorized: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.invalid_payload: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.storage_error: status.HTTP_502_BAD_GATEWAY,
}


def _http_error(error: OperationError) -> HTTPException:
    status_code = _STATUS_FOR_KIND[error.kind]
    headers = None
    if error.kind == ErrorKind.unauthorized:
        if error.field == "permission":
            status_code = status.HTTP_403_FORBIDDEN
        else:
            headers = {"WWW-Authenticate": "Bearer"}
    detail = {"error": error.kind.value, "message": error.message}
    if error.field:
        detail["field"] = error.field
    return HTTPException(status_code=status_code, detail=detail, headers=headers)


def _unwrap(result: Result):
    if not result.ok:
        raise _http_error(result.error)
    return result.value


def _to_draft(payload: EventPayload) -> EventDraft:
    return EventDraft(
        id=payload.id,
        name=payload.name,
        description=payload.description,
        date=payload.date,
        location=payload.location,
        perks=payload.perks,
        rsvps=payload.rsvps,
        pinned=payload.pinned,
        image_data=payload.image_data,
    )


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventPayload,
    secret: Optional[str] = Depends(get_access_token),
    manager: EventLifecycleManager = Depends(get_event_manager),
):
    """Create an event; an inline image is uploaded before the record is saved."""
    return _unwrap(manager.create_event(secret, _to_draft(payload)))


@router.get("/", response_model=list[EventOut])
def list_events(
    pinned: Optional[bool] = Query(None),
    manager: EventLifecycleManager = Depends(get_event_manager),
):
    """List all events, optionally only pinned or only unpinned ones."""
    events = _unwrap(manager.list_events())
    if pinned is not None:
        events = [e for e in events if e.pinned == pinned]
    return events


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, manager: EventLifecycleManager = Depends(get_event_manager)):
    return _unwrap(manager.get_event(event_id))


@router.put("/{event_id}", response_model=EventOut)
def update_event(
    event_id: str,
    payload: EventPayload,
    secret: Optional[str] = Depends(get_access_token),
    manager: EventLifecycleManager = Depends(get_event_manager),
):
    """Replace an event. Omitting ``image_data`` or ``rsvps`` keeps the stored value."""
    return _unwrap(manager.update_event(secret, _to_draft(payload), event_id))


@router.delete("/{event_id}", response_model=EventOut)
def delete_event(
    event_id: str,
    secret: Optional[str] = Depends(get_access_token),
    manager: EventLifecycleManager = Depends(get_event_manager),
):
    """Delete an event and its image. The record survives if the image cannot be removed."""
    return _unwrap(manager.delete_event(secret, event_id))

# File: campusconnect/api/v1/endpoints/events.py
import io
from datetime import datetime
from typing import Any, Callable, List
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse
from campusconnect import schemas
from campusconnect.api import deps
from campusconnect.core.exceptions import NotFoundError
from campusconnect.services import event_timing
from campusconnect.services.attendee_export import AttendeeExporter
from campusconnect.services.event_store import EventStore
from campusconnect.services.registration_store import RegistrationStore

router = APIRouter()


@router.get("", response_model=List[schemas.Event])
def list_events(
    *,
    view: str = Query("all", pattern="^(all|upcoming|past)$"),
    store: EventStore = Depends(deps.get_event_store),
    clock: Callable[[], datetime] = Depends(deps.get_clock),
) -> Any:
    """All events by date descending, or the upcoming/past views."""
    events = store.list()
    if view != "all":
        upcoming, past = event_timing.split_upcoming_past(events, clock())
        events = upcoming if view == "upcoming" else past
    return [schemas.Event.from_model(e) for e in events]


@router.post("", response_model=schemas.Event, status_code=status.HTTP_201_CREATED)
def create_event(
    *,
    event_in: schemas.EventCreate,
    store: EventStore = Depends(deps.get_event_store),
    current_actor: schemas.Actor = Depends(deps.get_current_actor),
) -> Any:
    event = store.create(event_in, current_actor)
    return schemas.Event.from_model(event)


@router.get("/{event_id}", response_model=schemas.Event)
def get_event(
    event_id: str,
    store: EventStore = Depends(deps.get_event_store),
) -> Any:
    lookup = store.fetch(event_id)
    if not lookup.found:
        raise NotFoundError("Event", event_id)
    return schemas.Event.from_model(lookup.event)


@router.patch("/{event_id}", response_model=schemas.Event)
def update_event(
    *,
    event_id: str,
    event_in: schemas.EventUpdate,
    store: EventStore = Depends(deps.get_event_store),
    current_actor: schemas.Actor = Depends(deps.get_current_actor),
) -> Any:
    event = store.update(event_id, event_in, current_actor)
    return schemas.Event.from_model(event)


@router.get("/{event_id}/registrations/count", response_model=schemas.RegistrationCount)
def get_registration_count(
    event_id: str,
    store: EventStore = Depends(deps.get_event_store),
    registrations: RegistrationStore = Depends(deps.get_registration_store),
) -> Any:
    store.get_or_raise(event_id)
    return schemas.RegistrationCount(event_id=event_id, count=registrations.count_for_event(event_id))


@router.get("/{event_id}/export")
def export_attendees(
    event_id: str,
    exporter: AttendeeExporter = Depends(deps.get_attendee_exporter),
    current_actor: schemas.Actor = Depends(deps.get_current_actor),
):
    """Download checked-in attendees as CSV (organizer only, after the event)."""
    export = exporter.export(event_id, current_actor)
    return StreamingResponse(
        io.BytesIO(export.content.encode("utf-8")),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )

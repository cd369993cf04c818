# File: campusconnect/api/v1/endpoints/registrations.py
from datetime import datetime
from typing import Any, Callable, List
from fastapi import APIRouter, Depends, status
from campusconnect import schemas
from campusconnect.api import deps
from campusconnect.services import event_timing
from campusconnect.services.event_store import EventStore
from campusconnect.services.registration_store import RegistrationStore

router = APIRouter()


@router.get("", response_model=List[schemas.Registration])
def list_registrations(
    registrations: RegistrationStore = Depends(deps.get_registration_store),
    current_actor: schemas.Actor = Depends(deps.get_current_actor),
) -> Any:
    """Students get their own registrations, organizers get all of them."""
    return registrations.list_for(current_actor)


@router.get("/me", response_model=List[schemas.RegisteredEvent])
def list_my_registered_events(
    registrations: RegistrationStore = Depends(deps.get_registration_store),
    store: EventStore = Depends(deps.get_event_store),
    clock: Callable[[], datetime] = Depends(deps.get_clock),
    current_actor: schemas.Actor = Depends(deps.get_current_actor),
) -> Any:
    """The actor's registrations joined with their events, soonest first."""
    now = clock()
    events = {e.id: e for e in store.list()}
    mine = [r for r in registrations.list_for(current_actor) if r.user_id == current_actor.id]

    items = []
    for registration in mine:
        event = events.get(registration.event_id)
        if event is None:
            continue
        items.append(schemas.RegisteredEvent(
            registration=schemas.Registration.model_validate(registration),
            event=schemas.Event.from_model(event),
            upcoming=event_timing.is_upcoming(event, now),
        ))
    items.sort(key=lambda item: (item.event.date, item.event.time))
    return items


@router.post("/{event_id}", response_model=schemas.Registration, status_code=status.HTTP_201_CREATED)
def register_for_event(
    event_id: str,
    registrations: RegistrationStore = Depends(deps.get_registration_store),
    current_actor: schemas.Actor = Depends(deps.get_current_actor),
) -> Any:
    """Idempotent: registering twice returns the existing registration."""
    return registrations.register(event_id, current_actor)


@router.get("/{event_id}/status", response_model=schemas.RegistrationStatus)
def get_registration_status(
    event_id: str,
    registrations: RegistrationStore = Depends(deps.get_registration_store),
    store: EventStore = Depends(deps.get_event_store),
    clock: Callable[[], datetime] = Depends(deps.get_clock),
    current_actor: schemas.Actor = Depends(deps.get_current_actor),
) -> Any:
    event = store.get_or_raise(event_id)
    return schemas.RegistrationStatus(
        event_id=event_id,
        registered=registrations.is_registered(event_id, current_actor),
        registration_open=event_timing.is_registration_open(event, clock()),
    )

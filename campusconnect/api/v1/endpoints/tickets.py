from typing import Any
from fastapi import APIRouter, Depends
from campusconnect import schemas
from campusconnect.api import deps
from campusconnect.core.exceptions import NotFoundError
from campusconnect.models.registration import registration_key
from campusconnect.services import ticket_codec
from campusconnect.services.event_store import EventStore
from campusconnect.services.registration_store import RegistrationStore

router = APIRouter()


@router.get("/{event_id}", response_model=schemas.TicketResponse)
def get_my_ticket(
    event_id: str,
    store: EventStore = Depends(deps.get_event_store),
    registrations: RegistrationStore = Depends(deps.get_registration_store),
    current_actor: schemas.Actor = Depends(deps.get_current_actor),
) -> Any:
    """QR ticket for the actor's own registration."""
    event = store.get_or_raise(event_id)
    if not registrations.is_registered(event_id, current_actor):
        raise NotFoundError("Registration", registration_key(current_actor.id, event_id))

    payload = ticket_codec.build_payload(current_actor.id, current_actor.name, event.id, event.title)
    qr_text = ticket_codec.encode_payload(payload)
    return schemas.TicketResponse(
        payload=payload,
        qr_text=qr_text,
        qr_data_url=ticket_codec.render_qr_data_url(qr_text),
    )

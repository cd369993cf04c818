"""Registration store adapter over the ``registrations`` table."""
import logging
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from campusconnect import crud
from campusconnect.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from campusconnect.models.registration import Registration, registration_key
from campusconnect.schemas.user import Actor
from campusconnect.services import event_timing

logger = logging.getLogger(__name__)


class RegistrationStore:
    """
    One registration per (user, event), keyed ``{user_id}-{event_id}``.

    Students only ever query their own rows; organizers query every row.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = datetime.now):
        self.db = db
        self.clock = clock

    def list_for(self, actor: Optional[Actor]) -> List[Registration]:
        if actor is None:
            return []
        try:
            if actor.is_organizer:
                return crud.registration.get_multi(self.db, limit=None)
            return crud.registration.get_by_user(self.db, user_id=actor.id)
        except SQLAlchemyError as e:
            raise PersistenceError("list registrations", str(e))

    def get(self, registration_id: str, actor: Optional[Actor]) -> Optional[Registration]:
        """Look up a registration within the actor's visibility scope."""
        if actor is None:
            return None
        try:
            registration = crud.registration.get(self.db, registration_id)
        except SQLAlchemyError as e:
            raise PersistenceError("read registration", str(e))
        if registration is None:
            return None
        if not actor.is_organizer and registration.user_id != actor.id:
            return None
        return registration

    def is_registered(self, event_id: str, actor: Optional[Actor]) -> bool:
        if actor is None:
            return False
        return self.get(registration_key(actor.id, event_id), actor) is not None

    def count_for_event(self, event_id: str) -> int:
        try:
            return crud.registration.count_by_event(self.db, event_id=event_id)
        except SQLAlchemyError as e:
            raise PersistenceError("count registrations", str(e))

    def register(self, event_id: str, actor: Optional[Actor]) -> Registration:
        if actor is None:
            raise AuthenticationError("You must be logged in to register")
        if not actor.is_student:
            raise AuthorizationError("Only students can register for events")

        existing = self.get(registration_key(actor.id, event_id), actor)
        if existing is not None:
            return existing

        event = crud.event.get(self.db, event_id)
        if event is None:
            raise NotFoundError("Event", event_id)

        now = self.clock()
        if not event_timing.is_registration_open(event, now):
            raise ValidationError("Registration for this event is closed", field_name="event_id")

        try:
            registration = crud.registration.create_for(
                self.db, user_id=actor.id, event_id=event_id, registration_date=now
            )
        except IntegrityError:
            # A concurrent request wrote the same key first
            self.db.rollback()
            return crud.registration.get(self.db, registration_key(actor.id, event_id))
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to register {actor.id} for {event_id}: {str(e)}")
            raise PersistenceError("create registration", str(e))

        logger.info(f"User {actor.id} registered for event {event_id}")
        return registration

"""Event store adapter over the ``events`` table."""
import datetime as dt
import enum
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campusconnect import crud
from campusconnect.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from campusconnect.models.event import Event
from campusconnect.schemas.event import EventCreate, EventUpdate
from campusconnect.schemas.user import Actor

logger = logging.getLogger(__name__)

# Columns an update may change but never clear
REQUIRED_EVENT_FIELDS = ("title", "description", "date", "time", "location", "category")


class LookupState(enum.Enum):
    LOADING = "loading"
    FOUND = "found"
    NOT_FOUND = "not_found"


@dataclass
class EventLookup:
    state: LookupState
    event: Optional[Event] = None

    @classmethod
    def loading(cls) -> "EventLookup":
        return cls(LookupState.LOADING)

    @property
    def found(self) -> bool:
        return self.state == LookupState.FOUND


def is_event_owner(event: Event, actor: Optional[Actor]) -> bool:
    """Organizer role plus a matching organizer contact."""
    return actor is not None and actor.is_organizer and actor.email == event.organizer_contact


def ensure_event_owner(event: Event, actor: Optional[Actor]) -> None:
    if actor is None:
        raise AuthenticationError()
    if not is_event_owner(event, actor):
        raise AuthorizationError("Only the event's organizer can manage this event")


def ensure_valid_schedule(start: Optional[dt.time], end: Optional[dt.time]) -> None:
    if start is not None and end is not None and end <= start:
        raise ValidationError("End time must be after the start time", field_name="end_time")


class EventStore:
    """
    CRUD over events plus a local snapshot.

    ``list`` and ``refresh`` reload the snapshot from the store; ``get_by_id``
    answers from the snapshot and reports LOADING until the first refresh.
    """

    def __init__(self, db: Session):
        self.db = db
        self._snapshot: Optional[Dict[str, Event]] = None

    def list(self) -> List[Event]:
        """All events, date descending."""
        try:
            events = crud.event.get_all_by_date_desc(self.db)
        except SQLAlchemyError as e:
            logger.error(f"Failed to list events: {str(e)}")
            raise PersistenceError("list events", str(e))
        self._snapshot = {e.id: e for e in events}
        return events

    def refresh(self) -> None:
        self.list()

    def get_by_id(self, event_id: str) -> EventLookup:
        if self._snapshot is None:
            return EventLookup.loading()
        event = self._snapshot.get(event_id)
        if event is None:
            return EventLookup(LookupState.NOT_FOUND)
        return EventLookup(LookupState.FOUND, event)

    def fetch(self, event_id: str) -> EventLookup:
        """Read one event straight from the store (never LOADING)."""
        try:
            event = crud.event.get(self.db, event_id)
        except SQLAlchemyError as e:
            raise PersistenceError("read event", str(e))
        if event is None:
            return EventLookup(LookupState.NOT_FOUND)
        if self._snapshot is not None:
            self._snapshot[event.id] = event
        return EventLookup(LookupState.FOUND, event)

    def get_or_raise(self, event_id: str) -> Event:
        lookup = self.fetch(event_id)
        if not lookup.found:
            raise NotFoundError("Event", event_id)
        return lookup.event

    def create(self, data: EventCreate, actor: Optional[Actor]) -> Event:
        if actor is None:
            raise AuthenticationError()
        if not actor.is_organizer:
            raise AuthorizationError("Only organizers can create events")
        ensure_valid_schedule(data.time, data.end_time)

        try:
            event = crud.event.create_with_organizer(
                self.db, obj_in=data, organizer_name=actor.name, organizer_contact=actor.email
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create event '{data.title}': {str(e)}")
            # Snapshot is left untouched on failure
            raise PersistenceError("create event", str(e))

        logger.info(f"Event {event.id} created by {actor.email}")
        if self._snapshot is not None:
            self._snapshot[event.id] = event
        return event

    def update(self, event_id: str, data: EventUpdate, actor: Optional[Actor]) -> Event:
        event = self.get_or_raise(event_id)
        ensure_event_owner(event, actor)

        for field in REQUIRED_EVENT_FIELDS:
            if field in data.model_fields_set and getattr(data, field) is None:
                raise ValidationError(f"{field} cannot be cleared", field_name=field)
        ensure_valid_schedule(
            data.time if "time" in data.model_fields_set else event.time,
            data.end_time if "end_time" in data.model_fields_set else event.end_time,
        )

        try:
            event = crud.event.update_fields(self.db, db_obj=event, obj_in=data)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update event {event_id}: {str(e)}")
            raise PersistenceError("update event", str(e))

        logger.info(f"Event {event_id} updated by {actor.email}")
        return event

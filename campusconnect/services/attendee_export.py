"""Attendee export for concluded events, restricted to the event's organizer."""
import csv
import io
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campusconnect import crud
from campusconnect.core.exceptions import (
    EventNotConcludedError,
    NoAttendeesError,
    PersistenceError,
)
from campusconnect.schemas.user import Actor
from campusconnect.services import event_timing
from campusconnect.services.event_store import EventStore, ensure_event_owner

logger = logging.getLogger(__name__)

CSV_HEADER = [
    "Name", "Email", "Student ID", "Registration Date", "Checked In At",
    "Event Title", "Event Date", "Event Time", "Location",
]
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class AttendeeRecord:
    name: str
    email: str
    student_id: str
    registration_date: str
    checked_in_at: str
    event_title: str
    event_date: str
    event_time: str
    location: str

    def as_row(self) -> List[str]:
        return [
            self.name, self.email, self.student_id, self.registration_date,
            self.checked_in_at, self.event_title, self.event_date,
            self.event_time, self.location,
        ]


@dataclass
class AttendeeExport:
    filename: str
    content: str
    records: List[AttendeeRecord]


def sanitize_filename(title: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "_", title.lower()).strip("_")
    return slug or "event"


def render_csv(records: List[AttendeeRecord]) -> str:
    output = io.StringIO()
    csv.writer(output, lineterminator="\n").writerow(CSV_HEADER)
    # Data fields are always quoted so embedded commas survive
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for record in records:
        writer.writerow(record.as_row())
    return output.getvalue()


class AttendeeExporter:

    def __init__(
        self,
        db: Session,
        event_store: Optional[EventStore] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.db = db
        self.clock = clock
        self.event_store = event_store or EventStore(db)

    def export(self, event_id: str, actor: Optional[Actor]) -> AttendeeExport:
        event = self.event_store.get_or_raise(event_id)
        ensure_event_owner(event, actor)

        if not event_timing.has_concluded(event, self.clock()):
            raise EventNotConcludedError(event_id)

        try:
            registrations = crud.registration.get_by_event(self.db, event_id=event_id, checked_in=True)
            if not registrations:
                raise NoAttendeesError(event_id)
            users = crud.user.get_many(self.db, ids=[r.user_id for r in registrations])
        except SQLAlchemyError as e:
            logger.error(f"Failed to load attendees for {event_id}: {str(e)}")
            raise PersistenceError("export attendees", str(e))

        users_by_id = {u.id: u for u in users}
        event_date = event.date.isoformat()
        event_time = event.time.strftime("%H:%M")

        records = []
        for registration in registrations:
            user = users_by_id.get(registration.user_id)
            if user is None:
                logger.warning(f"Registration {registration.id} has no user profile")
            records.append(AttendeeRecord(
                name=user.name if user else "Unknown",
                email=user.email if user else "N/A",
                student_id=(user.student_id if user and user.student_id else "N/A"),
                registration_date=registration.registration_date.strftime(TIMESTAMP_FORMAT),
                checked_in_at=(
                    registration.checked_in_at.strftime(TIMESTAMP_FORMAT)
                    if registration.checked_in_at else "Not specified"
                ),
                event_title=event.title,
                event_date=event_date,
                event_time=event_time,
                location=event.location or "",
            ))

        filename = f"{sanitize_filename(event.title)}_attendees_{event_date}.csv"
        logger.info(f"Exported {len(records)} attendees for event {event_id}")
        return AttendeeExport(filename=filename, content=render_csv(records), records=records)

"""
Attendance verification: validate a scanned ticket and check the attendee in.

Checks run in a fixed order and the first failing one decides the outcome:

1. payload does not decode          -> invalid ("malformed")
2. event unknown                    -> invalid ("unknown event")
3. before the event start           -> event_not_active ("check-in not yet open")
4. after the event end (if any)     -> event_not_active ("check-in closed")
5. registration unknown             -> invalid ("registration not found")
6. registration already checked in  -> already_scanned ("already used")
7. otherwise                        -> valid, checked_in flips to true
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campusconnect import crud
from campusconnect.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    PersistenceError,
)
from campusconnect.schemas.attendance import ScanOutcome, ScanResult
from campusconnect.schemas.user import Actor
from campusconnect.services import event_timing
from campusconnect.services.event_store import EventStore
from campusconnect.services.registration_store import RegistrationStore
from campusconnect.services.ticket_codec import decode_payload

logger = logging.getLogger(__name__)

REASON_MALFORMED = "malformed"
REASON_UNKNOWN_EVENT = "unknown event"
REASON_NOT_YET_OPEN = "check-in not yet open"
REASON_CLOSED = "check-in closed"
REASON_REGISTRATION_NOT_FOUND = "registration not found"
REASON_ALREADY_USED = "already used"


class AttendanceVerifier:

    def __init__(
        self,
        db: Session,
        event_store: Optional[EventStore] = None,
        registration_store: Optional[RegistrationStore] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.db = db
        self.clock = clock
        self.event_store = event_store or EventStore(db)
        self.registration_store = registration_store or RegistrationStore(db, clock=clock)

    def verify(self, raw: Optional[str], actor: Optional[Actor]) -> ScanResult:
        if actor is None:
            raise AuthenticationError()
        if not actor.is_organizer:
            raise AuthorizationError("You must be an organizer to scan tickets")

        payload = decode_payload(raw)
        if payload is None:
            logger.warning("Scanned code is not a valid ticket payload")
            return ScanResult(
                outcome=ScanOutcome.INVALID,
                reason=REASON_MALFORMED,
                message="The QR code is malformed or could not be read.",
            )

        base = {
            "user_name": payload.user_name,
            "event_name": payload.event_name,
            "registration_id": payload.registration_id,
        }

        lookup = self.event_store.fetch(payload.event_id)
        if not lookup.found:
            return ScanResult(
                outcome=ScanOutcome.INVALID,
                reason=REASON_UNKNOWN_EVENT,
                message="This QR code does not correspond to a known event.",
                **base,
            )
        event = lookup.event

        now = self.clock()
        start = event_timing.event_start(event)
        if now < start:
            return ScanResult(
                outcome=ScanOutcome.EVENT_NOT_ACTIVE,
                reason=REASON_NOT_YET_OPEN,
                message=f"Check-in is not yet open. The event starts at {event_timing.format_wall_clock(start)}.",
                **base,
            )

        end = event_timing.event_end(event)
        if end is not None and now > end:
            return ScanResult(
                outcome=ScanOutcome.EVENT_NOT_ACTIVE,
                reason=REASON_CLOSED,
                message=f"Check-in is closed. The event ended at {event_timing.format_wall_clock(end)}.",
                **base,
            )

        registration = self.registration_store.get(payload.registration_id, actor)
        if registration is None or registration.event_id != event.id:
            return ScanResult(
                outcome=ScanOutcome.INVALID,
                reason=REASON_REGISTRATION_NOT_FOUND,
                message="A valid registration was not found for this ticket.",
                **base,
            )

        if registration.checked_in:
            return self._already_scanned(registration, base)

        try:
            flipped = crud.registration.mark_checked_in(
                self.db, registration_id=registration.id, checked_in_at=now
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to mark attendance for {registration.id}: {str(e)}")
            raise PersistenceError("mark attendance", str(e))

        if not flipped:
            # Another scanner checked this ticket in between our read and write
            self.db.refresh(registration)
            return self._already_scanned(registration, base)

        logger.info(f"Checked in {registration.id} by {actor.email}")
        return ScanResult(
            outcome=ScanOutcome.VALID,
            message=f"{payload.user_name} is checked in to {event.title}.",
            checked_in_at=now,
            **base,
        )

    def _already_scanned(self, registration, base: dict) -> ScanResult:
        return ScanResult(
            outcome=ScanOutcome.ALREADY_SCANNED,
            reason=REASON_ALREADY_USED,
            message="This ticket has already been checked in.",
            checked_in_at=registration.checked_in_at,
            **base,
        )

from datetime import datetime, time

import pytest

from campusconnect import crud
from campusconnect.core.exceptions import AuthorizationError
from campusconnect.models.registration import Registration
from campusconnect.schemas.attendance import ScanOutcome
from campusconnect.services import ticket_codec
from campusconnect.services.attendance_verification import (
    REASON_ALREADY_USED,
    REASON_CLOSED,
    REASON_MALFORMED,
    REASON_NOT_YET_OPEN,
    REASON_REGISTRATION_NOT_FOUND,
    REASON_UNKNOWN_EVENT,
    AttendanceVerifier,
)
from campusconnect.services.registration_store import RegistrationStore


@pytest.fixture
def robotics(organizer, make_event):
    return make_event(organizer)


@pytest.fixture
def ticket(db, clock, student, robotics):
    RegistrationStore(db, clock=clock).register(robotics.id, student)
    payload = ticket_codec.build_payload(student.id, student.name, robotics.id, robotics.title)
    return ticket_codec.encode_payload(payload)


def _verifier(db, clock):
    return AttendanceVerifier(db, clock=clock)


def test_checkin_timeline(db, clock, organizer, student, robotics, ticket):
    verifier = _verifier(db, clock)

    clock.now = datetime(2025, 7, 15, 9, 0)
    early = verifier.verify(ticket, organizer)
    assert early.outcome == ScanOutcome.EVENT_NOT_ACTIVE
    assert early.reason == REASON_NOT_YET_OPEN
    assert "10:00 AM" in early.message

    clock.now = datetime(2025, 7, 15, 11, 0)
    valid = verifier.verify(ticket, organizer)
    assert valid.outcome == ScanOutcome.VALID
    assert valid.user_name == "Sam Student"
    assert valid.event_name == "Intro to Robotics"
    assert valid.checked_in_at == clock.now

    rescan = verifier.verify(ticket, organizer)
    assert rescan.outcome == ScanOutcome.ALREADY_SCANNED
    assert rescan.reason == REASON_ALREADY_USED

    clock.now = datetime(2025, 7, 15, 12, 30)
    late = verifier.verify(ticket, organizer)
    assert late.outcome == ScanOutcome.EVENT_NOT_ACTIVE
    assert late.reason == REASON_CLOSED
    assert "12:00 PM" in late.message

    registration = db.get(Registration, f"{student.id}-{robotics.id}")
    assert registration.checked_in is True
    assert registration.checked_in_at == datetime(2025, 7, 15, 11, 0)


def test_not_active_regardless_of_registration(db, clock, organizer, robotics):
    payload = ticket_codec.build_payload("ghost", "Ghost", robotics.id, robotics.title)
    clock.now = datetime(2025, 7, 15, 9, 59)

    result = _verifier(db, clock).verify(ticket_codec.encode_payload(payload), organizer)
    assert result.outcome == ScanOutcome.EVENT_NOT_ACTIVE


@pytest.mark.parametrize("raw", ["", "not json", "[1, 2]", '{"userId": "u1"}'])
def test_malformed_payload(db, clock, organizer, raw):
    result = _verifier(db, clock).verify(raw, organizer)
    assert result.outcome == ScanOutcome.INVALID
    assert result.reason == REASON_MALFORMED


def test_unknown_event(db, clock, organizer, student):
    payload = ticket_codec.build_payload(student.id, student.name, "no-such-event", "Mystery")
    result = _verifier(db, clock).verify(ticket_codec.encode_payload(payload), organizer)

    assert result.outcome == ScanOutcome.INVALID
    assert result.reason == REASON_UNKNOWN_EVENT


def test_registration_not_found(db, clock, organizer, student, robotics):
    payload = ticket_codec.build_payload(student.id, student.name, robotics.id, robotics.title)
    clock.now = datetime(2025, 7, 15, 10, 30)

    result = _verifier(db, clock).verify(ticket_codec.encode_payload(payload), organizer)
    assert result.outcome == ScanOutcome.INVALID
    assert result.reason == REASON_REGISTRATION_NOT_FOUND


def test_open_ended_event_accepts_late_scans(db, clock, organizer, student, make_event):
    event = make_event(organizer, title="Open Lab", end=None)
    RegistrationStore(db, clock=clock).register(event.id, student)
    raw = ticket_codec.encode_payload(ticket_codec.build_payload(student.id, student.name, event.id, event.title))

    clock.now = datetime(2025, 7, 15, 23, 0)
    assert _verifier(db, clock).verify(raw, organizer).outcome == ScanOutcome.VALID


def test_only_organizers_verify(db, clock, student, ticket):
    with pytest.raises(AuthorizationError):
        _verifier(db, clock).verify(ticket, student)


def test_checkin_flips_once(db, clock, student, robotics, ticket):
    registration_id = f"{student.id}-{robotics.id}"
    at = datetime(2025, 7, 15, 10, 5)

    assert crud.registration.mark_checked_in(db, registration_id=registration_id, checked_in_at=at)
    assert not crud.registration.mark_checked_in(db, registration_id=registration_id, checked_in_at=at)


def test_lost_race_reports_already_scanned(db, clock, organizer, ticket, monkeypatch):
    monkeypatch.setattr(crud.registration, "mark_checked_in", lambda *args, **kwargs: False)
    clock.now = datetime(2025, 7, 15, 10, 30)

    result = _verifier(db, clock).verify(ticket, organizer)
    assert result.outcome == ScanOutcome.ALREADY_SCANNED

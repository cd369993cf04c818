import csv
import io
from datetime import date, datetime, time

import pytest

from campusconnect import crud
from campusconnect.core.exceptions import (
    AuthorizationError,
    EventNotConcludedError,
    NoAttendeesError,
)
from campusconnect.models.user import UserRole
from campusconnect.services.attendee_export import (
    CSV_HEADER,
    AttendeeExporter,
    sanitize_filename,
)
from campusconnect.services.registration_store import RegistrationStore


@pytest.fixture
def robotics(organizer, make_event):
    return make_event(organizer, title="Intro to Robotics: Part 1", location="Hall A, Room 2")


def _check_in(db, user, event, at):
    crud.registration.mark_checked_in(db, registration_id=f"{user.id}-{event.id}", checked_in_at=at)


def test_export_requires_owner(db, clock, organizer, make_user, robotics):
    other = make_user(UserRole.ORGANIZER)
    clock.now = datetime(2025, 7, 16, 9, 0)

    with pytest.raises(AuthorizationError):
        AttendeeExporter(db, clock=clock).export(robotics.id, other)


def test_export_requires_concluded_event(db, clock, organizer, robotics):
    clock.now = datetime(2025, 7, 15, 11, 0)
    with pytest.raises(EventNotConcludedError):
        AttendeeExporter(db, clock=clock).export(robotics.id, organizer)


def test_export_without_checkins(db, clock, organizer, student, robotics):
    RegistrationStore(db, clock=clock).register(robotics.id, student)
    clock.now = datetime(2025, 7, 16, 9, 0)

    with pytest.raises(NoAttendeesError):
        AttendeeExporter(db, clock=clock).export(robotics.id, organizer)


def test_export_lists_checked_in_attendees(db, clock, organizer, student, make_user, robotics):
    absent = make_user(UserRole.STUDENT, name="Absent Al")
    store = RegistrationStore(db, clock=clock)
    store.register(robotics.id, student)
    store.register(robotics.id, absent)
    _check_in(db, student, robotics, datetime(2025, 7, 15, 10, 5))

    clock.now = datetime(2025, 7, 16, 9, 0)
    export = AttendeeExporter(db, clock=clock).export(robotics.id, organizer)

    assert export.filename == "intro_to_robotics_part_1_attendees_2025-07-15.csv"
    assert len(export.records) == 1

    lines = export.content.splitlines()
    assert lines[0] == ",".join(CSV_HEADER)
    assert lines[1].startswith('"Sam Student","sam@campus.edu","S-42"')

    rows = list(csv.reader(io.StringIO(export.content)))
    assert rows[1] == [
        "Sam Student", "sam@campus.edu", "S-42", "2025-07-01 09:00:00", "2025-07-15 10:05:00",
        "Intro to Robotics: Part 1", "2025-07-15", "10:00", "Hall A, Room 2",
    ]


def test_sanitize_filename():
    assert sanitize_filename("Spring Gala 2025!") == "spring_gala_2025"
    assert sanitize_filename("***") == "event"


def test_export_fills_missing_profile_and_checkin_time(db, clock, organizer, robotics):
    # Checked-in row whose user has no profile and no recorded check-in time
    registration = crud.registration.create_for(
        db, user_id="deleted-user", event_id=robotics.id, registration_date=datetime(2025, 7, 2, 8, 30)
    )
    registration.checked_in = True
    db.commit()

    clock.now = datetime(2025, 7, 16, 9, 0)
    export = AttendeeExporter(db, clock=clock).export(robotics.id, organizer)

    record = export.records[0]
    assert record.name == "Unknown"
    assert record.email == "N/A"
    assert record.student_id == "N/A"
    assert record.checked_in_at == "Not specified"
    assert export.content.splitlines()[1].startswith(
        '"Unknown","N/A","N/A","2025-07-02 08:30:00","Not specified"'
    )

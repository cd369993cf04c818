import os

# Point the app at a throwaway database before anything reads settings
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, datetime, time
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from campusconnect import models  # noqa: F401
from campusconnect.api import deps
from campusconnect.core import security
from campusconnect.db.database import Base, get_db
from campusconnect.main import app
from campusconnect.models.user import UserRole
from campusconnect.schemas.auth import SignupRequest
from campusconnect.schemas.event import EventCreate
from campusconnect.services.event_store import EventStore
from campusconnect.services.identity_provider import IdentityProvider


class FrozenClock:
    """Callable clock whose current time is set by the test."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def clock():
    # Two weeks before the sample event used throughout the tests
    return FrozenClock(datetime(2025, 7, 1, 9, 0))


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(role: UserRole = UserRole.STUDENT, name: Optional[str] = None,
                   email: Optional[str] = None, student_id: Optional[str] = None):
        counter["n"] += 1
        n = counter["n"]
        if role == UserRole.STUDENT and student_id is None:
            student_id = f"S{1000 + n}"
        return IdentityProvider(db).signup(SignupRequest(
            name=name or f"{role.value.title()} {n}",
            email=email or f"{role.value}{n}@campus.edu",
            password="secret123",
            role=role,
            student_id=student_id,
        ))

    return _make_user


@pytest.fixture
def organizer(make_user):
    return make_user(UserRole.ORGANIZER, name="Olive Organizer", email="olive@campus.edu")


@pytest.fixture
def student(make_user):
    return make_user(UserRole.STUDENT, name="Sam Student", email="sam@campus.edu", student_id="S-42")


@pytest.fixture
def make_event(db):
    def _make_event(actor, title: str = "Intro to Robotics", event_date: date = date(2025, 7, 15),
                    start: time = time(10, 0), end: Optional[time] = time(12, 0), **extra):
        data = EventCreate(
            title=title,
            description=extra.pop("description", "Build and program a small robot."),
            date=event_date,
            time=start,
            end_time=end,
            location=extra.pop("location", "Engineering Hall 101"),
            category=extra.pop("category", "Workshop"),
            **extra,
        )
        return EventStore(db).create(data, actor)

    return _make_event


@pytest.fixture
def auth_headers():
    def _auth_headers(actor):
        token = security.create_access_token(subject=actor.id)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def client(db, clock):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_clock] = lambda: clock
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

# File: campusconnect/models/registration.py
from sqlalchemy import Column, String, Boolean, DateTime
from campusconnect.models.base import BaseModel


def registration_key(user_id: str, event_id: str) -> str:
    """Deterministic id that allows at most one registration per user and event."""
    return f"{user_id}-{event_id}"


class Registration(BaseModel):
    __tablename__ = "registrations"

    # id is always registration_key(user_id, event_id)
    user_id = Column(String(128), nullable=False, index=True)
    event_id = Column(String(128), nullable=False, index=True)
    registration_date = Column(DateTime, nullable=False)
    checked_in = Column(Boolean, nullable=False, default=False)
    checked_in_at = Column(DateTime, nullable=True)

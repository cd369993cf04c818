from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from campusconnect.schemas.event import Event


class Registration(BaseModel):
    id: str
    user_id: str
    event_id: str
    registration_date: datetime
    checked_in: bool = False
    checked_in_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RegistrationStatus(BaseModel):
    event_id: str
    registered: bool
    registration_open: bool


class RegistrationCount(BaseModel):
    event_id: str
    count: int


class RegisteredEvent(BaseModel):
    registration: Registration
    event: Event
    upcoming: bool

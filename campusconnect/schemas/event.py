# File: campusconnect/schemas/event.py
import datetime as dt
from pydantic import BaseModel, field_serializer
from typing import Optional


class Banner(BaseModel):
    url: str
    generated_at: dt.datetime
    prompt: str


class Organizer(BaseModel):
    name: str
    contact: str


class EventBase(BaseModel):
    title: str
    description: str = ""
    date: dt.date
    time: dt.time
    end_time: Optional[dt.time] = None
    location: str = ""
    category: str = ""
    banner: Optional[Banner] = None

    @field_serializer("time", "end_time", when_used="json")
    def serialize_wall_clock(self, value: Optional[dt.time]) -> Optional[str]:
        return value.strftime("%H:%M") if value is not None else None


class EventCreate(EventBase):
    pass


class EventUpdate(BaseModel):
    """Partial update; send ``"banner": null`` to clear the banner."""

    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    location: Optional[str] = None
    category: Optional[str] = None
    banner: Optional[Banner] = None


class Event(EventBase):
    id: str
    organizer: Organizer

    @classmethod
    def from_model(cls, event) -> "Event":
        banner = None
        if event.banner_url:
            banner = Banner(
                url=event.banner_url,
                generated_at=event.banner_generated_at,
                prompt=event.banner_prompt or "",
            )
        return cls(
            id=event.id,
            title=event.title,
            description=event.description or "",
            date=event.date,
            time=event.time,
            end_time=event.end_time,
            location=event.location or "",
            category=event.category or "",
            organizer=Organizer(name=event.organizer_name, contact=event.organizer_contact),
            banner=banner,
        )

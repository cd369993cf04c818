# File: campusconnect/models/event.py
from sqlalchemy import Column, String, Text, Date, Time, DateTime
from campusconnect.models.base import BaseModel


class Event(BaseModel):
    __tablename__ = "events"

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    date = Column(Date, nullable=False, index=True)
    time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=True)
    location = Column(String(255), nullable=False, default="")
    category = Column(String(100), nullable=False, default="")

    # Organizer (contact is the owning user's email and never changes)
    organizer_name = Column(String(255), nullable=False)
    organizer_contact = Column(String(255), nullable=False, index=True)

    # Banner
    banner_url = Column(String(1000), nullable=True)
    banner_generated_at = Column(DateTime, nullable=True)
    banner_prompt = Column(Text, nullable=True)

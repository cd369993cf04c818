"""
Timing rules shared by registration, check-in, export and the event listings.

All functions are pure: they take the event (ORM row or schema, anything with
``date``, ``time`` and ``end_time``) and the current wall-clock time.
"""
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Tuple, TypeVar

from campusconnect.core.config import settings

EventT = TypeVar("EventT")


def event_start(event) -> datetime:
    return datetime.combine(event.date, event.time)


def event_end(event) -> Optional[datetime]:
    if event.end_time is None:
        return None
    return datetime.combine(event.date, event.end_time)


def registration_cutoff(event, cutoff_minutes: Optional[int] = None) -> datetime:
    if cutoff_minutes is None:
        cutoff_minutes = settings.REGISTRATION_CUTOFF_MINUTES
    return event_start(event) - timedelta(minutes=cutoff_minutes)


def is_registration_open(event, now: datetime, cutoff_minutes: Optional[int] = None) -> bool:
    """Registration closes a fixed number of minutes before the event starts."""
    return now < registration_cutoff(event, cutoff_minutes)


def is_checkin_window_open(event, now: datetime) -> bool:
    if now < event_start(event):
        return False
    end = event_end(event)
    return end is None or now <= end


def has_concluded(event, now: datetime) -> bool:
    """An event has concluded once its end time (or start time, when no end is set) has passed."""
    end = event_end(event) or event_start(event)
    return now > end


def is_upcoming(event, now: datetime) -> bool:
    return event_start(event) >= now


def split_upcoming_past(events: Iterable[EventT], now: datetime) -> Tuple[List[EventT], List[EventT]]:
    """Upcoming events soonest first, past events most recent first."""
    events = list(events)
    upcoming = sorted((e for e in events if is_upcoming(e, now)), key=event_start)
    past = sorted((e for e in events if not is_upcoming(e, now)), key=event_start, reverse=True)
    return upcoming, past


def format_wall_clock(value: datetime) -> str:
    """``10:00 AM`` style time used in check-in messages."""
    return value.strftime("%I:%M %p").lstrip("0")

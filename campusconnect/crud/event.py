# File: campusconnect/crud/event.py
from typing import Any, Dict, List
from sqlalchemy.orm import Session
from campusconnect.crud.base import CRUDBase
from campusconnect.models.event import Event
from campusconnect.schemas.event import EventCreate, EventUpdate


def flatten_event_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Map the nested ``banner`` object onto the flat banner_* columns."""
    data = dict(data)
    if "banner" in data:
        banner = data.pop("banner")
        if banner:
            data["banner_url"] = banner["url"]
            data["banner_generated_at"] = banner["generated_at"]
            data["banner_prompt"] = banner["prompt"]
        else:
            data["banner_url"] = None
            data["banner_generated_at"] = None
            data["banner_prompt"] = None
    return data


class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):

    def get_all_by_date_desc(self, db: Session) -> List[Event]:
        return db.query(Event).order_by(Event.date.desc(), Event.time.desc()).all()

    def create_with_organizer(self, db: Session, *, obj_in: EventCreate, organizer_name: str, organizer_contact: str) -> Event:
        event_data = flatten_event_data(obj_in.model_dump())
        event_data["organizer_name"] = organizer_name
        event_data["organizer_contact"] = organizer_contact

        db_obj = Event(**event_data)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update_fields(self, db: Session, *, db_obj: Event, obj_in: EventUpdate) -> Event:
        update_data = flatten_event_data(obj_in.model_dump(exclude_unset=True))
        # Ownership is fixed at creation
        update_data.pop("organizer_name", None)
        update_data.pop("organizer_contact", None)
        return super().update(db, db_obj=db_obj, obj_in=update_data)


event = CRUDEvent(Event)

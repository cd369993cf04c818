# File: campusconnect/crud/registration.py
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel
from sqlalchemy import update
from sqlalchemy.orm import Session
from campusconnect.crud.base import CRUDBase
from campusconnect.models.registration import Registration, registration_key


class CRUDRegistration(CRUDBase[Registration, BaseModel, BaseModel]):

    def get_by_user(self, db: Session, *, user_id: str) -> List[Registration]:
        return (
            db.query(Registration)
            .filter(Registration.user_id == user_id)
            .order_by(Registration.registration_date)
            .all()
        )

    def get_by_event(self, db: Session, *, event_id: str, checked_in: Optional[bool] = None) -> List[Registration]:
        query = db.query(Registration).filter(Registration.event_id == event_id)
        if checked_in is not None:
            query = query.filter(Registration.checked_in == checked_in)
        return query.order_by(Registration.registration_date).all()

    def count_by_event(self, db: Session, *, event_id: str) -> int:
        return db.query(Registration).filter(Registration.event_id == event_id).count()

    def create_for(self, db: Session, *, user_id: str, event_id: str, registration_date: datetime) -> Registration:
        db_obj = Registration(
            id=registration_key(user_id, event_id),
            user_id=user_id,
            event_id=event_id,
            registration_date=registration_date,
            checked_in=False,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def mark_checked_in(self, db: Session, *, registration_id: str, checked_in_at: datetime) -> bool:
        """Flip checked_in false -> true. Returns False if it was already true."""
        result = db.execute(
            update(Registration)
            .where(Registration.id == registration_id, Registration.checked_in.is_(False))
            .values(checked_in=True, checked_in_at=checked_in_at)
            .execution_options(synchronize_session=False)
        )
        db.commit()
        return result.rowcount == 1


registration = CRUDRegistration(Registration)

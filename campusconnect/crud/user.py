from typing import Any, Dict, List, Optional, Union
from sqlalchemy.orm import Session
from campusconnect.crud.base import CRUDBase
from campusconnect.models.user import User, UserRole
from campusconnect.schemas.auth import SignupRequest
from campusconnect.schemas.user import UserUpdate
from campusconnect.core.security import get_password_hash, verify_password


class CRUDUser(CRUDBase[User, SignupRequest, UserUpdate]):

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    def get_many(self, db: Session, *, ids: List[str]) -> List[User]:
        if not ids:
            return []
        return db.query(User).filter(User.id.in_(ids)).all()

    def create(self, db: Session, *, obj_in: SignupRequest) -> User:
        db_obj = User(
            email=obj_in.email,
            name=obj_in.name,
            role=obj_in.role,
            hashed_password=get_password_hash(obj_in.password),
            # studentId is only kept for students
            student_id=obj_in.student_id if obj_in.role == UserRole.STUDENT else None,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(self, db: Session, *, db_obj: User, obj_in: Union[UserUpdate, Dict[str, Any]]) -> User:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        # Only the display name is mutable after signup
        update_data = {k: v for k, v in update_data.items() if k == "name"}
        return super().update(db, db_obj=db_obj, obj_in=update_data)

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email=email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user


user = CRUDUser(User)

from pydantic import BaseModel
from typing import Optional
from campusconnect.models.user import UserRole


class Actor(BaseModel):
    """The authenticated identity a workflow call is made on behalf of."""

    id: str
    name: str
    email: str
    role: UserRole
    student_id: Optional[str] = None

    class Config:
        from_attributes = True

    @property
    def is_organizer(self) -> bool:
        return self.role == UserRole.ORGANIZER

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.STUDENT


class User(Actor):
    pass


class UserUpdate(BaseModel):
    name: str

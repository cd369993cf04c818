# File: campusconnect/models/user.py
from sqlalchemy import Column, String, Enum
from campusconnect.models.base import BaseModel
import enum


class UserRole(enum.Enum):
    STUDENT = "student"
    ORGANIZER = "organizer"


class User(BaseModel):
    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=True)
    name = Column(String(255), nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.STUDENT)

    # Students only
    student_id = Column(String(64), nullable=True)

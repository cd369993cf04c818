from pydantic import BaseModel, EmailStr
from typing import Optional
from campusconnect.models.user import UserRole


class Token(BaseModel):
    access_token: str
    token_type: str
    user_id: Optional[str] = None
    role: Optional[UserRole] = None


class SignupRequest(BaseModel):
    name: str
    email: EmailStr
    password: str
    role: UserRole = UserRole.STUDENT
    student_id: Optional[str] = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

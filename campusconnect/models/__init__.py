from .user import User, UserRole
from .event import Event
from .registration import Registration, registration_key

__all__ = ["User", "UserRole", "Event", "Registration", "registration_key"]

from datetime import datetime
from typing import Callable, Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from campusconnect.core.config import settings
from campusconnect.core.exceptions import AuthenticationError, UpstreamServiceError
from campusconnect.db.database import get_db
from campusconnect.schemas.user import Actor
from campusconnect.services.ai_content import BannerGenerator, DescriptionGenerator
from campusconnect.services.attendance_verification import AttendanceVerifier
from campusconnect.services.attendee_export import AttendeeExporter
from campusconnect.services.event_store import EventStore
from campusconnect.services.identity_provider import IdentityProvider
from campusconnect.services.registration_store import RegistrationStore

security = HTTPBearer(auto_error=False)


def get_clock() -> Callable[[], datetime]:
    return datetime.now


def get_identity_provider(db: Session = Depends(get_db)) -> IdentityProvider:
    return IdentityProvider(db)


def get_optional_actor(
    identity: IdentityProvider = Depends(get_identity_provider),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[Actor]:
    if credentials is None:
        return None
    return identity.resolve(credentials.credentials)


def get_current_actor(actor: Optional[Actor] = Depends(get_optional_actor)) -> Actor:
    if actor is None:
        raise AuthenticationError("Could not validate credentials")
    return actor


def get_event_store(db: Session = Depends(get_db)) -> EventStore:
    return EventStore(db)


def get_registration_store(
    db: Session = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> RegistrationStore:
    return RegistrationStore(db, clock=clock)


def get_attendance_verifier(
    db: Session = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> AttendanceVerifier:
    return AttendanceVerifier(db, clock=clock)


def get_attendee_exporter(
    db: Session = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> AttendeeExporter:
    return AttendeeExporter(db, clock=clock)


def get_description_generator() -> DescriptionGenerator:
    return DescriptionGenerator()


def get_banner_generator() -> BannerGenerator:
    if not settings.ai_configured:
        raise UpstreamServiceError("AI service not configured properly")
    return BannerGenerator()

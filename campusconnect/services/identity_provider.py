"""Identity provider adapter: accounts, access tokens and the paired user profile."""
import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from campusconnect import crud
from campusconnect.core import security
from campusconnect.core.config import settings
from campusconnect.core.exceptions import (
    AuthenticationError,
    PersistenceError,
    ValidationError,
)
from campusconnect.models.user import UserRole
from campusconnect.schemas.auth import SignupRequest, Token
from campusconnect.schemas.user import Actor

logger = logging.getLogger(__name__)


class IdentityProvider:
    """Issues and resolves access tokens; the profile row holds the role."""

    def __init__(self, db: Session):
        self.db = db

    def signup(self, data: SignupRequest) -> Actor:
        if not data.name or not data.name.strip():
            raise ValidationError("Name is required", field_name="name")
        if len(data.password) < 6:
            raise ValidationError("Password must be at least 6 characters", field_name="password")
        if data.role == UserRole.STUDENT and not (data.student_id or "").strip():
            raise ValidationError("Student ID is required for students", field_name="student_id")

        if crud.user.get_by_email(self.db, email=data.email):
            raise ValidationError("An account with this email already exists", field_name="email")

        try:
            user = crud.user.create(self.db, obj_in=data)
        except IntegrityError:
            self.db.rollback()
            raise ValidationError("An account with this email already exists", field_name="email")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Signup failed for {data.email}: {str(e)}")
            raise PersistenceError("signup", str(e))

        logger.info(f"New {user.role.value} account created: {user.email}")
        return Actor.model_validate(user)

    def login(self, email: str, password: str) -> Token:
        user = crud.user.authenticate(self.db, email=email, password=password)
        if not user:
            logger.info(f"Failed login attempt for {email}")
            raise AuthenticationError("Incorrect email or password")

        access_token = security.create_access_token(
            subject=user.id,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )
        return Token(access_token=access_token, token_type="bearer", user_id=user.id, role=user.role)

    def resolve(self, token: Optional[str]) -> Optional[Actor]:
        """Return the actor behind a token, or None when there is no valid identity."""
        if not token:
            return None
        payload = security.decode_token(token)
        if payload is None or not payload.get("sub"):
            return None
        user = crud.user.get(self.db, payload["sub"])
        if user is None:
            # Account exists at the auth layer but has no profile
            return None
        return Actor.model_validate(user)

    def require(self, token: Optional[str]) -> Actor:
        actor = self.resolve(token)
        if actor is None:
            raise AuthenticationError("Could not validate credentials")
        return actor

    def update_display_name(self, actor: Optional[Actor], name: str) -> Actor:
        if actor is None:
            raise AuthenticationError()
        if not name or not name.strip():
            raise ValidationError("Name is required", field_name="name")

        user = crud.user.get(self.db, actor.id)
        if user is None:
            raise AuthenticationError("Profile not found")
        try:
            user = crud.user.update(self.db, db_obj=user, obj_in={"name": name.strip()})
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError("update profile", str(e))
        return Actor.model_validate(user)

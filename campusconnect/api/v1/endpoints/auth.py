# File: campusconnect/api/v1/endpoints/auth.py
from typing import Any
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from campusconnect import schemas
from campusconnect.api import deps
from campusconnect.services.identity_provider import IdentityProvider

router = APIRouter()


@router.post("/signup", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def signup(
    data: schemas.SignupRequest,
    identity: IdentityProvider = Depends(deps.get_identity_provider),
) -> Any:
    """Create the account and its profile. Role is fixed from here on."""
    return identity.signup(data)


@router.post("/login", response_model=schemas.Token)
def login_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    identity: IdentityProvider = Depends(deps.get_identity_provider),
) -> Any:
    """OAuth2 compatible token login (username is the email)."""
    return identity.login(form_data.username, form_data.password)


@router.post("/login/json", response_model=schemas.Token)
def login_json(
    login_data: schemas.LoginRequest,
    identity: IdentityProvider = Depends(deps.get_identity_provider),
) -> Any:
    return identity.login(login_data.email, login_data.password)


@router.get("/me", response_model=schemas.User)
def read_current_user(current_actor: schemas.Actor = Depends(deps.get_current_actor)) -> Any:
    return current_actor

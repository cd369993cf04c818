from typing import Any
from fastapi import APIRouter, Depends
from campusconnect import schemas
from campusconnect.api import deps
from campusconnect.services.identity_provider import IdentityProvider

router = APIRouter()


@router.patch("/me", response_model=schemas.User)
def update_my_profile(
    data: schemas.UserUpdate,
    current_actor: schemas.Actor = Depends(deps.get_current_actor),
    identity: IdentityProvider = Depends(deps.get_identity_provider),
) -> Any:
    """Only the display name can change after signup."""
    return identity.update_display_name(current_actor, data.name)

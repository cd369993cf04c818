# File: campusconnect/api/v1/api.py
from fastapi import APIRouter
from campusconnect.api.v1.endpoints import auth, users, events, registrations, tickets, attendance

# Create main API router
api_router = APIRouter()

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["authentication"]
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"]
)

api_router.include_router(
    events.router,
    prefix="/events",
    tags=["events"]
)

api_router.include_router(
    registrations.router,
    prefix="/registrations",
    tags=["registrations"]
)

api_router.include_router(
    tickets.router,
    prefix="/tickets",
    tags=["tickets"]
)

api_router.include_router(
    attendance.router,
    prefix="/attendance",
    tags=["attendance"]
)

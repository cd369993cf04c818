"""
Error taxonomy for CampusConnect.

Services raise these; the FastAPI app translates them to HTTP responses
(see ``register_exception_handlers`` in ``campusconnect.main``).
"""
from typing import Optional


class CampusConnectError(Exception):
    """Base class for every domain error raised by the services."""

    status_code = 500

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class AuthenticationError(CampusConnectError):
    """No identity is present (missing, expired or unknown token)."""

    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, "AUTHENTICATION_REQUIRED")


class AuthorizationError(CampusConnectError):
    """Identity is present but has the wrong role or does not own the resource."""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, "NOT_AUTHORIZED")


class ValidationError(CampusConnectError):
    """
    Missing or malformed input.

    Args:
        message: Human-readable error message
        field_name: Optional name of the offending field
        error_code: Optional override for subclasses with a distinct failure kind
    """

    status_code = 400

    def __init__(self, message: str, field_name: Optional[str] = None, error_code: str = "VALIDATION_ERROR"):
        super().__init__(message, error_code)
        self.field_name = field_name


class EventNotConcludedError(ValidationError):
    def __init__(self, event_id: str):
        super().__init__("Attendee data can only be exported after the event has concluded", error_code="EVENT_NOT_CONCLUDED")
        self.event_id = event_id


class NoAttendeesError(ValidationError):
    def __init__(self, event_id: str):
        super().__init__("No attendees have checked in to this event", error_code="NO_ATTENDEES")
        self.event_id = event_id


class NotFoundError(CampusConnectError):
    status_code = 404

    def __init__(self, resource: str, resource_id: str):
        super().__init__(f"{resource} '{resource_id}' not found", f"{resource.upper()}_NOT_FOUND")
        self.resource = resource
        self.resource_id = resource_id


class PersistenceError(CampusConnectError):
    """The underlying store rejected or failed a read/write."""

    def __init__(self, operation: str, details: str):
        super().__init__(f"Data access error during {operation}", "PERSISTENCE_ERROR")
        self.operation = operation
        self.details = details


class UpstreamServiceError(CampusConnectError):
    """The generative-AI service failed or is not configured."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message, "UPSTREAM_SERVICE_ERROR")
        self.details = details

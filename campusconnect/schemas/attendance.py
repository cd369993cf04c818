from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from enum import Enum


class ScanOutcome(str, Enum):
    SCANNING = "scanning"
    VALID = "valid"
    ALREADY_SCANNED = "already_scanned"
    EVENT_NOT_ACTIVE = "event_not_active"
    INVALID = "invalid"


class ScanRequest(BaseModel):
    data: str


class ScanResult(BaseModel):
    outcome: ScanOutcome
    reason: Optional[str] = None
    message: str = ""
    user_name: Optional[str] = None
    event_name: Optional[str] = None
    registration_id: Optional[str] = None
    checked_in_at: Optional[datetime] = None

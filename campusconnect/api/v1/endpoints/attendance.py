from typing import Any
from fastapi import APIRouter, Depends
from campusconnect import schemas
from campusconnect.api import deps
from campusconnect.services.attendance_verification import AttendanceVerifier

router = APIRouter()


@router.post("/scan", response_model=schemas.ScanResult)
def scan_ticket(
    scan: schemas.ScanRequest,
    verifier: AttendanceVerifier = Depends(deps.get_attendance_verifier),
    current_actor: schemas.Actor = Depends(deps.get_current_actor),
) -> Any:
    """Organizer submits the decoded QR text; the outcome says what to show."""
    return verifier.verify(scan.data, current_actor)

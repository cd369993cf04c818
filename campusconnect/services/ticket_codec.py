"""Ticket payload encoding and QR rendering."""
import base64
import io
import json
import logging
from typing import Optional

import qrcode
from pydantic import ValidationError as PydanticValidationError

from campusconnect.models.registration import registration_key
from campusconnect.schemas.ticket import TicketPayload

logger = logging.getLogger(__name__)


def build_payload(user_id: str, user_name: str, event_id: str, event_title: str) -> TicketPayload:
    return TicketPayload(
        user_id=user_id,
        event_id=event_id,
        user_name=user_name,
        event_name=event_title,
        registration_id=registration_key(user_id, event_id),
    )


def encode_payload(payload: TicketPayload) -> str:
    return json.dumps(payload.model_dump(by_alias=True))


def decode_payload(raw: Optional[str]) -> Optional[TicketPayload]:
    """Parse scanned text; None when it is not a well-formed ticket."""
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    try:
        return TicketPayload.model_validate(data)
    except PydanticValidationError:
        return None


def render_qr_data_url(text: str) -> str:
    qr = qrcode.QRCode(version=1, box_size=10, border=4)
    qr.add_data(text)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    img_buffer = io.BytesIO()
    img.save(img_buffer, format="PNG")
    img_str = base64.b64encode(img_buffer.getvalue()).decode()
    return f"data:image/png;base64,{img_str}"

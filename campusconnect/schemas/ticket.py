from pydantic import BaseModel, ConfigDict, Field


class TicketPayload(BaseModel):
    """JSON body carried inside a ticket QR code (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: str = Field(alias="userId")
    event_id: str = Field(alias="eventId")
    user_name: str = Field(alias="userName")
    event_name: str = Field(alias="eventName")
    registration_id: str = Field(alias="registrationId")


class TicketResponse(BaseModel):
    payload: TicketPayload
    qr_text: str
    qr_data_url: str

# This project was developed with assistance from AI tools.
"""Contact request schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ContactRequestCreate(BaseModel):
    property_id: int
    message: str = Field(max_length=5000)


class ContactRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    property_id: int
    sender_id: int
    recipient_id: int
    message: str
    created_at: datetime
    is_read: bool


class ContactRequestListResponse(BaseModel):
    """Requests the caller sent and received, newest first."""

    sent: list[ContactRequestResponse]
    received: list[ContactRequestResponse]

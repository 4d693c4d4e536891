# This project was developed with assistance from AI tools.
"""Closed deal schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ClosedDealResponse(BaseModel):
    """A closed deal. ``commission_paid`` is the seller's attestation, not a payment record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    property_id: int
    seller_id: int
    buyer_id: int
    assignment_fee: int
    commission_amount: int
    commission_paid: bool
    commission_paid_at: datetime | None = None
    proof_document: str
    closed_at: datetime


class ClosedDealListResponse(BaseModel):
    data: list[ClosedDealResponse]
    count: int

# This project was developed with assistance from AI tools.
"""Summary count schemas for the user dashboard and the admin review queue."""

from db.enums import UserRole, VerificationStatus
from pydantic import BaseModel

from .user import Capabilities


class ReviewQueueResponse(BaseModel):
    pending_buyers: int
    pending_sellers: int
    pending_documents: int
    pending_properties: int


class DashboardResponse(BaseModel):
    user_id: int
    role: UserRole
    verification_status: VerificationStatus
    capabilities: Capabilities
    listings_by_status: dict[str, int] = {}
    pending_approval: int = 0
    closed_deals: int = 0
    commission_owed: int = 0
    saved_deals: int = 0
    unread_contact_requests: int = 0

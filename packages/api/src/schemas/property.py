# This project was developed with assistance from AI tools.
"""Property listing request/response schemas.

Monetary rules (positive prices and fee, non-negative repairs) are enforced
by the listing service so that direct callers get the same InvalidInput.
"""

from datetime import datetime

from db.enums import PropertyStatus, PropertyType
from pydantic import BaseModel, ConfigDict, Field

from . import Pagination


class PropertyCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    address: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=100)
    state: str = Field(min_length=1, max_length=50)
    zip_code: str = Field(min_length=1, max_length=20)
    property_type: PropertyType
    contract_price: int
    arv: int
    repair_cost: int = 0
    assignment_fee: int
    notes: str | None = None


class PropertyUpdate(BaseModel):
    """Patchable listing fields. Approval, status and owner are not among them."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = Field(default=None, min_length=1, max_length=255)
    city: str | None = Field(default=None, min_length=1, max_length=100)
    state: str | None = Field(default=None, min_length=1, max_length=50)
    zip_code: str | None = Field(default=None, min_length=1, max_length=20)
    property_type: PropertyType | None = None
    contract_price: int | None = None
    arv: int | None = None
    repair_cost: int | None = None
    assignment_fee: int | None = None
    notes: str | None = None


class PropertyFilters(BaseModel):
    """Closed set of listing filters. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    property_type: PropertyType | None = None
    state: str | None = None
    city: str | None = None
    min_price: int | None = Field(default=None, ge=0)
    max_price: int | None = Field(default=None, ge=0)
    status: PropertyStatus | None = None
    is_approved: bool | None = None


class PropertyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    address: str
    city: str
    state: str
    zip_code: str
    property_type: PropertyType
    contract_price: int
    arv: int
    repair_cost: int
    assignment_fee: int
    notes: str | None = None
    images: list[str] = []
    # None unless the caller may open listing documents
    contract_document: str | None = None
    is_approved: bool
    status: PropertyStatus
    created_at: datetime
    updated_at: datetime


class PropertyListResponse(BaseModel):
    data: list[PropertyResponse]
    pagination: Pagination


class StatusTransition(BaseModel):
    status: PropertyStatus


class ApprovalRequest(BaseModel):
    is_approved: bool

# This project was developed with assistance from AI tools.
"""Verification checklist schemas."""

from db.enums import DocumentStatus, DocumentType, UserRole
from pydantic import BaseModel


class DocumentRequirement(BaseModel):
    """A single required document type with its fulfillment status."""

    document_type: DocumentType
    label: str
    is_provided: bool = False
    is_approved: bool = False
    document_id: int | None = None
    status: DocumentStatus | None = None


class CompletenessResponse(BaseModel):
    """Per-role document checklist. Informational only."""

    user_id: int
    role: UserRole
    is_complete: bool
    requirements: list[DocumentRequirement]
    provided_count: int
    required_count: int

# This project was developed with assistance from AI tools.
"""Verification document request/response schemas."""

from datetime import datetime

from db.enums import DocumentStatus, DocumentType
from pydantic import BaseModel, ConfigDict


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    document_type: DocumentType
    file_path: str
    status: DocumentStatus
    uploaded_at: datetime
    reviewed_by: int | None = None
    reviewed_at: datetime | None = None


class DocumentListResponse(BaseModel):
    data: list[DocumentResponse]
    count: int


class DocumentReview(BaseModel):
    """Admin decision on one document: 'approved' or 'rejected'."""

    status: DocumentStatus

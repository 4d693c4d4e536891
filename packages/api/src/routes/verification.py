# This project was developed with assistance from AI tools.
"""Verification document upload and checklist endpoints."""

from db import get_db
from db.enums import DocumentType
from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentUser
from ..schemas.completeness import CompletenessResponse
from ..schemas.verification import DocumentListResponse, DocumentResponse
from ..services import verification as verification_service
from ._uploads import store_upload

router = APIRouter()


@router.post("/documents", response_model=DocumentResponse, status_code=201)
async def submit_document(
    user: CurrentUser,
    document: UploadFile = File(...),
    document_type: DocumentType = Form(...),
    session: AsyncSession = Depends(get_db),
) -> DocumentResponse:
    """Upload one verification document. It starts out pending review."""
    file_path = await store_upload(document, "document")
    doc = await verification_service.submit_document(session, user, document_type, file_path)
    return DocumentResponse.model_validate(doc)


@router.get("/documents", response_model=DocumentListResponse)
async def list_documents(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> DocumentListResponse:
    documents = await verification_service.list_documents(session, user)
    return DocumentListResponse(
        data=[DocumentResponse.model_validate(d) for d in documents],
        count=len(documents),
    )


@router.get("/completeness", response_model=CompletenessResponse)
async def get_completeness(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> CompletenessResponse:
    return await verification_service.check_completeness(session, user.user_id)

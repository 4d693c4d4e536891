# This project was developed with assistance from AI tools.
"""Admin endpoints for users with role=admin.

Verification decisions, document review, listing approval, the review
queue and the audit trail. The shared-secret console lives in console.py.
"""

from db import get_db
from db.enums import DocumentStatus, UserRole, VerificationStatus
from db.repositories import UserRepository
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentUser, require_roles
from ..schemas.audit import AuditEventItem, AuditSearchResponse
from ..schemas.completeness import CompletenessResponse
from ..schemas.dashboard import ReviewQueueResponse
from ..schemas.property import ApprovalRequest, PropertyResponse
from ..schemas.user import UserListResponse, UserResponse, VerificationDecision
from ..schemas.verification import DocumentListResponse, DocumentResponse, DocumentReview
from ..services import listing as listing_service
from ..services import verification as verification_service
from ..services.audit import search_events
from ..services.dashboard import review_queue

router = APIRouter(dependencies=[Depends(require_roles(UserRole.ADMIN))])


@router.get("/users", response_model=UserListResponse)
async def list_users(
    role: UserRole | None = Query(default=None),
    verification_status: VerificationStatus | None = Query(default=None),
    session: AsyncSession = Depends(get_db),
) -> UserListResponse:
    users = await UserRepository(session).search(role=role, verification_status=verification_status)
    return UserListResponse(data=[UserResponse.model_validate(u) for u in users], count=len(users))


@router.get("/users/{user_id}/completeness", response_model=CompletenessResponse)
async def user_completeness(
    user_id: int,
    session: AsyncSession = Depends(get_db),
) -> CompletenessResponse:
    return await verification_service.check_completeness(session, user_id)


@router.patch("/users/{user_id}/verification", response_model=UserResponse)
async def review_user(
    user_id: int,
    body: VerificationDecision,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Set a user's verification status. Repeating a decision changes nothing."""
    target = await verification_service.review_user(session, user, user_id, body.status)
    return UserResponse.model_validate(target)


@router.get("/verification-documents", response_model=DocumentListResponse)
async def list_verification_documents(
    status: DocumentStatus | None = Query(default=None),
    session: AsyncSession = Depends(get_db),
) -> DocumentListResponse:
    documents = await verification_service.list_all_documents(session, status=status)
    return DocumentListResponse(
        data=[DocumentResponse.model_validate(d) for d in documents],
        count=len(documents),
    )


@router.patch("/documents/{document_id}", response_model=DocumentResponse)
async def review_document(
    document_id: int,
    body: DocumentReview,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> DocumentResponse:
    doc = await verification_service.review_document(session, user, document_id, body.status)
    return DocumentResponse.model_validate(doc)


@router.patch("/properties/{property_id}/approval", response_model=PropertyResponse)
async def approve_property(
    property_id: int,
    body: ApprovalRequest,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> PropertyResponse:
    prop = await listing_service.approve_property(session, user, property_id, body.is_approved)
    return PropertyResponse.model_validate(prop)


@router.get("/review-queue", response_model=ReviewQueueResponse)
async def get_review_queue(session: AsyncSession = Depends(get_db)) -> ReviewQueueResponse:
    return await review_queue(session)


@router.get("/audit", response_model=AuditSearchResponse)
async def audit_search(
    entity: str | None = Query(default=None),
    entity_id: int | None = Query(default=None),
    session: AsyncSession = Depends(get_db),
) -> AuditSearchResponse:
    """Audit events oldest first, optionally for one entity."""
    events = await search_events(session, entity=entity, entity_id=entity_id)
    return AuditSearchResponse(
        count=len(events),
        events=[AuditEventItem.model_validate(e) for e in events],
    )

# This project was developed with assistance from AI tools.
"""Verification engine.

Users submit identity / proof-of-funds / contract documents; an admin
reviews documents individually and decides the account's verification
status separately. Document decisions never change the account status, and
the account status is only ever written through ``User.set_verification``.
"""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from db import User, VerificationDocument
from db.enums import DocumentStatus, DocumentType, UserRole, VerificationStatus
from db.repositories import UserRepository, VerificationDocumentRepository
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import require_authenticated, require_role
from ..core.config import settings
from ..core.errors import InvalidInput, NotFound
from ..schemas.auth import UserContext
from ..schemas.completeness import CompletenessResponse, DocumentRequirement
from . import audit

logger = logging.getLogger(__name__)

# Human-readable labels for document types
_DOC_TYPE_LABELS: dict[DocumentType, str] = {
    DocumentType.ID: "Government-Issued ID",
    DocumentType.PROOF_OF_FUNDS: "Proof of Funds",
    DocumentType.CONTRACT: "Sample Purchase Contract",
}

_DOCUMENT_DECISIONS = frozenset({DocumentStatus.APPROVED, DocumentStatus.REJECTED})
_USER_DECISIONS = frozenset({VerificationStatus.VERIFIED, VerificationStatus.REJECTED})


def _coerce(enum_cls, value, field: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise InvalidInput(f"Invalid {field}: {value!r}") from exc


async def submit_document(
    session: AsyncSession,
    user: UserContext | None,
    document_type: DocumentType | str | None,
    file_path: str | None,
) -> VerificationDocument:
    """Record an uploaded verification document as pending.

    Any document type is accepted from any role. A previously rejected user
    stays rejected until an admin reviews them again.
    """
    user = require_authenticated(user)
    if document_type is None:
        raise InvalidInput("document_type is required", entity="verification_document")
    if not file_path:
        raise InvalidInput("A document file is required", entity="verification_document")
    doc_type = _coerce(DocumentType, document_type, "document_type")

    doc = VerificationDocument(
        user_id=user.user_id,
        document_type=doc_type,
        file_path=file_path,
        status=DocumentStatus.PENDING,
    )
    await VerificationDocumentRepository(session).add(doc)
    await session.commit()
    logger.info("User %s submitted %s document %s", user.user_id, doc_type.value, doc.id)
    return doc


async def list_documents(session: AsyncSession, user: UserContext | None) -> Sequence[VerificationDocument]:
    user = require_authenticated(user)
    return await VerificationDocumentRepository(session).list_for_user(user.user_id)


async def list_all_documents(
    session: AsyncSession,
    *,
    status: DocumentStatus | None = None,
) -> Sequence[VerificationDocument]:
    """Every user's documents, newest first. Callers must have checked admin access."""
    return await VerificationDocumentRepository(session).list_all(status)


async def review_document(
    session: AsyncSession,
    admin: UserContext | None,
    document_id: int,
    decision: DocumentStatus | str,
) -> VerificationDocument:
    admin = require_role(admin, UserRole.ADMIN)
    decision = _coerce(DocumentStatus, decision, "document decision")
    if decision not in _DOCUMENT_DECISIONS:
        raise InvalidInput(
            "Document decision must be 'approved' or 'rejected'",
            entity="verification_document",
            entity_id=document_id,
        )

    doc = await VerificationDocumentRepository(session).get(document_id)
    if doc is None:
        raise NotFound("verification_document", document_id)

    previous = doc.status
    doc.status = decision
    doc.reviewed_by = admin.user_id
    doc.reviewed_at = datetime.now(UTC)
    await audit.write_audit_event(
        session,
        event_type=audit.DOCUMENT_REVIEW,
        entity="verification_document",
        entity_id=doc.id,
        actor=admin,
        event_data={"from": previous.value, "to": decision.value, "user_id": doc.user_id},
    )
    await session.commit()
    logger.info("Document %s %s by admin %s", doc.id, decision.value, admin.user_id)
    return doc


async def set_user_verification(
    session: AsyncSession,
    user_id: int,
    decision: VerificationStatus | str,
    *,
    actor: UserContext | None = None,
    actor_role: str | None = None,
    expected_role: UserRole | None = None,
) -> User:
    """Apply a verification decision. Repeating the current decision is a no-op.

    ``expected_role`` narrows the lookup (the console verifies buyers and
    sellers through separate endpoints); a mismatch is NotFound.
    """
    decision = _coerce(VerificationStatus, decision, "verification decision")
    if decision not in _USER_DECISIONS:
        raise InvalidInput(
            "Verification decision must be 'verified' or 'rejected'",
            entity="user",
            entity_id=user_id,
        )

    user = await UserRepository(session).get(user_id)
    if user is None or (expected_role is not None and user.role != expected_role):
        raise NotFound("user", user_id)

    if user.verification_status == decision:
        return user

    previous = user.verification_status
    user.set_verification(decision)
    await audit.write_audit_event(
        session,
        event_type=audit.USER_VERIFICATION,
        entity="user",
        entity_id=user.id,
        actor=actor,
        actor_role=actor_role,
        event_data={"from": previous.value, "to": decision.value},
    )
    await session.commit()
    logger.info("User %s verification set to %s", user.id, decision.value)
    return user


async def review_user(
    session: AsyncSession,
    admin: UserContext | None,
    user_id: int,
    decision: VerificationStatus | str,
) -> User:
    admin = require_role(admin, UserRole.ADMIN)
    return await set_user_verification(session, user_id, decision, actor=admin)


async def check_completeness(session: AsyncSession, user_id: int) -> CompletenessResponse:
    """Compare the user's uploads against their role's checklist.

    A type counts as provided when any document of it exists, whatever its
    review status. The row reports the latest upload and whether any
    upload of that type has been approved.
    """
    user = await UserRepository(session).get(user_id)
    if user is None:
        raise NotFound("user", user_id)

    required_types = settings.REQUIRED_DOCUMENTS.get(user.role, [])
    documents = await VerificationDocumentRepository(session).list_for_user(user_id)

    # Newest first, so the first hit per type is the latest upload
    latest: dict[DocumentType, VerificationDocument] = {}
    approved: set[DocumentType] = set()
    for doc in documents:
        latest.setdefault(doc.document_type, doc)
        if doc.status == DocumentStatus.APPROVED:
            approved.add(doc.document_type)

    requirements: list[DocumentRequirement] = []
    for dt in required_types:
        doc = latest.get(dt)
        requirements.append(
            DocumentRequirement(
                document_type=dt,
                label=_DOC_TYPE_LABELS.get(dt, dt.value),
                is_provided=doc is not None,
                is_approved=dt in approved,
                document_id=doc.id if doc else None,
                status=doc.status if doc else None,
            )
        )

    provided_count = sum(1 for r in requirements if r.is_provided)
    return CompletenessResponse(
        user_id=user_id,
        role=user.role,
        is_complete=provided_count == len(required_types),
        requirements=requirements,
        provided_count=provided_count,
        required_count=len(required_types),
    )

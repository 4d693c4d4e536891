# This project was developed with assistance from AI tools.
"""Summary counts for the user dashboard and the admin review queue."""

from db import ClosedDeal, ContactRequest, Property, SavedDeal, User, VerificationDocument
from db.enums import DocumentStatus, PropertyStatus, UserRole, VerificationStatus
from db.repositories import (
    ClosedDealRepository,
    ContactRequestRepository,
    PropertyRepository,
    SavedDealRepository,
    UserRepository,
    VerificationDocumentRepository,
)
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import capabilities, require_authenticated
from ..schemas.auth import UserContext
from ..schemas.dashboard import DashboardResponse, ReviewQueueResponse
from ..schemas.user import Capabilities


async def review_queue(session: AsyncSession) -> ReviewQueueResponse:
    """Pending work for an admin. Callers check admin access."""
    users = UserRepository(session)
    pending = User.verification_status == VerificationStatus.PENDING
    return ReviewQueueResponse(
        pending_buyers=await users.count(pending, User.role == UserRole.CASH_BUYER),
        pending_sellers=await users.count(pending, User.role == UserRole.WHOLESALER),
        pending_documents=await VerificationDocumentRepository(session).count(
            VerificationDocument.status == DocumentStatus.PENDING
        ),
        pending_properties=await PropertyRepository(session).count(Property.is_approved.is_(False)),
    )


async def user_dashboard(session: AsyncSession, user: UserContext | None) -> DashboardResponse:
    user = require_authenticated(user)

    stmt = (
        select(Property.status, func.count(Property.id))
        .where(Property.user_id == user.user_id)
        .group_by(Property.status)
    )
    rows = (await session.execute(stmt)).all()
    by_status = {s.value: 0 for s in PropertyStatus}
    for status, count in rows:
        by_status[PropertyStatus(status).value] = count

    owed_stmt = select(func.coalesce(func.sum(ClosedDeal.commission_amount), 0)).where(
        ClosedDeal.seller_id == user.user_id,
        ClosedDeal.commission_paid.is_(False),
    )
    commission_owed = (await session.execute(owed_stmt)).scalar() or 0

    return DashboardResponse(
        user_id=user.user_id,
        role=user.role,
        verification_status=user.verification_status,
        capabilities=Capabilities(**capabilities(user)),
        listings_by_status=by_status,
        pending_approval=await PropertyRepository(session).count(
            Property.user_id == user.user_id, Property.is_approved.is_(False)
        ),
        closed_deals=len(await ClosedDealRepository(session).list_for_user(user.user_id)),
        commission_owed=int(commission_owed),
        saved_deals=await SavedDealRepository(session).count(SavedDeal.user_id == user.user_id),
        unread_contact_requests=await ContactRequestRepository(session).count(
            ContactRequest.recipient_id == user.user_id,
            ContactRequest.is_read.is_(False),
        ),
    )

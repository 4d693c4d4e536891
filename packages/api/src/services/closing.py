# This project was developed with assistance from AI tools.
"""Deal closing and commission.

Closing records the assignment, computes the platform commission once and
moves the property to ``closed`` in the same transaction. ``commission_paid``
is the seller's attestation; no payment is captured here.
"""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

from db import ClosedDeal, Property
from db.enums import PropertyStatus, UserRole
from db.repositories import ClosedDealRepository, PropertyRepository, UserRepository
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import is_admin, require_authenticated, require_verified
from ..core.config import settings
from ..core.errors import Conflict, Forbidden, InvalidInput, NotFound
from ..schemas.auth import UserContext
from . import audit

logger = logging.getLogger(__name__)


def compute_commission(assignment_fee: int, rate: Decimal | None = None) -> int:
    """``assignment_fee * rate`` rounded half-up to a whole currency unit."""
    rate = Decimal(str(settings.COMMISSION_RATE if rate is None else rate))
    amount = Decimal(assignment_fee) * rate
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


async def check_closable(
    session: AsyncSession,
    requester: UserContext | None,
    property_id: int,
    buyer_id: int,
    assignment_fee: int,
) -> Property:
    """Every check ``close_deal`` makes except the proof file.

    Routes run this before storing the proof so a refused close writes nothing.
    """
    requester = require_verified(requester)

    prop = await PropertyRepository(session).get(property_id)
    if prop is None:
        raise NotFound("property", property_id)
    if prop.user_id != requester.user_id:
        logger.warning(
            "User %s attempted to close property %s owned by %s",
            requester.user_id,
            property_id,
            prop.user_id,
        )
        raise Forbidden("Only the listing owner can close this deal", entity="property", entity_id=property_id)

    if isinstance(assignment_fee, bool) or not isinstance(assignment_fee, int) or assignment_fee <= 0:
        raise InvalidInput("assignment_fee must be a positive whole number", entity="closed_deal")
    if buyer_id == prop.user_id:
        raise InvalidInput("The buyer cannot be the seller", entity="closed_deal")
    if await UserRepository(session).get(buyer_id) is None:
        raise InvalidInput(f"Unknown buyer {buyer_id}", entity="user", entity_id=buyer_id)
    if prop.status not in PropertyStatus.closable():
        raise Conflict("This property has already been closed", entity="property", entity_id=property_id)
    return prop


async def close_deal(
    session: AsyncSession,
    requester: UserContext | None,
    property_id: int,
    buyer_id: int,
    assignment_fee: int,
    proof_document: str | None,
) -> ClosedDeal:
    """Close a listing owned by the requester.

    A non-owner is refused before anything changes. A property that is
    already closed cannot be closed again.
    """
    prop = await check_closable(session, requester, property_id, buyer_id, assignment_fee)
    if not proof_document:
        raise InvalidInput("Proof of closing is required", entity="closed_deal")

    deal = ClosedDeal(
        property_id=prop.id,
        seller_id=prop.user_id,
        buyer_id=buyer_id,
        assignment_fee=assignment_fee,
        commission_amount=compute_commission(assignment_fee),
        commission_paid=False,
        proof_document=proof_document,
    )
    await ClosedDealRepository(session).add(deal)

    previous = prop.status
    prop.status = PropertyStatus.CLOSED
    prop.updated_at = datetime.now(UTC)
    await audit.write_audit_event(
        session,
        event_type=audit.DEAL_CLOSED,
        entity="property",
        entity_id=prop.id,
        actor=requester,
        event_data={
            "deal_id": deal.id,
            "from": previous.value,
            "assignment_fee": assignment_fee,
            "commission_amount": deal.commission_amount,
        },
    )
    await session.commit()
    logger.info(
        "Deal %s closed on property %s (fee=%s commission=%s)",
        deal.id,
        prop.id,
        assignment_fee,
        deal.commission_amount,
    )
    return deal


async def list_closed_deals(session: AsyncSession, user: UserContext | None) -> Sequence[ClosedDeal]:
    """Deals where the caller is seller or buyer; admins see every deal."""
    user = require_authenticated(user)
    repo = ClosedDealRepository(session)
    if user.role == UserRole.ADMIN:
        return await repo.list()
    return await repo.list_for_user(user.user_id)


async def list_all_deals(session: AsyncSession) -> Sequence[ClosedDeal]:
    return await ClosedDealRepository(session).list()


async def get_deal(session: AsyncSession, requester: UserContext | None, deal_id: int) -> ClosedDeal:
    requester = require_authenticated(requester)
    deal = await ClosedDealRepository(session).get(deal_id)
    if deal is None:
        raise NotFound("closed_deal", deal_id)
    if not is_admin(requester) and requester.user_id not in (deal.seller_id, deal.buyer_id):
        raise Forbidden("Not a party to this deal", entity="closed_deal", entity_id=deal_id)
    return deal


async def mark_commission_paid(
    session: AsyncSession,
    requester: UserContext | None,
    deal_id: int,
) -> ClosedDeal:
    """Seller attests the commission was paid. The first timestamp is kept."""
    requester = require_authenticated(requester)
    deal = await ClosedDealRepository(session).get(deal_id)
    if deal is None:
        raise NotFound("closed_deal", deal_id)
    if deal.seller_id != requester.user_id:
        raise Forbidden("Only the seller can mark commission paid", entity="closed_deal", entity_id=deal_id)

    if deal.commission_paid:
        return deal

    deal.commission_paid = True
    deal.commission_paid_at = datetime.now(UTC)
    await audit.write_audit_event(
        session,
        event_type=audit.COMMISSION_PAID,
        entity="closed_deal",
        entity_id=deal.id,
        actor=requester,
        event_data={"commission_amount": deal.commission_amount},
    )
    await session.commit()
    logger.info("Commission on deal %s marked paid by seller %s", deal.id, requester.user_id)
    return deal

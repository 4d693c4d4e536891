# This project was developed with assistance from AI tools.
"""Listing lifecycle service.

Two orthogonal controls govern a property:

* ``is_approved`` -- the admin visibility gate. Unapproved listings are only
  visible to their owner and to admins.
* ``status`` -- available <-> under_contract, moved by the owner or an admin.
  ``closed`` is terminal and only reached by closing a deal.
"""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from db import Property
from db.enums import PropertyStatus, UserRole
from db.repositories import PropertyRepository
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import (
    can_view_documents,
    can_view_property,
    is_admin,
    is_owner_or_admin,
    require_authenticated,
    require_role,
    require_verified,
)
from ..core.errors import Conflict, Forbidden, InvalidInput, NotFound, Unverified
from ..schemas.auth import UserContext
from ..schemas.property import PropertyCreate, PropertyFilters, PropertyUpdate
from . import audit

logger = logging.getLogger(__name__)

_MONEY_FIELDS = ("contract_price", "arv", "repair_cost", "assignment_fee")


def _validate_money(values: dict) -> None:
    """contract_price, arv, assignment_fee > 0; repair_cost >= 0; integers only."""
    for field in _MONEY_FIELDS:
        if field not in values or values[field] is None:
            continue
        value = values[field]
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInput(f"{field} must be a whole number", entity="property")
        if field == "repair_cost":
            if value < 0:
                raise InvalidInput("repair_cost must not be negative", entity="property")
        elif value <= 0:
            raise InvalidInput(f"{field} must be greater than zero", entity="property")


async def _load(session: AsyncSession, property_id: int) -> Property:
    prop = await PropertyRepository(session).get(property_id)
    if prop is None:
        raise NotFound("property", property_id)
    return prop


def check_can_list(user: UserContext | None, payload: PropertyCreate) -> UserContext:
    """Guards and money rules for a new listing, without the files.

    Routes run this before storing the contract or images.
    """
    user = require_verified(user)
    require_role(user, UserRole.WHOLESALER)
    _validate_money(payload.model_dump())
    return user


async def create_property(
    session: AsyncSession,
    user: UserContext | None,
    payload: PropertyCreate,
    contract_document: str | None,
    images: list[str] | None = None,
) -> Property:
    """List a new property, pending admin approval.

    Checked in order: authenticated, verified, wholesaler, then input.
    """
    user = check_can_list(user, payload)
    if not contract_document:
        raise InvalidInput("A contract document is required", entity="property")
    values = payload.model_dump()

    now = datetime.now(UTC)
    prop = Property(
        **values,
        user_id=user.user_id,
        images=list(images or []),
        contract_document=contract_document,
        is_approved=False,
        status=PropertyStatus.AVAILABLE,
        created_at=now,
        updated_at=now,
    )
    await PropertyRepository(session).add(prop)
    await session.commit()
    logger.info("Property %s listed by user %s (pending approval)", prop.id, user.user_id)
    return prop


async def list_properties(
    session: AsyncSession,
    requester: UserContext | None,
    filters: PropertyFilters | None = None,
    *,
    offset: int = 0,
    limit: int | None = 20,
) -> tuple[Sequence[Property], int]:
    """Filtered listings, newest first, with the total match count.

    Only admins see unapproved listings or may filter on ``is_approved``.
    """
    criteria = (filters or PropertyFilters()).model_dump()
    if not is_admin(requester):
        criteria["is_approved"] = True
    return await PropertyRepository(session).search(offset=offset, limit=limit, **criteria)


async def list_owner_properties(session: AsyncSession, user: UserContext | None) -> Sequence[Property]:
    """The caller's own listings in every approval state."""
    user = require_authenticated(user)
    return await PropertyRepository(session).list_for_owner(user.user_id)


async def get_property(
    session: AsyncSession,
    requester: UserContext | None,
    property_id: int,
) -> Property:
    prop = await _load(session, property_id)
    if not can_view_property(requester, prop):
        raise Forbidden("This listing is awaiting approval", entity="property", entity_id=property_id)
    return prop


async def get_contract_document(
    session: AsyncSession,
    requester: UserContext | None,
    property_id: int,
) -> str:
    """Stored path of a listing's contract, for callers allowed to open it."""
    requester = require_authenticated(requester)
    prop = await get_property(session, requester, property_id)
    if not can_view_documents(requester, prop):
        raise Unverified(
            "Your account must be verified to view listing documents",
            entity="property",
            entity_id=property_id,
        )
    return prop.contract_document


async def approve_property(
    session: AsyncSession,
    admin: UserContext | None,
    property_id: int,
    is_approved: bool,
) -> Property:
    """Toggle the visibility gate. Never changes status."""
    admin = require_role(admin, UserRole.ADMIN)
    prop = await _load(session, property_id)

    previous = bool(prop.is_approved)
    prop.is_approved = is_approved
    prop.updated_at = datetime.now(UTC)
    await audit.write_audit_event(
        session,
        event_type=audit.PROPERTY_APPROVAL,
        entity="property",
        entity_id=prop.id,
        actor=admin,
        event_data={"from": previous, "to": is_approved},
    )
    await session.commit()
    logger.info(
        "Property %s %s by admin %s",
        prop.id,
        "approved" if is_approved else "unapproved",
        admin.user_id,
    )
    return prop


async def update_property(
    session: AsyncSession,
    requester: UserContext | None,
    property_id: int,
    patch: PropertyUpdate,
) -> Property:
    """Patch listing fields. Approval, status and ownership are not patchable here."""
    requester = require_authenticated(requester)
    prop = await _load(session, property_id)
    if not is_owner_or_admin(requester, prop.user_id):
        raise Forbidden("Only the owner can edit this listing", entity="property", entity_id=property_id)

    changes = patch.model_dump(exclude_unset=True)
    _validate_money(changes)
    for field, value in changes.items():
        if value is None and field != "notes":
            raise InvalidInput(f"{field} cannot be cleared", entity="property", entity_id=property_id)
        setattr(prop, field, value)

    prop.updated_at = datetime.now(UTC)
    await session.commit()
    return prop


async def transition_status(
    session: AsyncSession,
    requester: UserContext | None,
    property_id: int,
    new_status: PropertyStatus,
) -> Property:
    """Move between available and under_contract.

    Raises Conflict for any move the state machine does not allow,
    including every move into or out of ``closed``.
    """
    requester = require_authenticated(requester)
    prop = await _load(session, property_id)
    if not is_owner_or_admin(requester, prop.user_id):
        raise Forbidden(
            "Only the owner can change this listing's status",
            entity="property",
            entity_id=property_id,
        )

    current = prop.status or PropertyStatus.AVAILABLE
    allowed = PropertyStatus.valid_transitions().get(current, frozenset())
    if new_status not in allowed:
        raise Conflict(
            f"Cannot transition from '{current.value}' to '{new_status.value}'. "
            f"Allowed: {sorted(s.value for s in allowed) if allowed else 'none (terminal status)'}.",
            entity="property",
            entity_id=property_id,
        )

    prop.status = new_status
    prop.updated_at = datetime.now(UTC)
    await audit.write_audit_event(
        session,
        event_type=audit.PROPERTY_STATUS,
        entity="property",
        entity_id=prop.id,
        actor=requester,
        event_data={"from": current.value, "to": new_status.value},
    )
    await session.commit()
    logger.info("Property %s status %s -> %s", prop.id, current.value, new_status.value)
    return prop

# This project was developed with assistance from AI tools.
"""Audit event service.

Writes append-only audit trail entries for admin decisions and listing
lifecycle transitions. Events are flushed inside the caller's transaction so
they commit (or roll back) together with the change they describe.
"""

import logging
from collections.abc import Sequence

from db import AuditEvent
from db.repositories import AuditEventRepository
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.auth import UserContext

logger = logging.getLogger(__name__)

USER_VERIFICATION = "user_verification"
DOCUMENT_REVIEW = "document_review"
PROPERTY_APPROVAL = "property_approval"
PROPERTY_STATUS = "property_status"
DEAL_CLOSED = "deal_closed"
COMMISSION_PAID = "commission_paid"


async def write_audit_event(
    session: AsyncSession,
    *,
    event_type: str,
    entity: str,
    entity_id: int,
    actor: UserContext | None = None,
    actor_role: str | None = None,
    event_data: dict | None = None,
) -> AuditEvent:
    """Append one audit event.

    Args:
        session: Database session (not committed here).
        event_type: Event category (e.g. 'user_verification', 'deal_closed').
        entity: Entity table the event is about ('user', 'property', ...).
        entity_id: Primary key of that entity.
        actor: Acting user, if the change came through the user API.
        actor_role: Role label when there is no user (e.g. 'console').
        event_data: Arbitrary JSON-serializable event payload.
    """
    audit = AuditEvent(
        event_type=event_type,
        entity=entity,
        entity_id=entity_id,
        actor_id=actor.user_id if actor is not None else None,
        actor_role=actor.role.value if actor is not None else actor_role,
        event_data=event_data,
    )
    return await AuditEventRepository(session).add(audit)


async def search_events(
    session: AsyncSession,
    *,
    entity: str | None = None,
    entity_id: int | None = None,
) -> Sequence[AuditEvent]:
    """Events oldest first, optionally narrowed to one entity."""
    return await AuditEventRepository(session).list_for_entity(entity, entity_id)

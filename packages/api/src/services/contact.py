# This project was developed with assistance from AI tools.
"""Contact requests from a verified user to a property's owner."""

import logging
from collections.abc import Sequence

from db import ContactRequest
from db.repositories import ContactRequestRepository
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import require_authenticated, require_verified
from ..core.errors import Forbidden, InvalidInput, NotFound
from ..schemas.auth import UserContext
from .listing import get_property

logger = logging.getLogger(__name__)


async def create_contact_request(
    session: AsyncSession,
    sender: UserContext | None,
    property_id: int,
    message: str | None,
) -> ContactRequest:
    """Message the owner of a listing the sender can see.

    The recipient is the owner at send time. Contacting yourself is refused
    and nothing is stored.
    """
    sender = require_verified(sender)
    if not message or not message.strip():
        raise InvalidInput("Message cannot be empty", entity="contact_request")

    prop = await get_property(session, sender, property_id)
    if prop.user_id == sender.user_id:
        raise InvalidInput("You cannot contact yourself", entity="contact_request")

    request = ContactRequest(
        property_id=prop.id,
        sender_id=sender.user_id,
        recipient_id=prop.user_id,
        message=message.strip(),
        is_read=False,
    )
    await ContactRequestRepository(session).add(request)
    await session.commit()
    logger.info("Contact request %s from %s to %s", request.id, sender.user_id, prop.user_id)
    return request


async def list_contact_requests(
    session: AsyncSession,
    user: UserContext | None,
) -> tuple[Sequence[ContactRequest], Sequence[ContactRequest]]:
    """Return ``(sent, received)``, newest first."""
    user = require_authenticated(user)
    requests = await ContactRequestRepository(session).list_for_user(user.user_id)
    sent = [r for r in requests if r.sender_id == user.user_id]
    received = [r for r in requests if r.recipient_id == user.user_id]
    return sent, received


async def mark_read(session: AsyncSession, user: UserContext | None, request_id: int) -> ContactRequest:
    user = require_authenticated(user)
    request = await ContactRequestRepository(session).get(request_id)
    if request is None:
        raise NotFound("contact_request", request_id)
    if request.recipient_id != user.user_id:
        raise Forbidden("Only the recipient can mark this read", entity="contact_request", entity_id=request_id)
    request.is_read = True
    await session.commit()
    return request

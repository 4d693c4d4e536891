# This project was developed with assistance from AI tools.
"""Tests for contact requests between buyers and listing owners."""

import pytest
from db import ContactRequest
from db.enums import UserRole
from sqlalchemy import func, select

from src.core.errors import Forbidden, InvalidInput, NotFound, Unverified
from src.middleware.auth import build_user_context
from src.services import contact as contact_service
from tests.factories import make_property, make_user


async def _count(session) -> int:
    return (await session.execute(select(func.count(ContactRequest.id)))).scalar()


@pytest.mark.asyncio
async def test_recipient_is_property_owner(session):
    owner, _ = await make_user(session, UserRole.WHOLESALER, verified=True)
    _, buyer = await make_user(session, UserRole.CASH_BUYER, verified=True)
    prop = await make_property(session, owner, approved=True)

    request = await contact_service.create_contact_request(session, buyer, prop.id, "  Still available?  ")

    assert request.recipient_id == owner.id
    assert request.sender_id == buyer.user_id
    assert request.message == "Still available?"
    assert request.is_read is False


@pytest.mark.asyncio
async def test_unverified_sender_refused(session):
    owner, _ = await make_user(session, UserRole.WHOLESALER, verified=True)
    _, buyer = await make_user(session, UserRole.CASH_BUYER, verified=False)
    prop = await make_property(session, owner, approved=True)

    with pytest.raises(Unverified):
        await contact_service.create_contact_request(session, buyer, prop.id, "hello")
    assert await _count(session) == 0


@pytest.mark.asyncio
async def test_self_contact_refused(session):
    owner, owner_ctx = await make_user(session, UserRole.WHOLESALER, verified=True)
    prop = await make_property(session, owner, approved=True)

    with pytest.raises(InvalidInput):
        await contact_service.create_contact_request(session, owner_ctx, prop.id, "note to self")
    assert await _count(session) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("message", ["", "   ", None])
async def test_empty_message_refused(session, message):
    owner, _ = await make_user(session, UserRole.WHOLESALER, verified=True)
    _, buyer = await make_user(session, UserRole.CASH_BUYER, verified=True)
    prop = await make_property(session, owner, approved=True)

    with pytest.raises(InvalidInput):
        await contact_service.create_contact_request(session, buyer, prop.id, message)


@pytest.mark.asyncio
async def test_cannot_contact_about_hidden_listing(session):
    owner, _ = await make_user(session, UserRole.WHOLESALER, verified=True)
    _, buyer = await make_user(session, UserRole.CASH_BUYER, verified=True)
    prop = await make_property(session, owner, approved=False)

    with pytest.raises(Forbidden):
        await contact_service.create_contact_request(session, buyer, prop.id, "hi")
    with pytest.raises(NotFound):
        await contact_service.create_contact_request(session, buyer, 999, "hi")


@pytest.mark.asyncio
async def test_list_splits_sent_and_received(session):
    owner, _ = await make_user(session, UserRole.WHOLESALER, verified=True)
    _, buyer = await make_user(session, UserRole.CASH_BUYER, verified=True)
    prop = await make_property(session, owner, approved=True)
    await contact_service.create_contact_request(session, buyer, prop.id, "first")
    await contact_service.create_contact_request(session, buyer, prop.id, "second")

    sent, received = await contact_service.list_contact_requests(session, buyer)
    assert [r.message for r in sent] == ["second", "first"]
    assert received == []

    sent, received = await contact_service.list_contact_requests(session, build_user_context(owner))
    assert sent == []
    assert len(received) == 2


@pytest.mark.asyncio
async def test_only_recipient_marks_read(session):
    owner, _ = await make_user(session, UserRole.WHOLESALER, verified=True)
    _, buyer = await make_user(session, UserRole.CASH_BUYER, verified=True)
    prop = await make_property(session, owner, approved=True)
    request = await contact_service.create_contact_request(session, buyer, prop.id, "ping")

    with pytest.raises(Forbidden):
        await contact_service.mark_read(session, buyer, request.id)

    updated = await contact_service.mark_read(session, build_user_context(owner), request.id)
    assert updated.is_read is True

# This project was developed with assistance from AI tools.
"""Tests for deal closing and commission."""

from decimal import Decimal

import pytest
from db import Property
from db.enums import PropertyStatus, UserRole

from src.core.errors import Conflict, Forbidden, InvalidInput, NotFound, Unverified
from src.middleware.auth import build_user_context
from src.services import closing as closing_service
from tests.factories import make_admin, make_property, make_user

PROOF = "uploads/proof_document-1.pdf"


@pytest.mark.parametrize(
    "fee,expected",
    [(8_500, 595), (8_533, 597), (10_000, 700), (50, 4), (1, 0)],
)
def test_compute_commission_half_up(fee, expected):
    assert closing_service.compute_commission(fee) == expected


def test_compute_commission_custom_rate():
    assert closing_service.compute_commission(10_000, Decimal("0.05")) == 500


async def _listing(session, *, status=PropertyStatus.AVAILABLE):
    seller, seller_ctx = await make_user(session, UserRole.WHOLESALER, verified=True)
    buyer, _ = await make_user(session, UserRole.CASH_BUYER, verified=True)
    prop = await make_property(session, seller, approved=True, status=status)
    return prop, seller_ctx, buyer


@pytest.mark.asyncio
async def test_close_deal_moves_property_to_closed(session):
    prop, seller, buyer = await _listing(session)

    deal = await closing_service.close_deal(session, seller, prop.id, buyer.id, 10_000, PROOF)

    assert deal.commission_amount == 700
    assert deal.commission_paid is False
    assert deal.seller_id == seller.user_id
    assert deal.buyer_id == buyer.id
    stored = await session.get(Property, prop.id)
    assert stored.status == PropertyStatus.CLOSED


@pytest.mark.asyncio
async def test_close_from_under_contract(session):
    prop, seller, buyer = await _listing(session, status=PropertyStatus.UNDER_CONTRACT)
    deal = await closing_service.close_deal(session, seller, prop.id, buyer.id, 8_533, PROOF)
    assert deal.commission_amount == 597


@pytest.mark.asyncio
async def test_close_by_non_owner_leaves_property_untouched(session):
    prop, _, buyer = await _listing(session)
    _, stranger = await make_user(session, UserRole.WHOLESALER, verified=True)

    with pytest.raises(Forbidden):
        await closing_service.close_deal(session, stranger, prop.id, buyer.id, 10_000, PROOF)

    await session.refresh(prop)
    assert prop.status == PropertyStatus.AVAILABLE


@pytest.mark.asyncio
async def test_check_closable_runs_without_proof(session):
    prop, seller, buyer = await _listing(session)
    _, stranger = await make_user(session, UserRole.WHOLESALER, verified=True)

    checked = await closing_service.check_closable(session, seller, prop.id, buyer.id, 10_000)
    assert checked.id == prop.id
    with pytest.raises(Forbidden):
        await closing_service.check_closable(session, stranger, prop.id, buyer.id, 10_000)
    with pytest.raises(NotFound):
        await closing_service.check_closable(session, seller, 9999, buyer.id, 10_000)


@pytest.mark.asyncio
async def test_close_by_admin_is_forbidden(session):
    prop, _, buyer = await _listing(session)
    _, admin = await make_admin(session)
    with pytest.raises(Forbidden):
        await closing_service.close_deal(session, admin, prop.id, buyer.id, 10_000, PROOF)


@pytest.mark.asyncio
async def test_close_requires_verified(session):
    seller, seller_ctx = await make_user(session, UserRole.WHOLESALER, verified=False)
    buyer, _ = await make_user(session, UserRole.CASH_BUYER)
    prop = await make_property(session, seller)
    with pytest.raises(Unverified):
        await closing_service.close_deal(session, seller_ctx, prop.id, buyer.id, 10_000, PROOF)


@pytest.mark.asyncio
async def test_close_missing_property(session):
    _, seller, buyer = await _listing(session)
    with pytest.raises(NotFound):
        await closing_service.close_deal(session, seller, 999, buyer.id, 10_000, PROOF)


@pytest.mark.asyncio
async def test_close_requires_proof(session):
    prop, seller, buyer = await _listing(session)
    with pytest.raises(InvalidInput):
        await closing_service.close_deal(session, seller, prop.id, buyer.id, 10_000, None)


@pytest.mark.asyncio
@pytest.mark.parametrize("fee", [0, -100])
async def test_close_requires_positive_fee(session, fee):
    prop, seller, buyer = await _listing(session)
    with pytest.raises(InvalidInput):
        await closing_service.close_deal(session, seller, prop.id, buyer.id, fee, PROOF)


@pytest.mark.asyncio
async def test_close_unknown_buyer(session):
    prop, seller, _ = await _listing(session)
    with pytest.raises(InvalidInput):
        await closing_service.close_deal(session, seller, prop.id, 4242, 10_000, PROOF)


@pytest.mark.asyncio
async def test_close_to_self(session):
    prop, seller, _ = await _listing(session)
    with pytest.raises(InvalidInput):
        await closing_service.close_deal(session, seller, prop.id, seller.user_id, 10_000, PROOF)


@pytest.mark.asyncio
async def test_second_close_conflicts(session):
    prop, seller, buyer = await _listing(session)
    await closing_service.close_deal(session, seller, prop.id, buyer.id, 10_000, PROOF)

    with pytest.raises(Conflict):
        await closing_service.close_deal(session, seller, prop.id, buyer.id, 10_000, PROOF)

    deals = await closing_service.list_closed_deals(session, seller)
    assert len(deals) == 1


@pytest.mark.asyncio
async def test_list_closed_deals_parties_and_admin(session):
    prop, seller, buyer = await _listing(session)
    _, outsider = await make_user(session, UserRole.CASH_BUYER, verified=True)
    _, admin = await make_admin(session)
    await closing_service.close_deal(session, seller, prop.id, buyer.id, 10_000, PROOF)

    assert len(await closing_service.list_closed_deals(session, seller)) == 1
    assert len(await closing_service.list_closed_deals(session, build_user_context(buyer))) == 1
    assert len(await closing_service.list_closed_deals(session, outsider)) == 0
    assert len(await closing_service.list_closed_deals(session, admin)) == 1


@pytest.mark.asyncio
async def test_get_deal_parties_only(session):
    prop, seller, buyer = await _listing(session)
    _, outsider = await make_user(session, UserRole.CASH_BUYER, verified=True)
    deal = await closing_service.close_deal(session, seller, prop.id, buyer.id, 10_000, PROOF)

    assert (await closing_service.get_deal(session, build_user_context(buyer), deal.id)).id == deal.id
    with pytest.raises(Forbidden):
        await closing_service.get_deal(session, outsider, deal.id)


@pytest.mark.asyncio
async def test_mark_commission_paid_keeps_first_timestamp(session):
    prop, seller, buyer = await _listing(session)
    deal = await closing_service.close_deal(session, seller, prop.id, buyer.id, 10_000, PROOF)

    paid = await closing_service.mark_commission_paid(session, seller, deal.id)
    first_paid_at = paid.commission_paid_at
    again = await closing_service.mark_commission_paid(session, seller, deal.id)

    assert again.commission_paid is True
    assert again.commission_paid_at == first_paid_at


@pytest.mark.asyncio
async def test_mark_commission_paid_seller_only(session):
    prop, seller, buyer = await _listing(session)
    deal = await closing_service.close_deal(session, seller, prop.id, buyer.id, 10_000, PROOF)
    _, admin = await make_admin(session)

    with pytest.raises(Forbidden):
        await closing_service.mark_commission_paid(session, admin, deal.id)


@pytest.mark.asyncio
async def test_mark_commission_paid_unknown_deal(session):
    _, seller, _ = await _listing(session)
    with pytest.raises(NotFound):
        await closing_service.mark_commission_paid(session, seller, 31337)

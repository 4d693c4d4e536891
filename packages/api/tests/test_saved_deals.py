# This project was developed with assistance from AI tools.
"""Tests for saved-deal bookmarks and buyer criteria."""

import pytest
from db.enums import ClosingTimeframe, ExitStrategy, FinancingType, PropertyType, UserRole

from src.core.errors import Forbidden, NotFound, Unauthorized
from src.schemas.buyer_criteria import BuyerCriteriaUpsert
from src.services import buyer_criteria as criteria_service
from src.services import saved_deal as saved_deal_service
from tests.factories import make_property, make_user

# ---------------------------------------------------------------------------
# Saved deals
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_saving_twice_creates_two_rows(session):
    owner, _ = await make_user(session, UserRole.WHOLESALER, verified=True)
    _, buyer = await make_user(session)
    prop = await make_property(session, owner, approved=True)

    first = await saved_deal_service.save_deal(session, buyer, prop.id)
    second = await saved_deal_service.save_deal(session, buyer, prop.id)

    assert first.id != second.id
    saved = await saved_deal_service.list_saved_deals(session, buyer)
    assert len(saved) == 2


@pytest.mark.asyncio
async def test_save_requires_visible_listing(session):
    owner, _ = await make_user(session, UserRole.WHOLESALER, verified=True)
    _, buyer = await make_user(session)
    hidden = await make_property(session, owner, approved=False)

    with pytest.raises(Forbidden):
        await saved_deal_service.save_deal(session, buyer, hidden.id)
    with pytest.raises(NotFound):
        await saved_deal_service.save_deal(session, buyer, 999)


@pytest.mark.asyncio
async def test_save_requires_login(session):
    with pytest.raises(Unauthorized):
        await saved_deal_service.save_deal(session, None, 1)


@pytest.mark.asyncio
async def test_delete_own_saved_deal(session):
    owner, _ = await make_user(session, UserRole.WHOLESALER, verified=True)
    _, buyer = await make_user(session)
    _, other = await make_user(session)
    prop = await make_property(session, owner, approved=True)
    saved = await saved_deal_service.save_deal(session, buyer, prop.id)

    with pytest.raises(Forbidden):
        await saved_deal_service.delete_saved_deal(session, other, saved.id)

    await saved_deal_service.delete_saved_deal(session, buyer, saved.id)
    assert await saved_deal_service.list_saved_deals(session, buyer) == []

    with pytest.raises(NotFound):
        await saved_deal_service.delete_saved_deal(session, buyer, saved.id)


# ---------------------------------------------------------------------------
# Buyer criteria
# ---------------------------------------------------------------------------


def _criteria(**overrides) -> BuyerCriteriaUpsert:
    fields = {
        "locations": ["Austin, TX"],
        "property_types": [PropertyType.SINGLE_FAMILY],
        "min_price": 50_000,
        "max_price": 200_000,
        "financing_type": FinancingType.CASH,
        "exit_strategy": ExitStrategy.FLIP,
        "closing_timeframe": ClosingTimeframe.DAYS_30,
    }
    fields.update(overrides)
    return BuyerCriteriaUpsert(**fields)


@pytest.mark.asyncio
async def test_criteria_upsert_keeps_one_row(session):
    _, buyer = await make_user(session)

    created = await criteria_service.upsert_criteria(session, buyer, _criteria())
    updated = await criteria_service.upsert_criteria(
        session, buyer, _criteria(locations=["Dallas, TX"], exit_strategy=None)
    )

    assert updated.id == created.id
    assert updated.locations == ["Dallas, TX"]
    assert updated.exit_strategy is None

    fetched = await criteria_service.get_criteria(session, buyer)
    assert fetched.id == created.id
    assert fetched.property_types == ["single_family"]

    await session.refresh(fetched)
    assert fetched.closing_timeframe is ClosingTimeframe.DAYS_30
    assert fetched.financing_type is FinancingType.CASH


@pytest.mark.asyncio
async def test_criteria_missing(session):
    _, buyer = await make_user(session)
    with pytest.raises(NotFound):
        await criteria_service.get_criteria(session, buyer)


def test_criteria_price_range_must_be_ordered():
    with pytest.raises(ValueError):
        _criteria(min_price=300_000, max_price=100_000)

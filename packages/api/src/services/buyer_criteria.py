# This project was developed with assistance from AI tools.
"""Buyer criteria: at most one row per user, upserted in place."""

from db import BuyerCriteria
from db.repositories import BuyerCriteriaRepository
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import require_authenticated
from ..core.errors import NotFound
from ..schemas.auth import UserContext
from ..schemas.buyer_criteria import BuyerCriteriaUpsert


async def upsert_criteria(
    session: AsyncSession,
    user: UserContext | None,
    payload: BuyerCriteriaUpsert,
) -> BuyerCriteria:
    user = require_authenticated(user)
    repo = BuyerCriteriaRepository(session)
    values = payload.model_dump()
    # The JSON column holds enum values
    values["property_types"] = [t.value for t in payload.property_types]

    criteria = await repo.get_for_user(user.user_id)
    if criteria is None:
        criteria = await repo.add(BuyerCriteria(user_id=user.user_id, **values))
    else:
        for field, value in values.items():
            setattr(criteria, field, value)
    await session.commit()
    return criteria


async def get_criteria(session: AsyncSession, user: UserContext | None) -> BuyerCriteria:
    user = require_authenticated(user)
    criteria = await BuyerCriteriaRepository(session).get_for_user(user.user_id)
    if criteria is None:
        raise NotFound("buyer_criteria", user.user_id)
    return criteria

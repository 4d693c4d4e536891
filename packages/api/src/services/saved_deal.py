# This project was developed with assistance from AI tools.
"""Bookmarks on listings. Saving the same property twice creates two rows."""

from collections.abc import Sequence

from db import SavedDeal
from db.repositories import SavedDealRepository
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import require_authenticated
from ..core.errors import Forbidden, NotFound
from ..schemas.auth import UserContext
from .listing import get_property


async def save_deal(session: AsyncSession, user: UserContext | None, property_id: int) -> SavedDeal:
    user = require_authenticated(user)
    # Raises NotFound / Forbidden for missing or hidden listings
    await get_property(session, user, property_id)
    saved = SavedDeal(user_id=user.user_id, property_id=property_id)
    await SavedDealRepository(session).add(saved)
    await session.commit()
    return saved


async def list_saved_deals(session: AsyncSession, user: UserContext | None) -> Sequence[SavedDeal]:
    user = require_authenticated(user)
    return await SavedDealRepository(session).list_for_user(user.user_id)


async def delete_saved_deal(session: AsyncSession, user: UserContext | None, saved_deal_id: int) -> None:
    user = require_authenticated(user)
    repo = SavedDealRepository(session)
    saved = await repo.get(saved_deal_id)
    if saved is None:
        raise NotFound("saved_deal", saved_deal_id)
    if saved.user_id != user.user_id:
        raise Forbidden("Not your saved deal", entity="saved_deal", entity_id=saved_deal_id)
    await repo.delete(saved)
    await session.commit()

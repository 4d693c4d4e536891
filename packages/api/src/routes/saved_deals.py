# This project was developed with assistance from AI tools.
"""Saved deal (bookmark) endpoints."""

from db import get_db
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentUser
from ..schemas.saved_deal import SavedDealCreate, SavedDealListResponse, SavedDealResponse
from ..services import saved_deal as saved_deal_service

router = APIRouter()


@router.post("", response_model=SavedDealResponse, status_code=201)
async def save_deal(
    body: SavedDealCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> SavedDealResponse:
    saved = await saved_deal_service.save_deal(session, user, body.property_id)
    return SavedDealResponse.model_validate(saved)


@router.get("", response_model=SavedDealListResponse)
async def list_saved_deals(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> SavedDealListResponse:
    items = await saved_deal_service.list_saved_deals(session, user)
    return SavedDealListResponse(
        data=[SavedDealResponse.model_validate(s) for s in items],
        count=len(items),
    )


@router.delete("/{saved_deal_id}", status_code=204)
async def delete_saved_deal(
    saved_deal_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> Response:
    await saved_deal_service.delete_saved_deal(session, user, saved_deal_id)
    return Response(status_code=204)

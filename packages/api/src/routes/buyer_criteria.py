# This project was developed with assistance from AI tools.
"""Buyer criteria endpoints. PUT and POST both upsert the caller's single row."""

from db import get_db
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentUser
from ..schemas.buyer_criteria import BuyerCriteriaResponse, BuyerCriteriaUpsert
from ..services import buyer_criteria as criteria_service

router = APIRouter()


@router.put("", response_model=BuyerCriteriaResponse)
@router.post("", response_model=BuyerCriteriaResponse)
async def upsert_criteria(
    body: BuyerCriteriaUpsert,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> BuyerCriteriaResponse:
    criteria = await criteria_service.upsert_criteria(session, user, body)
    return BuyerCriteriaResponse.model_validate(criteria)


@router.get("", response_model=BuyerCriteriaResponse)
async def get_criteria(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> BuyerCriteriaResponse:
    criteria = await criteria_service.get_criteria(session, user)
    return BuyerCriteriaResponse.model_validate(criteria)

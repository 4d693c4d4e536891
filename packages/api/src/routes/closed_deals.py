# This project was developed with assistance from AI tools.
"""Deal closing endpoints."""

from db import get_db
from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentUser, VerifiedUser
from ..schemas.deal import ClosedDealListResponse, ClosedDealResponse
from ..services import closing as closing_service
from ._uploads import store_upload

router = APIRouter()


@router.post("", response_model=ClosedDealResponse, status_code=201)
async def close_deal(
    user: VerifiedUser,
    property_id: int = Form(...),
    buyer_id: int = Form(...),
    assignment_fee: int = Form(...),
    proof_document: UploadFile | None = File(default=None),
    session: AsyncSession = Depends(get_db),
) -> ClosedDealResponse:
    """Record a closed assignment. Only the listing owner may close it."""
    # Refuse before the proof touches storage
    await closing_service.check_closable(session, user, property_id, buyer_id, assignment_fee)
    proof_path = await store_upload(proof_document, "proof_document")
    deal = await closing_service.close_deal(
        session, user, property_id, buyer_id, assignment_fee, proof_path
    )
    return ClosedDealResponse.model_validate(deal)


@router.get("", response_model=ClosedDealListResponse)
async def list_closed_deals(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ClosedDealListResponse:
    deals = await closing_service.list_closed_deals(session, user)
    return ClosedDealListResponse(
        data=[ClosedDealResponse.model_validate(d) for d in deals],
        count=len(deals),
    )


@router.get("/{deal_id}", response_model=ClosedDealResponse)
async def get_closed_deal(
    deal_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ClosedDealResponse:
    deal = await closing_service.get_deal(session, user, deal_id)
    return ClosedDealResponse.model_validate(deal)


@router.patch("/{deal_id}/pay-commission", response_model=ClosedDealResponse)
async def pay_commission(
    deal_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ClosedDealResponse:
    """Seller attests the platform commission was paid."""
    deal = await closing_service.mark_commission_paid(session, user, deal_id)
    return ClosedDealResponse.model_validate(deal)

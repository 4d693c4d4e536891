# This project was developed with assistance from AI tools.
"""Contact request endpoints."""

from db import get_db
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentUser, VerifiedUser
from ..schemas.contact import (
    ContactRequestCreate,
    ContactRequestListResponse,
    ContactRequestResponse,
)
from ..services import contact as contact_service

router = APIRouter()


@router.post("", response_model=ContactRequestResponse, status_code=201)
async def create_contact_request(
    body: ContactRequestCreate,
    user: VerifiedUser,
    session: AsyncSession = Depends(get_db),
) -> ContactRequestResponse:
    """Message a listing's owner. Verified accounts only."""
    request = await contact_service.create_contact_request(session, user, body.property_id, body.message)
    return ContactRequestResponse.model_validate(request)


@router.get("", response_model=ContactRequestListResponse)
async def list_contact_requests(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ContactRequestListResponse:
    sent, received = await contact_service.list_contact_requests(session, user)
    return ContactRequestListResponse(
        sent=[ContactRequestResponse.model_validate(r) for r in sent],
        received=[ContactRequestResponse.model_validate(r) for r in received],
    )


@router.patch("/{request_id}/read", response_model=ContactRequestResponse)
async def mark_read(
    request_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ContactRequestResponse:
    request = await contact_service.mark_read(session, user, request_id)
    return ContactRequestResponse.model_validate(request)

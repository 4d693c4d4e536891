# This project was developed with assistance from AI tools.
"""Admin console API, authenticated by the shared ADMIN_CONSOLE_SECRET.

A separate trust domain from role=admin users: the console principal has
no account and can only use the endpoints in this module.
"""

import logging

from db import get_db
from db.enums import DocumentStatus, UserRole, VerificationStatus
from db.repositories import UserRepository
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import require_console
from ..schemas.deal import ClosedDealListResponse, ClosedDealResponse
from ..schemas.user import UserListResponse, UserResponse
from ..schemas.verification import DocumentListResponse, DocumentResponse
from ..services import closing as closing_service
from ..services import verification as verification_service
from ..services.storage import content_type_for, get_storage_service

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_console)])

_CONSOLE_ACTOR = "console"


async def _list_by_role(
    session: AsyncSession,
    role: UserRole,
    verification_status: VerificationStatus | None,
) -> UserListResponse:
    users = await UserRepository(session).search(role=role, verification_status=verification_status)
    return UserListResponse(data=[UserResponse.model_validate(u) for u in users], count=len(users))


@router.get("/deals", response_model=ClosedDealListResponse)
async def list_deals(session: AsyncSession = Depends(get_db)) -> ClosedDealListResponse:
    deals = await closing_service.list_all_deals(session)
    return ClosedDealListResponse(
        data=[ClosedDealResponse.model_validate(d) for d in deals],
        count=len(deals),
    )


@router.get("/buyers", response_model=UserListResponse)
async def list_buyers(
    verification_status: VerificationStatus | None = Query(default=VerificationStatus.PENDING),
    session: AsyncSession = Depends(get_db),
) -> UserListResponse:
    """Cash buyers, unverified ones by default."""
    return await _list_by_role(session, UserRole.CASH_BUYER, verification_status)


@router.get("/sellers", response_model=UserListResponse)
async def list_sellers(
    verification_status: VerificationStatus | None = Query(default=VerificationStatus.PENDING),
    session: AsyncSession = Depends(get_db),
) -> UserListResponse:
    """Wholesalers, unverified ones by default."""
    return await _list_by_role(session, UserRole.WHOLESALER, verification_status)


@router.patch("/buyers/{user_id}/verify", response_model=UserResponse)
async def verify_buyer(user_id: int, session: AsyncSession = Depends(get_db)) -> UserResponse:
    user = await verification_service.set_user_verification(
        session,
        user_id,
        VerificationStatus.VERIFIED,
        actor_role=_CONSOLE_ACTOR,
        expected_role=UserRole.CASH_BUYER,
    )
    return UserResponse.model_validate(user)


@router.patch("/sellers/{user_id}/verify", response_model=UserResponse)
async def verify_seller(user_id: int, session: AsyncSession = Depends(get_db)) -> UserResponse:
    user = await verification_service.set_user_verification(
        session,
        user_id,
        VerificationStatus.VERIFIED,
        actor_role=_CONSOLE_ACTOR,
        expected_role=UserRole.WHOLESALER,
    )
    return UserResponse.model_validate(user)


@router.get("/verification-documents", response_model=DocumentListResponse)
async def list_verification_documents(
    status: DocumentStatus | None = Query(default=None),
    session: AsyncSession = Depends(get_db),
) -> DocumentListResponse:
    documents = await verification_service.list_all_documents(session, status=status)
    return DocumentListResponse(
        data=[DocumentResponse.model_validate(d) for d in documents],
        count=len(documents),
    )


@router.get("/files/{filename}")
async def get_file(filename: str) -> Response:
    """Serve an uploaded file by its stored name."""
    data = await get_storage_service().read(filename)
    logger.info("Console fetched file %s", filename)
    return Response(content=data, media_type=content_type_for(filename))

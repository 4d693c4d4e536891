# This project was developed with assistance from AI tools.
"""Per-user dashboard summary."""

from db import get_db
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentUser
from ..schemas.dashboard import DashboardResponse
from ..services.dashboard import user_dashboard

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> DashboardResponse:
    return await user_dashboard(session, user)

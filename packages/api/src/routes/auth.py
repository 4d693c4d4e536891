# This project was developed with assistance from AI tools.
"""Registration, login and current-user endpoints."""

from db import get_db
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import capabilities
from ..middleware.auth import CurrentUser
from ..schemas.auth import LoginRequest, TokenResponse
from ..schemas.user import Capabilities, MeResponse, RegisterRequest, UserResponse
from ..services import users as user_service

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(
    payload: RegisterRequest,
    session: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Create a wholesaler or cash buyer account, pending verification."""
    user = await user_service.register(session, payload)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: LoginRequest,
    session: AsyncSession = Depends(get_db),
) -> TokenResponse:
    return await user_service.login(session, payload.username, payload.password)


@router.get("/me", response_model=MeResponse)
async def me(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> MeResponse:
    """The caller's account, with what their verification state unlocks."""
    row = await user_service.get_user(session, user.user_id)
    return MeResponse(
        **UserResponse.model_validate(row).model_dump(),
        capabilities=Capabilities(**capabilities(user)),
    )

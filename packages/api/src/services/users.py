# This project was developed with assistance from AI tools.
"""Account service: registration, login and lookup."""

import logging

from db import User
from db.enums import UserRole, VerificationStatus
from db.repositories import UserRepository
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.errors import Conflict, InvalidInput, NotFound, Unauthorized
from ..core.security import create_access_token, hash_password, verify_password
from ..schemas.auth import TokenResponse
from ..schemas.user import RegisterRequest

logger = logging.getLogger(__name__)


async def create_user(
    session: AsyncSession,
    *,
    username: str,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    role: UserRole,
) -> User:
    """Insert a user after checking username and email uniqueness.

    Does not restrict the role; callers exposed to the public must.
    """
    repo = UserRepository(session)
    if await repo.get_by_username(username) is not None:
        raise Conflict("Username already taken", entity="user")
    if await repo.get_by_email(email) is not None:
        raise Conflict("Email already registered", entity="user")

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        role=role,
    )
    user.set_verification(VerificationStatus.PENDING)
    await repo.add(user)
    await session.commit()
    logger.info("User %s registered (id=%s role=%s)", username, user.id, role.value)
    return user


async def register(session: AsyncSession, payload: RegisterRequest) -> User:
    if payload.role not in UserRole.self_registerable():
        raise InvalidInput("Role cannot be self-registered", entity="user")
    return await create_user(
        session,
        username=payload.username,
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        role=payload.role,
    )


async def authenticate(session: AsyncSession, username: str, password: str) -> User:
    """Return the user for valid credentials, else Unauthorized (same message either way)."""
    user = await UserRepository(session).get_by_username(username)
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Failed login for username=%s", username)
        raise Unauthorized("Invalid username or password")
    return user


async def login(session: AsyncSession, username: str, password: str) -> TokenResponse:
    user = await authenticate(session, username, password)
    return TokenResponse(
        access_token=create_access_token(user.id, user.role),
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
    )


async def get_user(session: AsyncSession, user_id: int) -> User:
    user = await UserRepository(session).get(user_id)
    if user is None:
        raise NotFound("user", user_id)
    return user

# This project was developed with assistance from AI tools.
"""
JWT authentication middleware.

Validates HS256 Bearer tokens issued by ``/api/auth/login``, reloads the user
row on every request, and provides FastAPI dependencies for route-level auth.
Verification state therefore comes from the store, never from the token.

The admin console is a separate trust domain: a shared secret presented as a
Bearer token, yielding a ``ConsolePrincipal`` instead of a ``UserContext``.

Set AUTH_DISABLED=true to bypass validation (tests / local dev).
"""

import hmac
import logging
from typing import Annotated

import jwt
from db import User, VerificationStatus, get_db
from db.enums import UserRole
from db.repositories import UserRepository
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core import auth as guards
from ..core.config import settings
from ..core.security import decode_access_token
from ..schemas.auth import ConsolePrincipal, UserContext

logger = logging.getLogger(__name__)

_BEARER_HEADERS = {"WWW-Authenticate": "Bearer"}


# ---------------------------------------------------------------------------
# Token validation
# ---------------------------------------------------------------------------

def _extract_token(request: Request) -> str | None:
    """Extract Bearer token from Authorization header."""
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth[7:]
    return None


def build_user_context(user: User) -> UserContext:
    return UserContext(
        user_id=user.id,
        username=user.username,
        role=user.role,
        email=user.email,
        name=f"{user.first_name} {user.last_name}".strip(),
        is_verified=user.is_verified,
        verification_status=user.verification_status,
    )


async def _resolve_user(token: str, session: AsyncSession) -> UserContext:
    try:
        payload = decode_access_token(token)
        user_id = int(payload.sub)
    except jwt.ExpiredSignatureError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers=_BEARER_HEADERS,
        ) from exc
    except (jwt.InvalidTokenError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers=_BEARER_HEADERS,
        ) from exc

    user = await UserRepository(session).get(user_id)
    if user is None:
        logger.warning("Token for unknown user id=%s", user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers=_BEARER_HEADERS,
        )
    return build_user_context(user)


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------

_DISABLED_USER = UserContext(
    user_id=0,
    username="dev-admin",
    role=UserRole.ADMIN,
    email="dev@wholesale-deals.local",
    name="Dev Admin",
    is_verified=True,
    verification_status=VerificationStatus.VERIFIED,
)


async def get_current_user(
    request: Request,
    session: AsyncSession = Depends(get_db),
) -> UserContext:
    """FastAPI dependency: validate JWT and return UserContext.

    When AUTH_DISABLED=true, returns a dev admin user without token validation.
    """
    if settings.AUTH_DISABLED:
        return _DISABLED_USER

    token = _extract_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication token",
            headers=_BEARER_HEADERS,
        )
    return await _resolve_user(token, session)


async def get_optional_user(
    request: Request,
    session: AsyncSession = Depends(get_db),
) -> UserContext | None:
    """Like get_current_user, but anonymous callers get None.

    A token that is present but invalid is still rejected.
    """
    if settings.AUTH_DISABLED:
        return _DISABLED_USER

    token = _extract_token(request)
    if not token:
        return None
    return await _resolve_user(token, session)


# Type aliases for use in route signatures
CurrentUser = Annotated[UserContext, Depends(get_current_user)]
OptionalUser = Annotated[UserContext | None, Depends(get_optional_user)]


def require_roles(*allowed_roles: UserRole):
    """Dependency factory: restrict a route to specific roles.

    Usage:
        @router.get("/admin-only", dependencies=[Depends(require_roles(UserRole.ADMIN))])
    """

    async def _check(user: CurrentUser) -> UserContext:
        if user.role not in allowed_roles:
            logger.warning(
                "RBAC denied: user=%s role=%s attempted route requiring %s",
                user.user_id,
                user.role.value,
                [r.value for r in allowed_roles],
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return user

    return _check


async def require_verified_user(user: CurrentUser) -> UserContext:
    """Dependency: the caller's account must be verified (403 otherwise)."""
    return guards.require_verified(user)


VerifiedUser = Annotated[UserContext, Depends(require_verified_user)]


# ---------------------------------------------------------------------------
# Admin console (shared-secret trust domain)
# ---------------------------------------------------------------------------

def check_console_secret(candidate: str | None) -> bool:
    """Constant-time comparison against ADMIN_CONSOLE_SECRET."""
    secret = settings.ADMIN_CONSOLE_SECRET
    if not secret or not candidate:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))


async def require_console(request: Request) -> ConsolePrincipal:
    """FastAPI dependency for /api/console routes."""
    if not settings.ADMIN_CONSOLE_SECRET:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Admin console is disabled",
        )

    token = _extract_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing console secret",
            headers=_BEARER_HEADERS,
        )
    if not check_console_secret(token):
        logger.warning("Admin console access denied: wrong secret")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid console secret",
        )
    return ConsolePrincipal()


Console = Annotated[ConsolePrincipal, Depends(require_console)]

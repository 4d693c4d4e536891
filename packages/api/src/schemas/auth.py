# This project was developed with assistance from AI tools.
"""Authentication and authorization schemas."""

from db.enums import UserRole, VerificationStatus
from pydantic import BaseModel, ConfigDict, Field


class UserContext(BaseModel):
    """Injected by auth middleware into every authenticated request.

    Built from the stored user row on each request, so an admin's
    verification decision applies to the very next call.
    """

    model_config = ConfigDict(frozen=True)

    user_id: int
    username: str
    role: UserRole
    email: str = ""
    name: str = ""
    is_verified: bool = False
    verification_status: VerificationStatus = VerificationStatus.PENDING


class ConsolePrincipal(BaseModel):
    """Holder of the shared admin-console secret.

    Deliberately not a UserContext: it has no user id, no role and cannot
    reach any user-facing route.
    """

    model_config = ConfigDict(frozen=True)

    name: str = "admin-console"


class TokenPayload(BaseModel):
    """Decoded access token claims."""

    sub: str
    role: UserRole
    exp: int | None = None
    iat: int | None = None


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int

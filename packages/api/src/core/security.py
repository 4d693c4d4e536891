# This project was developed with assistance from AI tools.
"""Password hashing and access-token signing.

Passwords are stored as bcrypt hashes. Tokens are HS256 JWTs whose ``sub``
is the numeric user id; the role claim is advisory only, the middleware
reloads the user row on every request.
"""

from datetime import UTC, datetime, timedelta

import jwt
from bcrypt import checkpw, gensalt, hashpw
from db.enums import UserRole

from ..schemas.auth import TokenPayload
from .config import settings
from .errors import InvalidInput

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise InvalidInput(f"Password must be at most {MAX_PASSWORD_BYTES} bytes", entity="user")
    return hashpw(raw, gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, stored_hash: str) -> bool:
    """Check a password against a stored bcrypt hash. Malformed hashes never match."""
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        return False
    try:
        return checkpw(raw, stored_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(user_id: int, role: UserRole, expires_minutes: int | None = None) -> str:
    now = datetime.now(UTC)
    lifetime = timedelta(minutes=expires_minutes or settings.JWT_EXPIRE_MINUTES)
    claims = {
        "sub": str(user_id),
        "role": role.value,
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> TokenPayload:
    """Validate signature and expiry. Raises jwt.InvalidTokenError subclasses."""
    payload = jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "exp"]},
    )
    return TokenPayload(**payload)

# This project was developed with assistance from AI tools.
"""Pure access-control guards with no FastAPI or HTTP dependencies.

Each guard takes the requester (``None`` for anonymous) and either returns
the narrowed ``UserContext`` or raises a domain error. Services call these
directly; ``middleware/auth.py`` wraps them as FastAPI dependencies.
"""

from db import Property
from db.enums import UserRole

from ..schemas.auth import UserContext
from .errors import Forbidden, Unauthorized, Unverified


def require_authenticated(user: UserContext | None) -> UserContext:
    """Fail with Unauthorized when there is no identity. Ignores role and verification."""
    if user is None:
        raise Unauthorized("Authentication required")
    return user


def require_verified(user: UserContext | None) -> UserContext:
    """Authenticated and admin-verified."""
    user = require_authenticated(user)
    if not user.is_verified:
        raise Unverified(
            "Your account must be verified to access this feature",
            entity="user",
            entity_id=user.user_id,
        )
    return user


def require_role(user: UserContext | None, *roles: UserRole) -> UserContext:
    """Authenticated and holding one of ``roles``."""
    user = require_authenticated(user)
    if user.role not in roles:
        raise Forbidden(
            f"Requires role: {', '.join(r.value for r in roles)}",
            entity="user",
            entity_id=user.user_id,
        )
    return user


def is_admin(user: UserContext | None) -> bool:
    return user is not None and user.role == UserRole.ADMIN


def is_owner_or_admin(user: UserContext | None, owner_id: int) -> bool:
    return user is not None and (user.user_id == owner_id or user.role == UserRole.ADMIN)


def can_view_property(user: UserContext | None, prop: Property) -> bool:
    """Approved listings are public; others only for their owner or an admin."""
    return bool(prop.is_approved) or is_owner_or_admin(user, prop.user_id)


def can_view_documents(user: UserContext | None, prop: Property) -> bool:
    """The owner and admins always; anyone else must be verified and able to see the listing."""
    if is_owner_or_admin(user, prop.user_id):
        return True
    return user is not None and user.is_verified and can_view_property(user, prop)


def capabilities(user: UserContext) -> dict[str, bool]:
    """What the verification state unlocks for this user."""
    verified = user.is_verified
    return {
        "can_post_properties": verified and user.role == UserRole.WHOLESALER,
        "can_close_deals": verified and user.role == UserRole.WHOLESALER,
        "can_contact_owners": verified,
        "can_view_documents": verified,
    }

# This project was developed with assistance from AI tools.
"""Domain error taxonomy.

Services raise exactly one of these; ``main.py`` renders them as RFC 7807
problem documents. Each carries the entity type and id (when known) so the
caller can build a message without parsing text.
"""

from fastapi import status


class MarketplaceError(Exception):
    """Base class. ``status_code`` is the HTTP mapping used by the app handler."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str,
        *,
        entity: str | None = None,
        entity_id: int | str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.entity = entity
        self.entity_id = entity_id


class NotFound(MarketplaceError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: int | str):
        super().__init__(f"{entity} not found", entity=entity, entity_id=entity_id)


class Unauthorized(MarketplaceError):
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(MarketplaceError):
    status_code = status.HTTP_403_FORBIDDEN


class Unverified(Forbidden):
    """Authenticated, but the account has not been verified by an admin."""


class InvalidInput(MarketplaceError):
    status_code = 422


class Conflict(MarketplaceError):
    status_code = status.HTTP_409_CONFLICT


class UploadTooLarge(InvalidInput):
    status_code = 413

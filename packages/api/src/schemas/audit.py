# This project was developed with assistance from AI tools.
"""Pydantic response schemas for audit trail endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AuditEventItem(BaseModel):
    """Single audit event in a query response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    timestamp: datetime
    event_type: str
    actor_id: int | None = None
    actor_role: str | None = None
    entity: str
    entity_id: int
    event_data: dict | None = None


class AuditSearchResponse(BaseModel):
    """Response for audit trail search queries."""

    count: int
    events: list[AuditEventItem]

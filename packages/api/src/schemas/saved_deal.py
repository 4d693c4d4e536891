# This project was developed with assistance from AI tools.
"""Saved deal (bookmark) schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class SavedDealCreate(BaseModel):
    property_id: int


class SavedDealResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    property_id: int
    saved_at: datetime


class SavedDealListResponse(BaseModel):
    data: list[SavedDealResponse]
    count: int

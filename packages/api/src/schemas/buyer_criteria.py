# This project was developed with assistance from AI tools.
"""Buyer criteria schemas."""

from db.enums import ClosingTimeframe, ExitStrategy, FinancingType, PropertyType
from pydantic import BaseModel, ConfigDict, Field, model_validator


class BuyerCriteriaUpsert(BaseModel):
    locations: list[str] = []
    property_types: list[PropertyType] = []
    min_price: int | None = Field(default=None, ge=0)
    max_price: int | None = Field(default=None, ge=0)
    financing_type: FinancingType
    exit_strategy: ExitStrategy | None = None
    closing_timeframe: ClosingTimeframe | None = None

    @model_validator(mode="after")
    def price_range_ordered(self) -> "BuyerCriteriaUpsert":
        if self.min_price is not None and self.max_price is not None and self.min_price > self.max_price:
            raise ValueError("min_price must not exceed max_price")
        return self


class BuyerCriteriaResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    locations: list[str]
    property_types: list[PropertyType]
    min_price: int | None = None
    max_price: int | None = None
    financing_type: FinancingType
    exit_strategy: ExitStrategy | None = None
    closing_timeframe: ClosingTimeframe | None = None

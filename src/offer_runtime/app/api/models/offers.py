"""Pydantic models for offer API responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class IngestionResponse(BaseModel):
    """Response for offer ingestion."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = "Offer ingestion completed"
    offers_identified: int = Field(..., alias="noOfOffersIdentified")
    offers_created: int = Field(..., alias="noOfNewOffersCreated")


class HighestDiscountResponse(BaseModel):
    """Response for highest discount resolution."""

    model_config = ConfigDict(populate_by_name=True)

    highest_discount: int = Field(..., alias="highestDiscountAmount")
    best_offer_id: str | None = Field(None, alias="bestOfferId", description="adjustment_id of the winning offer")
    candidates_evaluated: int = Field(0, alias="candidatesEvaluated")

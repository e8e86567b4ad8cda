"""Pydantic models for API responses."""

from offer_runtime.app.api.models.offers import HighestDiscountResponse, IngestionResponse

__all__ = ["IngestionResponse", "HighestDiscountResponse"]

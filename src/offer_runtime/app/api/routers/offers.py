"""Router for offer ingestion and discount resolution endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from offer_runtime.app.api.models.offers import HighestDiscountResponse, IngestionResponse
from offer_runtime.app.factory import create_discount_policy, create_offer_store
from offer_runtime.application.errors import InvalidPayloadError, InvalidQueryError
from offer_runtime.application.ingestion import IngestionCoordinator
from offer_runtime.application.payload import extract_offer_items
from offer_runtime.application.resolver import DiscountResolver, parse_resolution_query
from offer_runtime.domain.discounts import DiscountPolicyConfig
from offer_runtime.ports.offer_store import OfferStore
from offer_runtime.settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()

_stores: dict[str, OfferStore] = {}


def get_offer_store() -> OfferStore:
    """Dependency to provide the process-wide OfferStore."""
    if "store" not in _stores:
        _stores["store"] = create_offer_store(get_settings())
    return _stores["store"]


def get_discount_policy() -> DiscountPolicyConfig:
    """Dependency to provide DiscountPolicyConfig."""
    return create_discount_policy(get_settings())


@router.post("/offer", response_model=IngestionResponse)
def ingest_offers(
    payload: Any = Body(None),
    store: OfferStore = Depends(get_offer_store),
) -> IngestionResponse:
    """
    Ingest offers from an upstream feed payload (offer_sections.PBO.offers).

    Items without an adjustment_id and items already stored are skipped.
    """
    try:
        items = extract_offer_items(payload)
    except InvalidPayloadError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        summary = IngestionCoordinator(store).ingest(items)
    except Exception:
        logger.exception("Error while ingesting offers")
        raise HTTPException(status_code=500, detail="Internal server error")

    return IngestionResponse(offers_identified=summary.offers_identified, offers_created=summary.offers_created)


@router.get("/highest-discount", response_model=HighestDiscountResponse)
def get_highest_discount(
    amount_to_pay: str | None = Query(None, alias="amountToPay", description="Payable amount"),
    bank_name: str | None = Query(None, alias="bankName", description="Bank tag, case-insensitive"),
    payment_instrument: str | None = Query(
        None, alias="paymentInstrument", description="Optional payment instrument tag, case-insensitive"
    ),
    store: OfferStore = Depends(get_offer_store),
    policy: DiscountPolicyConfig = Depends(get_discount_policy),
) -> HighestDiscountResponse:
    """Return the highest discount across stored offers matching the bank and instrument."""
    try:
        query = parse_resolution_query(amount_to_pay, bank_name, payment_instrument)
    except InvalidQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        result = DiscountResolver(store, policy).resolve(query)
    except Exception:
        logger.exception("Error while resolving highest discount")
        raise HTTPException(status_code=500, detail="Internal server error")

    return HighestDiscountResponse(
        highest_discount=result.highest_discount,
        best_offer_id=result.best_adjustment_id,
        candidates_evaluated=result.candidates_evaluated,
    )

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from offer_runtime.domain.discounts import rules
from offer_runtime.domain.offers.models import Offer
from offer_runtime.ports.offer_store import OfferStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestionSummary:
    offers_identified: int
    offers_created: int

    @property
    def offers_skipped(self) -> int:
        return self.offers_identified - self.offers_created


def _tag_list(value: Any) -> list[Any]:
    # Scalars and objects in place of a list are treated as absent.
    return list(value) if isinstance(value, (list, tuple)) else []


def build_offer(item: Mapping[str, Any]) -> Offer:
    """Build the stored form of a feed item: UPI-augmented banks, sorted tag lists."""
    contributors = item.get("contributors")
    if not isinstance(contributors, Mapping):
        contributors = {}
    summary = str(item.get("summary") or "")

    banks = [str(bank) for bank in _tag_list(contributors.get("banks"))]
    if rules.UPI_TAG.lower() in summary.lower() and rules.UPI_TAG not in banks:
        banks.append(rules.UPI_TAG)

    return Offer.new(
        adjustment_id=str(item["adjustment_id"]),
        adjustment_type=item.get("adjustment_type"),
        summary=summary,
        payment_instrument=sorted(str(p) for p in _tag_list(contributors.get("payment_instrument"))),
        banks=sorted(banks),
        emi_months=_tag_list(contributors.get("emi_months")),
    )


class IngestionCoordinator:
    """
    Persists new offers from a feed, skipping items already stored.

    Items are processed one at a time: each existence check is followed by
    its write before the next item is looked at. Store errors abort the call;
    offers written before the failure stay written.
    """

    def __init__(self, store: OfferStore) -> None:
        self.store = store

    def ingest(self, items: Iterable[Mapping[str, Any]]) -> IngestionSummary:
        items = list(items)
        created = 0

        for item in items:
            adjustment_id = item.get("adjustment_id")
            if not adjustment_id:
                logger.debug("Skipping offer without adjustment_id")
                continue

            if self.store.find_offer(str(adjustment_id)) is not None:
                logger.debug(f"Skipping existing offer {adjustment_id}")
                continue

            self.store.create_offer(build_offer(item))
            created += 1

        logger.info(f"Offer ingestion completed: identified={len(items)} created={created}")
        return IngestionSummary(offers_identified=len(items), offers_created=created)

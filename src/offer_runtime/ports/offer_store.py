from __future__ import annotations

from typing import Optional, Protocol

from offer_runtime.domain.offers.models import Offer


class OfferStore(Protocol):
    def find_offer(self, adjustment_id: str) -> Optional[Offer]: ...

    def create_offer(self, offer: Offer) -> None:
        """Persist a new offer. Raises DuplicateOfferError when the backend detects an existing id."""
        ...

    def find_offers(self, bank: str, payment_instrument: Optional[str] = None) -> list[Offer]:
        """Offers whose banks contain ``bank`` and, if given, whose payment_instrument contains it."""
        ...

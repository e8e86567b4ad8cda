from __future__ import annotations

import threading
from typing import Iterable, Optional

from offer_runtime.application.errors import DuplicateOfferError
from offer_runtime.domain.offers.models import Offer
from offer_runtime.ports.offer_store import OfferStore


class InMemoryOfferStore(OfferStore):
    def __init__(self, offers: Optional[Iterable[Offer]] = None) -> None:
        self._offers: dict[str, Offer] = {}
        self._lock = threading.Lock()
        for offer in offers or []:
            self.create_offer(offer)

    def find_offer(self, adjustment_id: str) -> Optional[Offer]:
        with self._lock:
            return self._offers.get(adjustment_id)

    def create_offer(self, offer: Offer) -> None:
        with self._lock:
            key = str(offer.adjustment_id)
            if key in self._offers:
                raise DuplicateOfferError(key)
            self._offers[key] = offer

    def find_offers(self, bank: str, payment_instrument: Optional[str] = None) -> list[Offer]:
        with self._lock:
            offers = list(self._offers.values())
        return [
            offer
            for offer in offers
            if bank in offer.banks and (payment_instrument is None or payment_instrument in offer.payment_instrument)
        ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._offers)

from __future__ import annotations

import logging
from typing import Any, Optional

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from offer_runtime.application.errors import DuplicateOfferError
from offer_runtime.domain.offers.models import Offer
from offer_runtime.ports.offer_store import OfferStore
from offer_runtime.settings import Settings

logger = logging.getLogger(__name__)


def create_mongo_client(settings: Settings) -> MongoClient:
    if not settings.mongo_uri:
        raise ValueError("MongoDB connection requires MONGO_URI")
    logger.info(f"Connecting to MongoDB database: {settings.mongo_db_name}")
    return MongoClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=5000,
        maxPoolSize=50,
        minPoolSize=10,
        maxIdleTimeMS=30000,
    )


class MongoOfferStore(OfferStore):
    """Offer store backed by a MongoDB collection with a unique index on adjustment_id."""

    def __init__(self, collection: Collection, ensure_indexes: bool = True) -> None:
        self.collection = collection
        if ensure_indexes:
            self.ensure_indexes()

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoOfferStore":
        client = create_mongo_client(settings)
        return cls(client[settings.mongo_db_name][settings.mongo_collection])

    def ensure_indexes(self) -> None:
        self.collection.create_index([("adjustment_id", ASCENDING)], unique=True, name="adjustment_id_unique")
        self.collection.create_index([("banks", ASCENDING), ("payment_instrument", ASCENDING)], name="banks_instrument")

    def find_offer(self, adjustment_id: str) -> Optional[Offer]:
        document = self.collection.find_one({"adjustment_id": adjustment_id}, {"_id": 0})
        return Offer.from_document(document) if document else None

    def create_offer(self, offer: Offer) -> None:
        try:
            self.collection.insert_one(offer.to_document())
        except DuplicateKeyError as e:
            raise DuplicateOfferError(str(offer.adjustment_id)) from e

    def find_offers(self, bank: str, payment_instrument: Optional[str] = None) -> list[Offer]:
        # Equality on an array field matches any element.
        query: dict[str, Any] = {"banks": bank}
        if payment_instrument:
            query["payment_instrument"] = payment_instrument
        return [Offer.from_document(doc) for doc in self.collection.find(query, {"_id": 0})]

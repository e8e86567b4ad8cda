from __future__ import annotations

import logging

from offer_runtime.adapters.databricks.client import DatabricksSqlClient
from offer_runtime.adapters.databricks.offer_store import DatabricksOfferStore
from offer_runtime.adapters.memory.in_memory_offer_store import InMemoryOfferStore
from offer_runtime.adapters.mongo.offer_store import MongoOfferStore
from offer_runtime.application.errors import StoreConfigurationError
from offer_runtime.domain.discounts import DiscountPolicyConfig
from offer_runtime.ports.offer_store import OfferStore
from offer_runtime.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_offer_store(settings: Settings | None = None) -> OfferStore:
    """
    Create the offer store selected by the OFFER_STORE environment variable.

    OFFER_STORE=databricks and OFFER_STORE=mongo select the persistent
    backends; anything else (default "memory") keeps offers in process.
    """
    settings = settings or get_settings()
    backend = settings.offer_store

    if backend == "databricks":
        required_settings = [
            ("DATABRICKS_SERVER_HOSTNAME", settings.databricks_server_hostname),
            ("DATABRICKS_HTTP_PATH", settings.databricks_http_path),
            ("DATABRICKS_ACCESS_TOKEN", settings.databricks_access_token),
        ]
        missing = [name for name, value in required_settings if not value]
        if missing:
            raise StoreConfigurationError(f"Missing required Databricks settings: {', '.join(missing)}")
        return DatabricksOfferStore(DatabricksSqlClient(settings), settings)

    if backend == "mongo":
        if not settings.mongo_uri:
            raise StoreConfigurationError("Missing required MongoDB setting: MONGO_URI")
        return MongoOfferStore.from_settings(settings)

    if backend != "memory":
        logger.warning(f"Unknown OFFER_STORE '{backend}', falling back to in-memory store")
    return InMemoryOfferStore()


def create_discount_policy(settings: Settings | None = None) -> DiscountPolicyConfig:
    settings = settings or get_settings()
    return DiscountPolicyConfig(
        payable_cap_ratio=settings.discount_payable_cap_ratio,
        suppress_generic_with_cashback=settings.discount_suppress_generic_with_cashback,
    )

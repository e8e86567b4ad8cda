from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """Runtime settings sourced from environment variables."""

    log_level: str = "INFO"
    offer_store: str = "memory"
    # Discount policy defaults
    discount_payable_cap_ratio: float = 0.5
    discount_suppress_generic_with_cashback: bool = False
    # Databricks settings
    databricks_server_hostname: Optional[str] = None
    databricks_http_path: Optional[str] = None
    databricks_access_token: Optional[str] = None
    databricks_catalog: Optional[str] = None
    databricks_schema: Optional[str] = None
    databricks_table_prefix: str = ""
    # MongoDB settings
    mongo_uri: Optional[str] = None
    mongo_db_name: str = "offers"
    mongo_collection: str = "offers"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            offer_store=os.getenv("OFFER_STORE", cls.offer_store).lower(),
            discount_payable_cap_ratio=float(os.getenv("DISCOUNT_PAYABLE_CAP_RATIO", cls.discount_payable_cap_ratio)),
            discount_suppress_generic_with_cashback=os.getenv(
                "DISCOUNT_SUPPRESS_GENERIC_WITH_CASHBACK", "false"
            ).lower()
            in ("true", "1", "yes"),
            databricks_server_hostname=os.getenv("DATABRICKS_SERVER_HOSTNAME"),
            databricks_http_path=os.getenv("DATABRICKS_HTTP_PATH"),
            databricks_access_token=os.getenv("DATABRICKS_ACCESS_TOKEN"),
            databricks_catalog=os.getenv("DATABRICKS_CATALOG"),
            databricks_schema=os.getenv("DATABRICKS_SCHEMA"),
            databricks_table_prefix=os.getenv("DATABRICKS_TABLE_PREFIX", cls.databricks_table_prefix),
            mongo_uri=os.getenv("MONGO_URI"),
            mongo_db_name=os.getenv("MONGO_DB_NAME", cls.mongo_db_name),
            mongo_collection=os.getenv("MONGO_COLLECTION", cls.mongo_collection),
        )


def get_settings(_cache: dict[str, Settings] = {}) -> Settings:
    """Provide a simple cached settings object."""

    if "settings" not in _cache:
        _cache["settings"] = Settings.from_env()
    return _cache["settings"]

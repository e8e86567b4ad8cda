from __future__ import annotations

import json
import logging
from typing import Any, Optional

from offer_runtime.adapters.databricks.client import DatabricksSqlClient
from offer_runtime.application.errors import DuplicateOfferError
from offer_runtime.domain.offers.models import Offer
from offer_runtime.ports.offer_store import OfferStore
from offer_runtime.settings import Settings, get_settings

logger = logging.getLogger(__name__)

OFFER_COLUMNS = ["adjustment_id", "adjustment_type", "summary", "payment_instrument", "banks", "emi_months"]


class DatabricksOfferStore(OfferStore):
    """
    Offer store backed by a Delta table.

    Array columns are written through from_json so they bind as plain string
    parameters. Writes use MERGE ... WHEN NOT MATCHED; when the MERGE inserts
    nothing because the id was stored in the meantime, create_offer raises
    DuplicateOfferError like the other stores. Concurrent MERGEs on the same
    table are rejected by Delta and surface as connector errors.
    """

    def __init__(
        self,
        client: DatabricksSqlClient,
        settings: Settings | None = None,
        table_name: str | None = None,
    ) -> None:
        self.client = client
        self.settings = settings or get_settings()
        self.table_name = table_name or f"{self.settings.databricks_table_prefix}payment_offers_v1"

    def _build_table_name(self) -> str:
        """Build fully qualified table name with catalog and schema if specified."""
        parts = []
        if self.settings.databricks_catalog:
            parts.append(self.settings.databricks_catalog)
        if self.settings.databricks_schema:
            parts.append(self.settings.databricks_schema)
        parts.append(self.table_name)
        return ".".join(parts)

    def _parse_array(self, value: Any) -> list[str]:
        """Arrays arrive as lists, numpy arrays, or JSON strings depending on connector version."""
        if value is None:
            return []
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except ValueError:
                logger.warning(f"Could not parse array column value: {value!r}")
                return []
        return [str(v) for v in value]

    def _row_to_offer(self, row: dict[str, Any]) -> Offer:
        return Offer.new(
            adjustment_id=str(row["adjustment_id"]),
            adjustment_type=row.get("adjustment_type"),
            summary=row.get("summary"),
            payment_instrument=self._parse_array(row.get("payment_instrument")),
            banks=self._parse_array(row.get("banks")),
            emi_months=self._parse_array(row.get("emi_months")),
        )

    def find_offer(self, adjustment_id: str) -> Optional[Offer]:
        sql = f"""
        SELECT {", ".join(OFFER_COLUMNS)}
        FROM {self._build_table_name()}
        WHERE adjustment_id = ?
        LIMIT 1
        """
        rows = self.client.query(sql, params=[adjustment_id])
        return self._row_to_offer(rows[0]) if rows else None

    def create_offer(self, offer: Offer) -> None:
        table_name = self._build_table_name()
        sql = f"""
        MERGE INTO {table_name} AS target
        USING (
            SELECT
                ? AS adjustment_id,
                ? AS adjustment_type,
                ? AS summary,
                from_json(?, 'ARRAY<STRING>') AS payment_instrument,
                from_json(?, 'ARRAY<STRING>') AS banks,
                from_json(?, 'ARRAY<STRING>') AS emi_months
        ) AS source
        ON target.adjustment_id = source.adjustment_id
        WHEN NOT MATCHED THEN INSERT (
            adjustment_id, adjustment_type, summary, payment_instrument, banks, emi_months, created_at
        ) VALUES (
            source.adjustment_id, source.adjustment_type, source.summary,
            source.payment_instrument, source.banks, source.emi_months, current_timestamp()
        )
        """
        params = [
            str(offer.adjustment_id),
            offer.adjustment_type,
            offer.summary,
            json.dumps(offer.payment_instrument),
            json.dumps(offer.banks),
            json.dumps(offer.emi_months),
        ]
        logger.debug(f"Creating offer {offer.adjustment_id} in {table_name}")
        rows = self.client.execute(sql, params=params)
        inserted = rows[0].get("num_inserted_rows") if rows else None
        if inserted is None:
            logger.warning(f"MERGE for offer {offer.adjustment_id} returned no insert metrics")
        elif int(inserted) == 0:
            raise DuplicateOfferError(str(offer.adjustment_id))

    def find_offers(self, bank: str, payment_instrument: Optional[str] = None) -> list[Offer]:
        where_clauses = ["array_contains(banks, ?)"]
        params: list[Any] = [bank]
        if payment_instrument:
            where_clauses.append("array_contains(payment_instrument, ?)")
            params.append(payment_instrument)

        sql = f"""
        SELECT {", ".join(OFFER_COLUMNS)}
        FROM {self._build_table_name()}
        WHERE {" AND ".join(where_clauses)}
        """
        return [self._row_to_offer(row) for row in self.client.query(sql, params=params)]

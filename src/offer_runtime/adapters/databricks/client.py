from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional, TypeVar

from databricks import sql as databricks_sql

from offer_runtime.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DatabricksSqlClient:
    """Thin wrapper over the Databricks SQL Connector used by the offer store."""

    def __init__(self, settings: Settings, max_retries: int = 3, initial_delay: float = 1.0) -> None:
        self.settings = settings
        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self._connection: Optional[Any] = None

    def _connect(self) -> Any:
        if self._connection is None:
            if not all(
                [
                    self.settings.databricks_server_hostname,
                    self.settings.databricks_http_path,
                    self.settings.databricks_access_token,
                ]
            ):
                raise ValueError(
                    "Databricks connection requires DATABRICKS_SERVER_HOSTNAME, "
                    "DATABRICKS_HTTP_PATH, and DATABRICKS_ACCESS_TOKEN"
                )

            logger.info(f"Connecting to Databricks server: {self.settings.databricks_server_hostname}")

            connection_params = {
                "server_hostname": self.settings.databricks_server_hostname,
                "http_path": self.settings.databricks_http_path,
                "access_token": self.settings.databricks_access_token,
            }
            if self.settings.databricks_catalog:
                connection_params["catalog"] = self.settings.databricks_catalog
            if self.settings.databricks_schema:
                connection_params["schema"] = self.settings.databricks_schema

            self._connection = databricks_sql.connect(**connection_params)

        return self._connection

    def _retry_on_error(self, operation: Callable[[], T]) -> T:
        """Execute operation, retrying transient connector errors with exponential backoff."""
        for attempt in range(self.max_retries):
            try:
                return operation()
            except Exception as e:
                if attempt == self.max_retries - 1:
                    logger.error(f"Operation failed after {self.max_retries} attempts: {e}")
                    raise
                delay = self.initial_delay * (2**attempt)
                logger.warning(f"Operation failed (attempt {attempt + 1}/{self.max_retries}), retrying in {delay}s: {e}")
                time.sleep(delay)
        raise RuntimeError("max_retries must be at least 1")

    def query(self, sql: str, params: Optional[list[Any]] = None) -> list[dict[str, Any]]:
        """Run a SELECT with ? placeholders and return rows as dictionaries."""
        logger.debug(f"Executing query: {sql[:200]}...")

        def _execute_query() -> list[dict[str, Any]]:
            cursor = self._connect().cursor()
            try:
                if params:
                    cursor.execute(sql, parameters=params)
                else:
                    cursor.execute(sql)
                columns = [desc[0] for desc in cursor.description]
                return [dict(zip(columns, row)) for row in cursor.fetchall()]
            finally:
                cursor.close()

        return self._retry_on_error(_execute_query)

    def execute(self, sql: str, params: Optional[list[Any]] = None) -> list[dict[str, Any]]:
        """
        Run a DML statement (INSERT, MERGE) with ? placeholders.

        Returns the statement's result rows as dictionaries; for MERGE this is
        the single metrics row (num_affected_rows, num_inserted_rows, ...).
        Statements that produce no result set return an empty list.
        """
        logger.debug(f"Executing statement: {sql[:200]}...")

        def _execute_stmt() -> list[dict[str, Any]]:
            conn = self._connect()
            cursor = conn.cursor()
            try:
                if params:
                    cursor.execute(sql, parameters=params)
                else:
                    cursor.execute(sql)
                rows = []
                if cursor.description:
                    columns = [desc[0] for desc in cursor.description]
                    rows = [dict(zip(columns, row)) for row in cursor.fetchall()]
                conn.commit()
                return rows
            finally:
                cursor.close()

        return self._retry_on_error(_execute_stmt)

    def close(self) -> None:
        if self._connection:
            try:
                self._connection.close()
                logger.info("Closed Databricks connection")
            except Exception as e:
                logger.warning(f"Error closing connection: {e}")
            finally:
                self._connection = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

"""Embedded DuckDB connection and boundary dataset context.

Opens a single in-memory DuckDB connection with the spatial extension,
loads the dataset's column names once as a whitelist, and serializes
query execution on that connection from a worker thread.
"""

import asyncio
import threading
from pathlib import Path
from typing import Any

import duckdb
from loguru import logger

from reverse_api.lib.reverse.query import SCHEMA_QUERY


class DatasetQueryError(Exception):
    """Raised when the query engine fails to execute a dataset query.

    Args:
        message: Error text reported by the engine.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BoundaryDataset:
    """Process-lifetime handle on the boundary dataset.

    Holds the shared DuckDB connection and the immutable column whitelist.
    Created once at startup and injected into request handlers.
    """

    def __init__(self, connection: duckdb.DuckDBPyConnection, path: Path, columns: frozenset[str]) -> None:
        self._connection = connection
        self._lock = threading.Lock()
        self.path = path
        self.columns = columns

    @classmethod
    def open(cls, path: Path | str) -> "BoundaryDataset":
        """Open a connection, load the spatial extension, and read the dataset schema.

        Args:
            path: Path to the Parquet dataset.

        Returns:
            A ready BoundaryDataset.

        Raises:
            FileNotFoundError: If the dataset file does not exist.
            duckdb.Error: If the extension cannot be loaded or the file cannot be read.
        """
        dataset_path = Path(path)
        if not dataset_path.is_file():
            msg = f"Dataset file not found: {dataset_path}"
            raise FileNotFoundError(msg)

        connection = duckdb.connect(":memory:")
        try:
            connection.execute("INSTALL spatial;")
            connection.execute("LOAD spatial;")
            cursor = connection.execute(SCHEMA_QUERY, [str(dataset_path)])
            columns = frozenset(column[0] for column in cursor.description or [])
        except duckdb.Error:
            connection.close()
            raise

        logger.info("DuckDB initialized with spatial extension")
        logger.info("Loaded {} column names from {}", len(columns), dataset_path)
        return cls(connection, dataset_path, columns)

    def _fetch_rows_sync(self, sql: str, params: list[Any]) -> list[dict[str, Any]]:
        with self._lock:
            try:
                cursor = self._connection.execute(sql, params)
                names = [column[0] for column in cursor.description or []]
                rows = cursor.fetchall()
            except duckdb.Error as exc:
                raise DatasetQueryError(str(exc)) from exc
        return [dict(zip(names, row, strict=True)) for row in rows]

    async def fetch_rows(self, sql: str, params: list[Any]) -> list[dict[str, Any]]:
        """Execute a query without blocking the event loop.

        Args:
            sql: Query text.
            params: Positional bind parameters.

        Returns:
            Rows as dicts keyed by result column name, in result order.

        Raises:
            DatasetQueryError: If the engine fails to execute the query.
        """
        return await asyncio.to_thread(self._fetch_rows_sync, sql, params)

    def close(self) -> None:
        """Close the underlying connection."""
        with self._lock:
            self._connection.close()

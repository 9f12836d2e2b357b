"""Chunk writer: persists a chunk of Records with one batched insert."""

import logging
from typing import Sequence

from importdb.service import DatabaseService
from userimport.exceptions import WriteError
from userimport.record import Record
from userimport.schema import USER_COLUMNS, USER_TABLE


class BatchInsertWriter:
    """Writes each chunk as a single parameterized batch insert.

    Must be called inside a ``service.transaction()`` block owned by the
    caller: the writer never commits or rolls back. Generated keys are not
    read back.
    """

    def __init__(
        self,
        service: DatabaseService,
        *,
        table: str = USER_TABLE,
        columns: Sequence[str] = USER_COLUMNS,
        assert_updates: bool = True,
        logger: logging.Logger | None = None,
    ):
        self._service = service
        self._table = table
        self._columns = list(columns)
        self._assert_updates = assert_updates
        self._logger = logger or logging.getLogger(__name__)

    @property
    def table(self) -> str:
        return self._table

    def write(self, chunk: Sequence[Record]) -> int:
        """Insert the chunk and return the number of rows written."""
        if not chunk:
            return 0
        params = [
            {column: values[column] for column in self._columns}
            for values in (record.to_params() for record in chunk)
        ]
        try:
            count = self._service.batch_insert(self._table, self._columns, params)
        except Exception as e:
            raise WriteError(f"Batch insert into {self._table} failed: {e}", len(chunk)) from e

        if self._assert_updates and count != len(chunk):
            raise WriteError(
                f"Batch insert into {self._table} affected {count} rows, expected {len(chunk)}",
                len(chunk),
            )
        self._logger.debug("Wrote %d records to %s", count, self._table)
        return count

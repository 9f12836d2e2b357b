"""Completion listener: audits the sink after a successful run."""

import logging

from importdb.service import DatabaseService
from userimport.exceptions import ReadBackError
from userimport.job import BatchStatus, JobExecution
from userimport.record import Record
from userimport.schema import USER_TABLE, select_sql


class CompletionNotificationListener:
    """Logs every persisted Record once a job run has COMPLETED.

    Read-back failures are logged and never raised: the import is already
    committed by the time this runs.
    """

    def __init__(
        self,
        service: DatabaseService,
        *,
        table: str = USER_TABLE,
        logger: logging.Logger | None = None,
    ):
        self._service = service
        self._table = table
        self._logger = logger or logging.getLogger(__name__)

    def on_finished(self, execution: JobExecution) -> None:
        if execution.status is not BatchStatus.COMPLETED:
            self._logger.warning(
                "Job: [%s] run %d ended with status %s; skipping read-back",
                execution.job_name,
                execution.run_id,
                execution.status.value,
            )
            return

        self._logger.info("Job completed successfully!")
        try:
            records = self.read_back()
        except ReadBackError as e:
            self._logger.error("Could not verify inserted records: %s", e)
            return

        self._logger.info("Records inserted into the database:")
        for record in records:
            self._logger.info("%s", record)

    def read_back(self) -> list[Record]:
        """Return every row persisted in the target table."""
        try:
            with self._service.transaction():
                rows = self._service.execute(select_sql(self._table))
            return [Record.from_row(row) for row in rows]
        except Exception as e:
            raise ReadBackError(f"Read-back query on {self._table} failed: {e}") from e

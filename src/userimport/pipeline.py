"""Explicit wiring of the user import job."""

import logging
from typing import Iterable

from importdb.service import DatabaseService
from userimport.config import ImportConfig
from userimport.job import Job, JobExecutionListener, RunIdIncrementer
from userimport.listener import CompletionNotificationListener
from userimport.reader import FlatFileReader
from userimport.schema import table_ddl
from userimport.step import ChunkStep
from userimport.writer import BatchInsertWriter

logger = logging.getLogger(__name__)


def ensure_schema(service: DatabaseService, table: str) -> None:
    """Create the target table if it doesn't exist."""
    service.execute_ddl(table_ddl(table, service.dialect))


def build_import_job(
    service: DatabaseService,
    config: ImportConfig,
    *,
    listeners: Iterable[JobExecutionListener] | None = None,
    incrementer: RunIdIncrementer | None = None,
) -> Job:
    """Compose reader -> writer -> step -> job for one flat file.

    Without explicit ``listeners`` the job reports through a
    CompletionNotificationListener on the same table.
    """
    reader = FlatFileReader(
        config.file,
        delimiter=config.delimiter,
        lines_to_skip=config.lines_to_skip,
    )
    writer = BatchInsertWriter(service, table=config.table)
    step = ChunkStep(config.step_name, reader, writer, service, chunk_size=config.chunk_size)
    if listeners is None:
        listeners = [CompletionNotificationListener(service, table=config.table)]

    logger.debug(
        "Built job %s: file=%s table=%s chunk_size=%d",
        config.job_name,
        config.file,
        config.table,
        config.chunk_size,
    )
    return Job(config.job_name, [step], listeners=listeners, incrementer=incrementer)

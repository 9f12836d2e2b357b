"""Chunked flat-file import of user records into a relational table."""

from userimport.config import ImportConfig
from userimport.exceptions import ImportJobError, ParseError, ReadBackError, WriteError
from userimport.job import BatchStatus, Job, JobExecution, JobExecutionListener, RunIdIncrementer
from userimport.listener import CompletionNotificationListener
from userimport.pipeline import build_import_job, ensure_schema
from userimport.reader import FlatFileReader
from userimport.record import Record
from userimport.step import DEFAULT_CHUNK_SIZE, ChunkStep, StepResult, StepStatus
from userimport.writer import BatchInsertWriter

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "BatchInsertWriter",
    "BatchStatus",
    "ChunkStep",
    "CompletionNotificationListener",
    "FlatFileReader",
    "ImportConfig",
    "ImportJobError",
    "Job",
    "JobExecution",
    "JobExecutionListener",
    "ParseError",
    "ReadBackError",
    "Record",
    "RunIdIncrementer",
    "StepResult",
    "StepStatus",
    "WriteError",
    "build_import_job",
    "ensure_schema",
]

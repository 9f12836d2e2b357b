"""Chunk-oriented step: read, buffer and commit Records chunk by chunk."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Iterator, Protocol

from importdb.service import DatabaseService
from userimport.chunk import Chunk
from userimport.exceptions import WriteError
from userimport.record import Record
from userimport.writer import BatchInsertWriter

DEFAULT_CHUNK_SIZE = 10


class RecordReader(Protocol):
    def read(self) -> Iterator[Record]:
        ...


class StepStatus(str, Enum):
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class StepResult:
    """Statistics and terminal state of one step run."""

    step_name: str
    status: StepStatus = StepStatus.RUNNING
    read_count: int = 0
    write_count: int = 0
    commit_count: int = 0
    rollback_count: int = 0
    failure: Exception | None = None
    start_time: datetime = field(default_factory=_now)
    end_time: datetime | None = None

    @property
    def duration(self) -> timedelta | None:
        if self.end_time is None:
            return None
        return self.end_time - self.start_time


class ChunkStep:
    """Drives the read -> write loop of one step.

    Records are pulled from the reader until ``chunk_size`` are buffered or
    the source is exhausted; each chunk is handed to the writer inside its
    own ``service.transaction()``. The first parse or write failure ends
    the step as FAILED with the cause attached; nothing is retried.
    """

    def __init__(
        self,
        name: str,
        reader: RecordReader,
        writer: BatchInsertWriter,
        service: DatabaseService,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        logger: logging.Logger | None = None,
    ):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
        self.name = name
        self.chunk_size = chunk_size
        self._reader = reader
        self._writer = writer
        self._service = service
        self._logger = logger or logging.getLogger(__name__)

    def run(self) -> StepResult:
        result = StepResult(self.name)
        self._logger.info("Executing step: [%s]", self.name)

        records = self._reader.read()
        chunk = Chunk(self.chunk_size)
        try:
            while True:
                self._fill(chunk, records, result)
                if not chunk:
                    break
                self._commit(chunk, result)
                chunk.clear()
            result.status = StepStatus.COMPLETED
        except Exception as e:
            result.status = StepStatus.FAILED
            result.failure = e
            self._logger.exception(
                "Step: [%s] failed after %d chunks", self.name, result.commit_count
            )
        finally:
            chunk.clear()
            close = getattr(records, "close", None)
            if close is not None:
                close()
            result.end_time = _now()

        self._logger.info(
            "Step: [%s] executed in %s with status %s (read: %d, written: %d)",
            self.name,
            result.duration,
            result.status.value,
            result.read_count,
            result.write_count,
        )
        return result

    def _fill(self, chunk: Chunk, records: Iterator[Record], result: StepResult) -> None:
        while not chunk.is_full:
            record = next(records, None)
            if record is None:
                return
            result.read_count += 1
            chunk.add(record)

    def _commit(self, chunk: Chunk, result: StepResult) -> None:
        try:
            with self._service.transaction():
                written = self._writer.write(chunk.items)
        except WriteError:
            result.rollback_count += 1
            raise
        except Exception as e:
            result.rollback_count += 1
            raise WriteError(
                f"Commit of chunk {result.commit_count + 1} failed: {e}", len(chunk)
            ) from e

        result.commit_count += 1
        result.write_count += written
        self._logger.info(
            "Chunk %d: wrote %d records (total: %d)",
            result.commit_count,
            written,
            result.write_count,
        )

"""Job controller: runs steps in order under a fresh run id and notifies listeners."""

import itertools
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Mapping, Protocol, Sequence

from userimport.step import ChunkStep, StepResult, StepStatus

RUN_ID_KEY = "run.id"


class BatchStatus(str, Enum):
    STARTING = "STARTING"
    STARTED = "STARTED"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass
class JobExecution:
    """One run of a job."""

    job_name: str
    run_id: int
    parameters: dict[str, Any]
    status: BatchStatus = BatchStatus.STARTING
    step_results: list[StepResult] = field(default_factory=list)
    start_time: datetime | None = None
    end_time: datetime | None = None

    @property
    def read_count(self) -> int:
        return sum(r.read_count for r in self.step_results)

    @property
    def write_count(self) -> int:
        return sum(r.write_count for r in self.step_results)

    @property
    def failures(self) -> list[Exception]:
        return [r.failure for r in self.step_results if r.failure is not None]

    @property
    def is_successful(self) -> bool:
        return self.status is BatchStatus.COMPLETED


class JobExecutionListener(Protocol):
    def on_finished(self, execution: JobExecution) -> None:
        ...


class RunIdIncrementer:
    """Hands out strictly increasing run ids, safe across threads."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            return next(self._counter)

    def next_parameters(self, parameters: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Copy ``parameters`` with ``run.id`` set to the next id."""
        params = dict(parameters or {})
        params[RUN_ID_KEY] = self.next_id()
        return params


class Job:
    """An ordered sequence of steps launched as one logical run.

    Every launch is a new execution with its own run id; repeated launches
    with the same parameters are never merged or rejected.
    """

    def __init__(
        self,
        name: str,
        steps: Sequence[ChunkStep],
        *,
        listeners: Iterable[JobExecutionListener] = (),
        incrementer: RunIdIncrementer | None = None,
        logger: logging.Logger | None = None,
    ):
        if not steps:
            raise ValueError(f"Job {name!r} needs at least one step")
        self.name = name
        self.steps = list(steps)
        self.listeners = list(listeners)
        self._incrementer = incrementer or RunIdIncrementer()
        self._logger = logger or logging.getLogger(__name__)

    def register_listener(self, listener: JobExecutionListener) -> None:
        self.listeners.append(listener)

    def launch(self, parameters: Mapping[str, Any] | None = None) -> JobExecution:
        params = self._incrementer.next_parameters(parameters)
        execution = JobExecution(self.name, params[RUN_ID_KEY], params)
        self._logger.info(
            "Job: [%s] launched with the following parameters: %s", self.name, params
        )

        execution.start_time = datetime.now(timezone.utc)
        execution.status = BatchStatus.STARTED
        for step in self.steps:
            result = step.run()
            execution.step_results.append(result)
            if result.status is StepStatus.FAILED:
                execution.status = BatchStatus.FAILED
                break
        else:
            execution.status = BatchStatus.COMPLETED
        execution.end_time = datetime.now(timezone.utc)

        self._logger.info(
            "Job: [%s] run %d finished with status %s in %s",
            self.name,
            execution.run_id,
            execution.status.value,
            execution.end_time - execution.start_time,
        )
        for listener in self.listeners:
            try:
                listener.on_finished(execution)
            except Exception:
                self._logger.exception(
                    "Listener %r failed for job: [%s] run %d",
                    listener,
                    self.name,
                    execution.run_id,
                )
        return execution

"""Tests for the completion notification listener."""

import logging

import pytest

from userimport.exceptions import ReadBackError
from userimport.job import BatchStatus, JobExecution
from userimport.listener import CompletionNotificationListener
from userimport.record import Record
from userimport.writer import BatchInsertWriter

ANA = Record("Ana", "Lopez", 30, "ana@x.com")
LUIS = Record("Luis", "Gomez", 25, "luis@x.com")


def execution(status):
    return JobExecution("importUserJob", 1, {"run.id": 1}, status=status)


@pytest.fixture
def populated_service(users_service):
    with users_service.transaction():
        BatchInsertWriter(users_service).write([ANA, LUIS])
    return users_service


class TestCompletionNotificationListener:
    def test_read_back(self, populated_service):
        listener = CompletionNotificationListener(populated_service)
        assert listener.read_back() == [ANA, LUIS]

    def test_logs_records_on_completion(self, populated_service, caplog):
        caplog.set_level(logging.INFO)
        CompletionNotificationListener(populated_service).on_finished(
            execution(BatchStatus.COMPLETED)
        )
        messages = [r.getMessage() for r in caplog.records if r.name == "userimport.listener"]
        assert messages == [
            "Job completed successfully!",
            "Records inserted into the database:",
            str(ANA),
            str(LUIS),
        ]

    def test_uses_injected_logger(self, populated_service, caplog):
        caplog.set_level(logging.INFO)
        audit = logging.getLogger("audit.users")
        CompletionNotificationListener(populated_service, logger=audit).on_finished(
            execution(BatchStatus.COMPLETED)
        )
        assert any(r.name == "audit.users" and r.getMessage() == str(ANA) for r in caplog.records)

    def test_no_read_back_on_failure(self, populated_service, caplog, monkeypatch):
        listener = CompletionNotificationListener(populated_service)

        def fail():
            raise AssertionError("read-back must not run for a failed execution")

        monkeypatch.setattr(listener, "read_back", fail)
        caplog.set_level(logging.INFO)
        failed = execution(BatchStatus.FAILED)
        listener.on_finished(failed)

        assert failed.status is BatchStatus.FAILED
        assert not any("Records inserted" in r.getMessage() for r in caplog.records)

    def test_read_back_error_is_reported_not_raised(self, users_service, caplog):
        listener = CompletionNotificationListener(users_service, table="no_such_table")
        with pytest.raises(ReadBackError):
            listener.read_back()

        caplog.set_level(logging.INFO)
        completed = execution(BatchStatus.COMPLETED)
        listener.on_finished(completed)

        assert completed.status is BatchStatus.COMPLETED
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "Could not verify inserted records" in errors[0].getMessage()

"""Error taxonomy for the import job.

    ImportJobError
    ├── ParseError     malformed input line (field count, non-integer age)
    ├── WriteError     the sink rejected or could not execute a chunk insert
    └── ReadBackError  the post-completion audit query failed

The underlying driver or conversion error is chained as ``__cause__``.
"""

from typing import Any


class ImportJobError(Exception):
    """Base exception for import job failures.

    Attributes:
        message: Human-readable error message
        context: Structured details (line number, chunk size, ...)
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} ({details})"


class ParseError(ImportJobError):
    """A source line could not be mapped onto a Record."""

    def __init__(self, line_number: int, line: str, reason: str):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(
            f"Parsing error at line {line_number}: {reason}",
            {"line_number": line_number, "line": line},
        )


class WriteError(ImportJobError):
    """A chunk could not be persisted; the whole chunk is rolled back."""

    def __init__(self, message: str, chunk_size: int):
        self.chunk_size = chunk_size
        super().__init__(message, {"chunk_size": chunk_size})


class ReadBackError(ImportJobError):
    """The verification query over the sink failed."""

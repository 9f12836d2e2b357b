"""Line parser: turns delimited flat-file lines into Records."""

import csv
import logging
import os
import re
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator

from userimport.exceptions import ParseError
from userimport.record import RECORD_FIELDS, Record
from userimport.schema import FIELD_MAPPING

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?\d+")


def parse_age(token: str) -> int:
    """Parse the age column as a non-negative integer."""
    if not _INTEGER.fullmatch(token):
        raise ValueError(f"age is not an integer: {token!r}")
    age = int(token)
    if age < 0:
        raise ValueError(f"age must be non-negative: {age}")
    return age


CONVERTERS: dict[str, Callable[[str], Any]] = {"age": parse_age}


def validate_mapping(field_mapping: Iterable[tuple[str, str]]) -> tuple[tuple[str, str], ...]:
    """Check that a field mapping targets every Record attribute exactly once."""
    mapping = tuple(field_mapping)
    attributes = [attr for _, attr in mapping]
    unknown = [a for a in attributes if a not in RECORD_FIELDS]
    if unknown:
        raise ValueError(f"Field mapping targets unknown attributes: {unknown}")
    if len(set(attributes)) != len(attributes):
        raise ValueError(f"Field mapping targets an attribute more than once: {attributes}")
    missing = [f for f in RECORD_FIELDS if f not in attributes]
    if missing:
        raise ValueError(f"Field mapping leaves attributes unmapped: {missing}")
    return mapping


class FlatFileReader:
    """Reads Records from a delimited flat file.

    The first ``lines_to_skip`` lines are treated as a header. Every other
    non-blank, non-comment line must split into exactly one token per entry
    of the field mapping. Tokens are trimmed and mapped positionally onto
    the Record attributes.

    ``source`` is a file path or any iterable of text lines. Each call to
    read() starts over from the beginning of the source.
    """

    def __init__(
        self,
        source: str | os.PathLike | Iterable[str],
        *,
        delimiter: str = ",",
        lines_to_skip: int = 1,
        field_mapping: Iterable[tuple[str, str]] = FIELD_MAPPING,
        comment_prefixes: tuple[str, ...] = ("#",),
        quote_char: str = '"',
        encoding: str = "utf-8",
    ):
        if len(delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character, got {delimiter!r}")
        if lines_to_skip < 0:
            raise ValueError(f"lines_to_skip must be >= 0, got {lines_to_skip}")
        self._source = source
        self._delimiter = delimiter
        self._lines_to_skip = lines_to_skip
        self._mapping = validate_mapping(field_mapping)
        self._comment_prefixes = comment_prefixes
        self._quote_char = quote_char
        self._encoding = encoding

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "FlatFileReader":
        """Build a reader over in-memory text."""
        return cls(text.splitlines(), **kwargs)

    @property
    def field_names(self) -> list[str]:
        return [name for name, _ in self._mapping]

    def read(self) -> Iterator[Record]:
        """Lazily yield one Record per data line."""
        for line_number, line in self._data_lines():
            yield self.parse_line(line_number, line)

    def parse_line(self, line_number: int, line: str) -> Record:
        """Map a single raw line onto a Record, raising ParseError on mismatch."""
        try:
            tokens = next(
                csv.reader([line], delimiter=self._delimiter, quotechar=self._quote_char)
            )
        except csv.Error as e:
            raise ParseError(line_number, line, str(e)) from e
        if len(tokens) != len(self._mapping):
            raise ParseError(
                line_number,
                line,
                f"expected {len(self._mapping)} fields {self.field_names}, found {len(tokens)}",
            )
        values: dict[str, Any] = {}
        for (name, attribute), token in zip(self._mapping, tokens):
            token = token.strip()
            convert = CONVERTERS.get(attribute)
            if convert is None:
                values[attribute] = token
                continue
            try:
                values[attribute] = convert(token)
            except ValueError as e:
                raise ParseError(line_number, line, f"field '{name}': {e}") from e
        return Record(**values)

    def _data_lines(self) -> Iterator[tuple[int, str]]:
        for line_number, raw in enumerate(self._lines(), start=1):
            if line_number <= self._lines_to_skip:
                continue
            line = raw.rstrip("\r\n")
            if not line.strip():
                continue
            if self._comment_prefixes and line.startswith(self._comment_prefixes):
                logger.debug("Skipping comment line %d", line_number)
                continue
            yield line_number, line

    def _lines(self) -> Iterator[str]:
        if isinstance(self._source, (str, os.PathLike)):
            with open(Path(self._source), newline="", encoding=self._encoding) as f:
                yield from f
        else:
            yield from self._source

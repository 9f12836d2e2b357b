"""Import job configuration."""

import os
from dataclasses import dataclass

from userimport.schema import USER_TABLE
from userimport.step import DEFAULT_CHUNK_SIZE


@dataclass(frozen=True)
class ImportConfig:
    file: str | os.PathLike
    table: str = USER_TABLE
    chunk_size: int = DEFAULT_CHUNK_SIZE
    delimiter: str = ","
    lines_to_skip: int = 1
    job_name: str = "importUserJob"
    step_name: str = "step1"

    def __post_init__(self):
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if self.lines_to_skip < 0:
            raise ValueError(f"lines_to_skip must be >= 0, got {self.lines_to_skip}")
        if len(self.delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {self.delimiter!r}")

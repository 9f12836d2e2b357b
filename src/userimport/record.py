"""The in-memory representation of one imported user."""

from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping


@dataclass(frozen=True)
class Record:
    """One user read from the flat file.

    Carries no identity: the sink assigns the surrogate ``id`` on insert.
    """

    first_name: str
    last_name: str
    age: int
    email: str

    def __str__(self) -> str:
        return (
            f"Record [first_name={self.first_name}, last_name={self.last_name}, "
            f"age={self.age}, email={self.email}]"
        )

    def to_params(self) -> dict[str, Any]:
        """Bind parameters for the insert statement, keyed by column name."""
        return asdict(self)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Record":
        """Rebuild a Record from a read-back row; extra columns such as ``id`` are ignored."""
        return cls(
            first_name=row["first_name"],
            last_name=row["last_name"],
            age=int(row["age"]),
            email=row["email"],
        )


RECORD_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(Record))

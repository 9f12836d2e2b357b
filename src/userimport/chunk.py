"""Bounded buffer of Records committed as one transactional unit."""

from typing import Iterator

from userimport.record import Record


class Chunk:
    """An ordered batch of at most ``capacity`` Records."""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"Chunk capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._items: list[Record] = []

    def add(self, record: Record) -> None:
        if self.is_full:
            raise ValueError(f"Chunk is full ({self.capacity} records)")
        self._items.append(record)

    @property
    def is_full(self) -> bool:
        return len(self._items) >= self.capacity

    @property
    def items(self) -> tuple[Record, ...]:
        return tuple(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._items)

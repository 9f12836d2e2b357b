"""Abstract DatabaseService interface and the shared connection pool."""

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from queue import Empty, Queue
from typing import Any, Iterator, Mapping

from importdb.types import Params, ParamsList


class DatabaseService(ABC):
    """Database-agnostic interface for the sink the import job writes to.

    Design principles:
    - Stateless: no mutable state beyond the connection pool
    - Thread-safe: each transaction() acquires its own connection
    - DB-agnostic: callers program against this ABC, never a concrete backend

    Backends supply ``_open_connection`` and the statement methods; the
    pool and transaction handling live here.
    """

    #: SQL dialect name, used to pick dialect-specific DDL.
    dialect: str

    def __init__(self, pool_size: int = 4):
        self._pool_size = pool_size
        self._pool: Queue = Queue(maxsize=pool_size)
        self._local = threading.local()

    @abstractmethod
    def _open_connection(self):
        """Open one DB-API connection for the pool."""

    def connect(self) -> None:
        """Initialize the connection pool."""
        for _ in range(self._pool_size):
            self._pool.put(self._open_connection())

    def close(self) -> None:
        """Close all pooled connections."""
        while True:
            try:
                conn = self._pool.get_nowait()
            except Empty:
                break
            conn.close()

    def _acquire(self):
        return self._pool.get(timeout=30)

    def _release(self, conn) -> None:
        self._pool.put(conn)

    def _get_conn(self):
        """Get the connection bound to the current transaction."""
        conn = getattr(self._local, "conn", None)
        if conn is not None:
            return conn
        raise RuntimeError(
            "No active transaction. Wrap calls in a `with service.transaction():` block."
        )

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Acquire a connection, commit on success, roll back on error."""
        conn = self._acquire()
        self._local.conn = conn
        try:
            yield
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._local.conn = None
            self._release(conn)

    @abstractmethod
    def execute(self, sql: str, params: Params | None = None) -> list[dict[str, Any]]:
        """Execute a single SQL statement and return rows as dicts."""

    @abstractmethod
    def execute_many(self, sql: str, params_list: ParamsList) -> int:
        """Execute a SQL statement for each parameter set and return the affected row count."""

    @abstractmethod
    def execute_ddl(self, sql: str) -> None:
        """Execute DDL statements (CREATE TABLE, CREATE INDEX, etc.)."""

    @abstractmethod
    def placeholder(self, name: str) -> str:
        """Return the backend's named bind placeholder for a parameter."""

    def batch_insert(
        self, table: str, columns: list[str], rows: list[Mapping[str, Any]]
    ) -> int:
        """Insert rows bound by column name in one driver call.

        Returns the number of affected rows (0 for an empty batch).
        """
        if not rows:
            return 0
        cols = ", ".join(columns)
        placeholders = ", ".join(self.placeholder(c) for c in columns)
        sql = f"INSERT INTO {table} ({cols}) VALUES ({placeholders})"
        return self.execute_many(sql, rows)

"""SQLite implementation of DatabaseService."""

import sqlite3
from typing import Any

from importdb.service import DatabaseService
from importdb.types import Params, ParamsList


class SQLiteDatabaseService(DatabaseService):
    """SQLite backend using stdlib sqlite3.

    An in-memory database is private to its connection, so the pool
    collapses to a single shared connection.
    """

    dialect = "sqlite"

    def __init__(self, db_path: str, pool_size: int = 4):
        self._db_path = db_path
        super().__init__(1 if db_path == ":memory:" else pool_size)

    def _open_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        if self._db_path != ":memory:":
            conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    def execute(self, sql: str, params: Params | None = None) -> list[dict[str, Any]]:
        cursor = self._get_conn().execute(sql, params or ())
        if cursor.description is None:
            return []
        columns = [desc[0] for desc in cursor.description]
        return [dict(zip(columns, row)) for row in cursor.fetchall()]

    def execute_many(self, sql: str, params_list: ParamsList) -> int:
        return self._get_conn().executemany(sql, params_list).rowcount

    def execute_ddl(self, sql: str) -> None:
        conn = self._acquire()
        try:
            conn.executescript(sql)
            conn.commit()
        finally:
            self._release(conn)

    def placeholder(self, name: str) -> str:
        return f":{name}"

"""PostgreSQL implementation of DatabaseService."""

from typing import Any, Mapping

import psycopg2
import psycopg2.extras

from importdb.service import DatabaseService
from importdb.types import Params, ParamsList


class PostgresDatabaseService(DatabaseService):
    """PostgreSQL backend using psycopg2."""

    dialect = "postgresql"

    def __init__(self, dsn: str, pool_size: int = 4):
        self._dsn = dsn
        super().__init__(pool_size)

    def _open_connection(self):
        conn = psycopg2.connect(self._dsn)
        conn.autocommit = False
        return conn

    def execute(self, sql: str, params: Params | None = None) -> list[dict[str, Any]]:
        conn = self._get_conn()
        with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
            cur.execute(sql, params or ())
            if cur.description is None:
                return []
            return [dict(row) for row in cur.fetchall()]

    def execute_many(self, sql: str, params_list: ParamsList) -> int:
        conn = self._get_conn()
        with conn.cursor() as cur:
            cur.executemany(sql, params_list)
            return cur.rowcount

    def batch_insert(
        self, table: str, columns: list[str], rows: list[Mapping[str, Any]]
    ) -> int:
        """Insert all rows with one multi-row ``INSERT ... VALUES`` statement.

        The page size equals the batch size, so the whole batch is a single
        statement and ``rowcount`` covers every row.
        """
        if not rows:
            return 0
        cols = ", ".join(columns)
        template = "(" + ", ".join(self.placeholder(c) for c in columns) + ")"
        sql = f"INSERT INTO {table} ({cols}) VALUES %s"
        conn = self._get_conn()
        with conn.cursor() as cur:
            psycopg2.extras.execute_values(
                cur, sql, rows, template=template, page_size=len(rows)
            )
            return cur.rowcount

    def execute_ddl(self, sql: str) -> None:
        conn = self._acquire()
        try:
            with conn.cursor() as cur:
                for statement in sql.split(";"):
                    statement = statement.strip()
                    if statement:
                        cur.execute(statement)
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._release(conn)

    def placeholder(self, name: str) -> str:
        return f"%({name})s"

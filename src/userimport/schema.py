"""Users table schema and flat-file field mapping."""

USER_TABLE = "users"
USER_COLUMNS = ["first_name", "last_name", "age", "email"]

# (source field name in the flat file, Record attribute), in file column order.
FIELD_MAPPING: tuple[tuple[str, str], ...] = (
    ("nombre", "first_name"),
    ("apellido", "last_name"),
    ("edad", "age"),
    ("email", "email"),
)

# Surrogate key column definition per backend dialect.
ID_COLUMN = {
    "sqlite": "id INTEGER PRIMARY KEY AUTOINCREMENT",
    "postgresql": "id BIGSERIAL PRIMARY KEY",
}


def table_ddl(table: str = USER_TABLE, dialect: str = "sqlite") -> str:
    """DDL creating the target table if it does not exist yet."""
    return f"""
CREATE TABLE IF NOT EXISTS {table} (
    {ID_COLUMN[dialect]},
    first_name  VARCHAR(255) NOT NULL,
    last_name   VARCHAR(255) NOT NULL,
    age         INTEGER      NOT NULL,
    email       VARCHAR(255) NOT NULL
);
"""


def select_sql(table: str = USER_TABLE) -> str:
    """Read-back query over every persisted row."""
    return f"SELECT id, {', '.join(USER_COLUMNS)} FROM {table} ORDER BY id"

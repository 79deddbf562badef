"""Database initialization and schema management."""

import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from .schema import ADDED_COLUMNS, articles_table, metadata

log = logging.getLogger(__name__)

_DUPLICATE_COLUMN_MARKERS = ("duplicate column", "already exists")


def validate_connection(engine: Engine) -> bool:
    """Validate database connection."""
    try:
        with engine.connect() as conn:
            return conn.execute(text("SELECT 1")).scalar() == 1
    except SQLAlchemyError as e:
        log.error("Database connection failed: %s", e)
        return False


def add_column_if_missing(engine: Engine, table: str, column: str, ddl_type: str) -> bool:
    """Add a column unless it is already there.

    Returns True when the column was added. A column that already exists,
    whether seen up front or reported by the engine as a duplicate, counts
    as satisfied.
    """
    existing = {c["name"] for c in inspect(engine).get_columns(table)}
    if column in existing:
        return False

    try:
        with engine.begin() as conn:
            conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {ddl_type}"))
    except DBAPIError as e:
        message = str(e.orig).lower()
        if any(marker in message for marker in _DUPLICATE_COLUMN_MARKERS):
            return False
        raise

    log.info("Added column %s.%s", table, column)
    return True


def init_database(engine: Engine) -> None:
    """Initialize database schema and apply additive migrations."""
    metadata.create_all(engine)
    for column, ddl_type in ADDED_COLUMNS:
        add_column_if_missing(engine, articles_table.name, column, ddl_type)

"""Database connection management."""

from pathlib import Path
from typing import Union

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.pool import StaticPool

from ..config import DatabaseConfig


def database_url(db_config: DatabaseConfig) -> Union[str, URL]:
    """Build the SQLAlchemy URL for the configured store."""
    if db_config.url:
        return db_config.url

    if db_config.postgres is not None:
        pg = db_config.postgres
        return URL.create(
            "postgresql+psycopg",
            username=pg.user,
            password=pg.password or None,
            host=pg.host,
            port=pg.port,
            database=pg.database,
        )

    if db_config.path == ":memory:":
        return "sqlite://"
    return f"sqlite:///{Path(db_config.path).expanduser()}"


def create_db_engine(target: Union[DatabaseConfig, str, URL]) -> Engine:
    """Create an engine for a database config or URL.

    SQLite connections may be used from the web view thread, and an
    in-memory database must be a single shared connection to be visible
    at all.
    """
    if isinstance(target, DatabaseConfig):
        target = database_url(target)
    url = make_url(target)

    kwargs = {}
    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool

    return create_engine(url, **kwargs)

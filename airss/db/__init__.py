"""Database management for the AI RSS Scraper."""

from .articles import ArticleStore
from .connection import create_db_engine, database_url
from .init import add_column_if_missing, init_database, validate_connection
from .patterns import glob_to_store_pattern

__all__ = [
    "ArticleStore",
    "add_column_if_missing",
    "create_db_engine",
    "database_url",
    "glob_to_store_pattern",
    "init_database",
    "validate_connection",
]

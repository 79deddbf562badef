"""Table definition for stored articles."""

from sqlalchemy import Boolean, Column, DateTime, MetaData, Table, Text, false, func

metadata = MetaData()

articles_table = Table(
    "articles",
    metadata,
    Column("guid", Text, primary_key=True),
    Column("title", Text),
    Column("link", Text),
    Column("description", Text),
    Column("content", Text),
    Column("published_date", DateTime, index=True),
    Column("score", Text),
    Column("analysis", Text),
    Column("feed_url", Text),
    Column("model", Text),
    Column("created_at", DateTime, server_default=func.current_timestamp()),
    Column("reported", Boolean, server_default=false()),
)

# Columns added after the first release: (name, DDL type clause).
# Applied in order by init_database; each must be nullable or defaulted.
ADDED_COLUMNS = [
    ("feed_url", "TEXT"),
    ("model", "TEXT"),
    ("reported", "BOOLEAN DEFAULT FALSE"),
]

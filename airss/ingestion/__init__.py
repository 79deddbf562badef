"""RSS ingestion."""

from .ingestor import MAX_DB_CONTENT_LENGTH, FeedIngestor, strip_html
from .models import FeedItem, FeedResult, FetchStats
from .rss_fetcher import RSSFetcher, parse_entry

__all__ = [
    "FeedIngestor",
    "FeedItem",
    "FeedResult",
    "FetchStats",
    "MAX_DB_CONTENT_LENGTH",
    "RSSFetcher",
    "parse_entry",
    "strip_html",
]

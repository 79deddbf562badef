"""Fetch a feed and store the articles not seen before."""

import logging

from bs4 import BeautifulSoup
from rich.console import Console
from sqlalchemy.exc import SQLAlchemyError

from ..clock import utcnow
from ..db import ArticleStore
from ..errors import ConstraintError, FeedError
from ..models import NOT_SCORED, Article
from .models import FeedItem, FetchStats
from .rss_fetcher import RSSFetcher

log = logging.getLogger(__name__)
console = Console()

MAX_DB_CONTENT_LENGTH = 4096


def strip_html(text: str) -> str:
    """Remove all markup, keeping only the text."""
    if not text:
        return ""
    return BeautifulSoup(text, "html.parser").get_text().strip()


def trim(text: str, limit: int) -> str:
    return text[:limit] if len(text) > limit else text


class FeedIngestor:
    """Turn feed items into stored articles, skipping known GUIDs."""

    def __init__(
        self,
        store: ArticleStore,
        fetcher: RSSFetcher,
        content_limit: int = MAX_DB_CONTENT_LENGTH,
    ) -> None:
        self.store = store
        self.fetcher = fetcher
        self.content_limit = content_limit

    def build_article(self, item: FeedItem, feed_url: str) -> Article:
        """Build the stored form of a feed item."""
        content = item.content or item.description
        return Article(
            guid=item.guid or item.link,
            title=item.title,
            link=item.link,
            description=strip_html(item.description),
            content=trim(strip_html(content), self.content_limit),
            published_date=item.published or utcnow(),
            score=NOT_SCORED,
            analysis="",
            feed_url=feed_url,
        )

    def fetch_and_store(self, url: str) -> FetchStats:
        """
        Fetch the feed and store new articles.

        A single item failing to store is logged and counted; the rest of
        the feed is still processed.

        Raises:
            FeedError: if the feed itself could not be fetched or parsed
        """
        result = self.fetcher.fetch(url)
        if not result.success:
            raise FeedError(f"Error fetching feed {url}: {result.error}")

        console.print(f"Fetching latest items from {url}")
        stats = FetchStats(received=result.item_count)

        for item in result.items:
            article = self.build_article(item, url)
            try:
                if self.store.exists(article.guid):
                    stats.existing += 1
                    continue
                self.store.insert(article)
            except (ConstraintError, SQLAlchemyError) as e:
                log.error("Error saving article %r: %s", item.title, e)
                stats.failed += 1
                continue

            console.print(f"- New: {article.title}", markup=False)
            stats.added += 1

        console.print(
            f"Fetch Complete: Received: {stats.received}, "
            f"Existing: {stats.existing}, Added: {stats.added}"
            + (f", Failed: {stats.failed}" if stats.failed else "")
        )
        return stats

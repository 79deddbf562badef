"""RSS feed fetcher."""

import calendar
import logging
from typing import Any, Optional

import feedparser
import httpx
import pendulum

from .models import FeedItem, FeedResult

log = logging.getLogger(__name__)

USER_AGENT = "airss/0.1 (AI RSS Scraper)"


def _entry_published(entry: Any):
    """Publication time of an entry as UTC, from published or updated."""
    for key in ("published_parsed", "updated_parsed"):
        parsed = entry.get(key)
        if parsed:
            try:
                # feedparser normalizes parsed times to UTC struct_time
                return pendulum.from_timestamp(calendar.timegm(parsed), tz="UTC")
            except (OverflowError, ValueError, TypeError):
                continue
    return None


def _entry_content(entry: Any) -> Optional[str]:
    """Joined full-content blocks of an entry, if any."""
    blocks = entry.get("content") or []
    values = [block.get("value", "") for block in blocks if block.get("value")]
    return "\n".join(values) if values else None


def parse_entry(entry: Any) -> FeedItem:
    """Convert a feedparser entry to a FeedItem."""
    description = entry.get("summary") or entry.get("description") or ""
    return FeedItem(
        guid=entry.get("id") or None,
        title=entry.get("title", ""),
        link=entry.get("link", ""),
        description=description,
        content=_entry_content(entry),
        published=_entry_published(entry),
    )


class RSSFetcher:
    """Fetch and parse RSS feeds.

    Failures are reported in the returned FeedResult and never retried.
    """

    def __init__(self, timeout: float = 30.0, client: Optional[httpx.Client] = None) -> None:
        """
        Initialize RSS fetcher.

        Args:
            timeout: HTTP timeout in seconds
            client: Optional preconfigured client (used as-is, not closed)
        """
        self.timeout = timeout
        self._client = client

    def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return self._client.get(url)
        with httpx.Client(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        ) as client:
            return client.get(url)

    def fetch(self, url: str) -> FeedResult:
        """Fetch and parse a single RSS feed."""
        try:
            response = self._get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            return FeedResult(source_url=url, success=False, error=f"HTTP error: {e}")

        feed = feedparser.parse(response.content)

        # Many real feeds trip the bozo bit on minor issues; only give up
        # when nothing could be parsed.
        if feed.bozo and not feed.entries:
            return FeedResult(
                source_url=url,
                success=False,
                error=f"Invalid RSS feed: {feed.get('bozo_exception')}",
            )
        if feed.bozo:
            log.warning("Feed %s parsed with warnings: %s", url, feed.get("bozo_exception"))

        items = [parse_entry(entry) for entry in feed.entries]
        return FeedResult(source_url=url, success=True, items=items)

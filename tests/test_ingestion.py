import datetime

import httpx
import pytest

from airss.clock import utcnow
from airss.db import ArticleStore
from airss.errors import ConstraintError, FeedError
from airss.ingestion import FeedIngestor, FeedItem, RSSFetcher, strip_html

from .conftest import NOW, StubFetcher

FEED_URL = "https://example.com/feed"

SAMPLE_RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">
<channel>
  <title>Test Feed</title>
  <link>https://example.com</link>
  <description>Test</description>
  <item>
    <title>Z80 Project</title>
    <link>https://example.com/z80</link>
    <guid isPermaLink="false">g-z80</guid>
    <pubDate>Sat, 01 Jun 2024 10:00:00 +0000</pubDate>
    <description>&lt;p&gt;A &lt;b&gt;retro&lt;/b&gt; build&lt;/p&gt;</description>
    <content:encoded><![CDATA[<p>Full <i>Z80</i> computer build</p>]]></content:encoded>
  </item>
  <item>
    <title>No GUID here</title>
    <link>https://example.com/noguid</link>
    <pubDate>Fri, 31 May 2024 08:30:00 +0200</pubDate>
    <description>Plain text</description>
  </item>
</channel>
</rss>
"""


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_fetch_parses_items():
    fetcher = RSSFetcher(client=_client(lambda request: httpx.Response(200, content=SAMPLE_RSS)))

    result = fetcher.fetch(FEED_URL)

    assert result.success
    assert result.item_count == 2
    first, second = result.items
    assert first.guid == "g-z80"
    assert first.title == "Z80 Project"
    assert first.link == "https://example.com/z80"
    assert "<b>retro</b>" in first.description
    assert "Z80" in first.content
    assert first.published == datetime.datetime(2024, 6, 1, 10, 0, tzinfo=datetime.timezone.utc)
    assert second.content is None
    assert second.published == datetime.datetime(2024, 5, 31, 6, 30, tzinfo=datetime.timezone.utc)


def test_fetch_http_error():
    fetcher = RSSFetcher(client=_client(lambda request: httpx.Response(404)))

    result = fetcher.fetch(FEED_URL)

    assert not result.success
    assert "404" in result.error


def test_fetch_unparseable_body():
    fetcher = RSSFetcher(client=_client(lambda request: httpx.Response(200, content=b"not a feed <<<")))

    result = fetcher.fetch(FEED_URL)

    assert not result.success
    assert result.items == []


def test_strip_html():
    assert strip_html("<p>A <b>retro</b> build</p>") == "A retro build"
    assert strip_html("") == ""


def test_fetch_and_store(store, feed_items):
    stats = FeedIngestor(store, StubFetcher(feed_items)).fetch_and_store(FEED_URL)

    assert (stats.received, stats.existing, stats.added, stats.failed) == (2, 0, 2, 0)
    z80 = store.get("g-z80")
    assert z80.description == "A retro build"
    assert z80.content == "Full Z80 computer build"
    assert z80.feed_url == FEED_URL
    assert z80.score == ""
    assert z80.reported is False
    # Lamp had no content, so the description stands in
    assert store.get("g-lamp").content == "A lamp with an app"


def test_fetch_and_store_is_idempotent(store, feed_items):
    ingestor = FeedIngestor(store, StubFetcher(feed_items))
    ingestor.fetch_and_store(FEED_URL)
    store.update_score("g-z80", "90", "Score: 90", "m")

    stats = ingestor.fetch_and_store(FEED_URL)

    assert (stats.received, stats.existing, stats.added) == (2, 2, 0)
    assert store.count() == 2
    assert store.get("g-z80").score == "90"


def test_guid_falls_back_to_link(store):
    items = [FeedItem(title="No id", link="https://example.com/no-id", description="d", published=NOW)]

    FeedIngestor(store, StubFetcher(items)).fetch_and_store(FEED_URL)

    assert store.exists("https://example.com/no-id")


def test_content_is_truncated(store):
    items = [FeedItem(guid="long", title="Long", content="y" * 5000, published=NOW)]

    FeedIngestor(store, StubFetcher(items), content_limit=100).fetch_and_store(FEED_URL)

    assert store.get("long").content == "y" * 100


def test_missing_publish_date_defaults_to_now(store):
    items = [FeedItem(guid="undated", title="Undated")]

    FeedIngestor(store, StubFetcher(items)).fetch_and_store(FEED_URL)

    published = store.get("undated").published_date
    assert abs(utcnow() - published) < datetime.timedelta(minutes=5)


def test_failed_feed_raises(store):
    fetcher = StubFetcher(success=False, error="HTTP error: 500")
    with pytest.raises(FeedError):
        FeedIngestor(store, fetcher).fetch_and_store(FEED_URL)
    assert store.count() == 0


class FlakyStore(ArticleStore):
    def insert(self, article):
        if article.guid == "g-z80":
            raise ConstraintError("simulated")
        super().insert(article)


def test_item_failure_does_not_stop_the_feed(engine, feed_items):
    store = FlakyStore(engine)

    stats = FeedIngestor(store, StubFetcher(feed_items)).fetch_and_store(FEED_URL)

    assert (stats.added, stats.failed) == (1, 1)
    assert store.exists("g-lamp")

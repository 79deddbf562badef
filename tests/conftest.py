import datetime
from typing import Dict, List, Union

import pytest

from airss.db import ArticleStore, create_db_engine, init_database
from airss.ingestion import FeedItem, FeedResult
from airss.models import Article
from airss.scoring import CompletionProvider

NOW = datetime.datetime(2024, 6, 1, 12, 0)


@pytest.fixture(scope="function")
def engine():
    """An in-memory SQLite database with the articles schema."""
    engine = create_db_engine("sqlite://")
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return ArticleStore(engine)


@pytest.fixture
def make_article():
    """Factory for Article objects with sensible defaults."""

    def _factory(guid, title=None, published=None, **fields):
        return Article(
            guid=guid,
            title=title if title is not None else f"Title {guid}",
            link=fields.pop("link", f"https://example.com/{guid}"),
            description=fields.pop("description", f"Description of {guid}"),
            content=fields.pop("content", f"Content of {guid}"),
            published_date=published or NOW,
            **fields,
        )

    return _factory


class ScriptedProvider(CompletionProvider):
    """Answers prompts by substring lookup; Exception values are raised."""

    def __init__(self, responses: Dict[str, Union[str, Exception]], default: str = "Score: 0"):
        self.responses = responses
        self.default = default
        self.prompts: List[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        for key, value in self.responses.items():
            if key in prompt:
                if isinstance(value, Exception):
                    raise value
                return value
        return self.default

    def list_models(self):
        return [{"id": "scripted", "owned_by": "tests"}]

    def get_usage_stats(self):
        return {"total_tokens": 0, "api_calls": len(self.prompts), "model": "scripted"}


class StubFetcher:
    """Returns a fixed FeedResult instead of hitting the network."""

    def __init__(self, items=None, success=True, error=None):
        self.items = items or []
        self.success = success
        self.error = error
        self.calls = 0

    def fetch(self, url):
        self.calls += 1
        return FeedResult(source_url=url, success=self.success, items=self.items, error=self.error)


class FakeMailer:
    def __init__(self, fail_with=None):
        self.fail_with = fail_with
        self.sent = []

    def send(self, to, from_address, subject, html_body):
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append({"to": list(to), "from": from_address, "subject": subject, "body": html_body})


@pytest.fixture
def feed_items():
    return [
        FeedItem(
            guid="g-z80",
            title="Z80 Project",
            link="https://example.com/z80",
            description="<p>A <b>retro</b> build</p>",
            content="<p>Full <i>Z80</i> computer build</p>",
            published=NOW,
        ),
        FeedItem(
            guid="g-lamp",
            title="Smart Lamp",
            link="https://example.com/lamp",
            description="A lamp with an app",
            published=NOW - datetime.timedelta(hours=1),
        ),
    ]

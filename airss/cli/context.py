"""Shared CLI state: configuration and lazily built components."""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from sqlalchemy.exc import SQLAlchemyError

from ..config import Config
from ..db import ArticleStore, create_db_engine, init_database
from ..errors import AirssError
from ..ingestion import FeedIngestor, RSSFetcher
from ..report import ReportBuilder, ReportRenderer, SMTPMailer
from ..scoring import (
    CompletionProvider,
    ScoringEngine,
    build_provider,
    compile_prompt_template,
    load_prompt_source,
)
from ..web import WebServer, create_app

console = Console()


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )
    for noisy in ("httpx", "httpcore", "openai", "werkzeug"):
        if not verbose:
            logging.getLogger(noisy).setLevel(logging.WARNING)


@contextmanager
def cli_errors() -> Iterator[None]:
    """Turn library errors into a red message and exit code 1."""
    try:
        yield
    except (AirssError, SQLAlchemyError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(1)


class AppContext:
    """Per-invocation state handed to every command via ``ctx.obj``."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self._store: Optional[ArticleStore] = None

    @property
    def store(self) -> ArticleStore:
        """Open the article store, creating and migrating the schema."""
        if self._store is None:
            engine = create_db_engine(self.config.get_db_config())
            init_database(engine)
            self._store = ArticleStore(engine)
        return self._store

    def provider(self) -> CompletionProvider:
        return build_provider(self.config.get_llm_config())

    def scoring_engine(self) -> ScoringEngine:
        llm_config = self.config.get_llm_config()
        # The template is compiled now; the client is only built once there
        # is something to score.
        template = compile_prompt_template(load_prompt_source(llm_config.get("prompt")))
        return ScoringEngine(
            store=self.store,
            provider=lambda: build_provider(llm_config),
            template=template,
            model=llm_config["model"],
            content_limit=llm_config["content_limit"],
        )

    def ingestor(self) -> FeedIngestor:
        feed = self.config.config.feed
        return FeedIngestor(self.store, RSSFetcher(timeout=feed.timeout), feed.content_limit)

    def report_builder(self) -> ReportBuilder:
        email_config = self.config.get_email_config()
        return ReportBuilder(
            self.store,
            renderer=ReportRenderer(),
            mailer=SMTPMailer(email_config),
            email_config=email_config,
        )

    def web_server(self, host: Optional[str] = None, port: Optional[int] = None) -> WebServer:
        server = self.config.config.server
        app = create_app(self.store, limit=server.limit)
        return WebServer(app, host or server.host, port or server.port)


def get_app_context(ctx: typer.Context) -> AppContext:
    return ctx.obj

"""Fetch command implementation."""

import typer

from .context import cli_errors, get_app_context


def fetch_command(ctx: typer.Context) -> None:
    """Fetch articles from the RSS feed and save new ones."""
    app_ctx = get_app_context(ctx)
    with cli_errors():
        app_ctx.ingestor().fetch_and_store(app_ctx.config.config.feed.url)

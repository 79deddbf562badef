"""Article listing commands."""

import typer
from rich.console import Console

from ..clock import format_date
from .context import cli_errors, get_app_context

console = Console(highlight=False)

LIST_LIMIT = 1000
RULE = "-" * 80


def list_command(
    ctx: typer.Context,
    limit: int = typer.Option(LIST_LIMIT, "--limit", "-n", help="Maximum articles to show"),
) -> None:
    """List recent articles and their scores."""
    app_ctx = get_app_context(ctx)
    with cli_errors():
        articles = app_ctx.store.select_recent(limit)

    for article in articles:
        score = article.score or "---"
        console.print(
            f"[{score:>3}] {article.title} ({format_date(article.published_date, 'YYYY-MM-DD')})",
            markup=False,
        )


def dump_command(
    ctx: typer.Context,
    limit: int = typer.Option(LIST_LIMIT, "--limit", "-n", help="Maximum articles to dump"),
) -> None:
    """Dump full details of articles from the database."""
    app_ctx = get_app_context(ctx)
    with cli_errors():
        articles = app_ctx.store.select_recent(limit)

    for article in articles:
        console.print(RULE)
        console.print(
            f"Title:       {article.title}\n"
            f"GUID:        {article.guid}\n"
            f"Date:        {format_date(article.published_date, 'YYYY-MM-DD HH:mm:ss')}\n"
            f"Link:        {article.link}\n"
            f"Feed URL:    {article.feed_url}\n"
            f"Score:       {article.score}\n"
            f"Model:       {article.model}\n"
            f"Reported:    {'yes' if article.reported else 'no'}\n"
            f"Analysis:\n{article.analysis}\n"
            f"Description:\n{article.description}\n"
            f"Content:\n{article.content}\n",
            markup=False,
        )

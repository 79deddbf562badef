"""Main CLI application."""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from ..config import Config
from .articles import dump_command, list_command
from .context import AppContext, configure_logging
from .fetch import fetch_command
from .init import init_command
from .listmodels import listmodels_command
from .report import report_command, reset_reported_command
from .run import run_command
from .score import score_command
from .serve import serve_command

app = typer.Typer(
    name="airss",
    help=(
        "AI RSS Scraper - reads an RSS feed, scores each article with an LLM "
        "against your preferences, and reports the best ones."
    ),
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Config file (default: ~/.ai-rss-scraper.yaml or ./.ai-rss-scraper.yaml)",
    ),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="SQLite database file path"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="API key for the LLM endpoint"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="OpenAI compatible API URL"),
    model: Optional[str] = typer.Option(None, "--model", help="LLM model to use"),
    feed_url: Optional[str] = typer.Option(None, "--feed-url", help="RSS feed URL"),
    prompt: Optional[str] = typer.Option(None, "--prompt", help="AI prompt (string or @filename)"),
    email_smarthost: Optional[str] = typer.Option(
        None, "--email-smarthost", help="SMTP smarthost (hostname:port)"
    ),
    email_username: Optional[str] = typer.Option(None, "--email-username", help="SMTP username"),
    email_password: Optional[str] = typer.Option(None, "--email-password", help="SMTP password"),
    email_to: Optional[str] = typer.Option(None, "--email-to", help="Email recipient(s)"),
    email_from: Optional[str] = typer.Option(None, "--email-from", help="Email sender"),
    email_subject: Optional[str] = typer.Option(None, "--email-subject", help="Email subject"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Resolve configuration once for whichever command runs."""
    configure_logging(verbose)

    overrides = {
        "database.path": db_path,
        "llm.api_key": api_key,
        "llm.base_url": base_url,
        "llm.model": model,
        "llm.prompt": prompt,
        "feed.url": feed_url,
        "email.smarthost": email_smarthost,
        "email.username": email_username,
        "email.password": email_password,
        "email.to": email_to,
        "email.from": email_from,
        "email.subject": email_subject,
    }
    ctx.obj = AppContext(Config(config_path=config_path, overrides=overrides))


# Register commands
app.command("init")(init_command)
app.command("fetch")(fetch_command)
app.command("score")(score_command)
app.command("list")(list_command)
app.command("dump")(dump_command)
app.command("listmodels")(listmodels_command)
app.command("report")(report_command)
app.command("reset-reported")(reset_reported_command)
app.command("serve")(serve_command)
app.command("run")(run_command)


def main() -> None:
    app()


if __name__ == "__main__":
    main()

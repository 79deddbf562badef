"""Init command implementation."""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import save_config
from ..config.loader import DEFAULT_CONFIG_NAME
from ..db import validate_connection
from .context import cli_errors, get_app_context

console = Console()


def init_command(
    ctx: typer.Context,
    path: Path = typer.Option(
        Path.home() / DEFAULT_CONFIG_NAME,
        "--path",
        "-p",
        help="Where to write the config file",
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Write a config file and initialize the database."""
    app_ctx = get_app_context(ctx)
    console.print(Panel.fit("AI RSS Scraper - Initialization", style="bold blue"))

    with cli_errors():
        if path.exists() and not force:
            console.print(f"[yellow]Config file already exists: {path} (use --force)[/yellow]")
        else:
            # Secrets stay in the environment, not the file.
            config = app_ctx.config.config.model_copy(deep=True)
            config.llm.api_key = None
            config.email.password = None
            save_config(config, path)
            console.print(f"Created config: {path}")

        console.print("\n[bold]Initializing database schema...[/bold]")
        store = app_ctx.store
        if not validate_connection(store.engine):
            console.print("[red]Database connection failed![/red]")
            raise typer.Exit(1)
        console.print(f"Database ready ({store.count()} articles)")

    console.print(
        Panel(
            "[green]AI RSS Scraper initialized successfully![/green]\n\n"
            f"Configuration: {path}\n\n"
            "Next steps:\n"
            "1. Set LLM API key: [bold]export API_KEY=your_key[/bold]\n"
            "2. Run: [bold]airss run[/bold]",
            style="green",
        )
    )

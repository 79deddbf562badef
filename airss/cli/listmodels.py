"""Listmodels command implementation."""

import typer
from rich.console import Console
from rich.table import Table

from .context import cli_errors, get_app_context

console = Console()


def listmodels_command(ctx: typer.Context) -> None:
    """List available models from the AI provider.

    Useful when switching providers, since they do not all name models the
    same way.
    """
    app_ctx = get_app_context(ctx)
    with cli_errors():
        models = app_ctx.provider().list_models()

    table = Table(title=f"Found {len(models)} models")
    table.add_column("Model", style="cyan")
    table.add_column("Owner", style="dim")
    for m in models:
        table.add_row(m["id"], m["owned_by"])
    console.print(table)

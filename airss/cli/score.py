"""Score command implementation."""

from typing import Optional

import typer
from rich.console import Console

from .context import cli_errors, get_app_context

console = Console()


def score_command(
    ctx: typer.Context,
    refresh: Optional[str] = typer.Option(
        None,
        "--refresh",
        help="Also rescore articles whose title matches this wildcard (e.g. '*Retro*')",
    ),
    show_response: bool = typer.Option(
        False, "--showresponse", help="Show the raw response from the model"
    ),
) -> None:
    """Score unscored articles with the LLM."""
    app_ctx = get_app_context(ctx)
    with cli_errors():
        engine = app_ctx.scoring_engine()
        stats = engine.run(refresh_pattern=refresh, show_response=show_response)

    if engine.provider_ready:
        usage = engine.provider.get_usage_stats()
        console.print(
            f"[dim]Scored {stats.scored}/{stats.candidates} "
            f"({usage['api_calls']} API calls, {usage['total_tokens']} tokens)[/dim]"
        )

"""Report and reset-reported commands."""

import logging
from typing import Optional

import typer

from .context import cli_errors, get_app_context

log = logging.getLogger(__name__)


def report_command(
    ctx: typer.Context,
    age: Optional[int] = typer.Option(
        None, "--age", help="Age of articles in days to include in report [default: 7]"
    ),
    threshold: Optional[int] = typer.Option(
        None, "--threshold", help="Score threshold for report [default: 50]"
    ),
    out: Optional[str] = typer.Option(
        None, "--out", help="Output filename for the report [default: report.html]"
    ),
    send_email: bool = typer.Option(False, "--send-email", help="Send report via email"),
    always: bool = typer.Option(
        False, "--always", help="Include articles that have already been reported"
    ),
) -> None:
    """Generate an HTML report of high-scoring articles."""
    app_ctx = get_app_context(ctx)
    with cli_errors():
        defaults = app_ctx.config.config.report
        app_ctx.report_builder().run(
            age_days=defaults.age_days if age is None else age,
            threshold=defaults.threshold if threshold is None else threshold,
            out_path=defaults.out if out is None else out,
            send_email=send_email,
            include_reported=always,
        )


def reset_reported_command(
    ctx: typer.Context,
    pattern: str = typer.Argument(..., help='Title wildcard, e.g. "*Z80*"'),
) -> None:
    """Reset the reported flag for articles whose title matches a pattern."""
    app_ctx = get_app_context(ctx)
    with cli_errors():
        affected = app_ctx.store.clear_reported_by_pattern(pattern)
    log.info("Reset reported flag for %d articles matching '%s'", affected, pattern)

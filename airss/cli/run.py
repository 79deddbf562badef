"""Run command implementation."""

from typing import Optional

import typer

from ..config import parse_interval
from ..errors import ConfigError
from ..pipeline import CycleOptions, PipelineOrchestrator
from .context import cli_errors, get_app_context


def run_command(
    ctx: typer.Context,
    interval: str = typer.Option(
        "0", "--interval", help="Interval between cycles (e.g. 1h, 30m). 0 means run once."
    ),
    no_fetch: bool = typer.Option(False, "--no-fetch", help="Don't fetch new articles"),
    no_score: bool = typer.Option(False, "--no-score", help="Don't score articles"),
    no_report: bool = typer.Option(False, "--no-report", help="Don't generate report"),
    age: Optional[int] = typer.Option(None, "--age", help="Age of articles in days to include in report"),
    threshold: Optional[int] = typer.Option(None, "--threshold", help="Score threshold for report"),
    out: Optional[str] = typer.Option(None, "--out", help="Output filename for the report"),
    send_email: bool = typer.Option(False, "--send-email", help="Send report via email"),
    always: bool = typer.Option(
        False, "--always", help="Include articles that have already been reported"
    ),
    serve: bool = typer.Option(False, "--serve", help="Run the web server alongside the loop"),
    host: Optional[str] = typer.Option(None, "--host", help="Host interface to listen on"),
    port: Optional[int] = typer.Option(None, "--port", help="Port to listen on"),
) -> None:
    """Fetch, score and report, once or on an interval."""
    app_ctx = get_app_context(ctx)

    with cli_errors():
        try:
            interval_seconds = parse_interval(interval)
        except ValueError as e:
            raise ConfigError(str(e)) from e

        config = app_ctx.config.config
        options = CycleOptions(
            no_fetch=no_fetch,
            no_score=no_score,
            no_report=no_report,
            age_days=config.report.age_days if age is None else age,
            threshold=config.report.threshold if threshold is None else threshold,
            out_path=config.report.out if out is None else out,
            send_email=send_email,
            include_reported=always,
        )

        orchestrator = PipelineOrchestrator(
            feed_url=config.feed.url,
            options=options,
            ingestor=None if no_fetch else app_ctx.ingestor(),
            scoring=None if no_score else app_ctx.scoring_engine(),
            reporter=None if no_report else app_ctx.report_builder(),
            web_server=app_ctx.web_server(host, port) if serve else None,
        )
        orchestrator.run(interval_seconds, serve=serve)

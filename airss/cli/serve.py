"""Serve command implementation."""

from typing import Optional

import typer

from .context import cli_errors, get_app_context


def serve_command(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(None, "--host", help="Host interface to listen on [default: 0.0.0.0]"),
    port: Optional[int] = typer.Option(None, "--port", help="Port to listen on [default: 8080]"),
) -> None:
    """Start the web interface."""
    app_ctx = get_app_context(ctx)
    with cli_errors():
        server = app_ctx.web_server(host, port)
        try:
            server.serve_forever()
        finally:
            server.shutdown()

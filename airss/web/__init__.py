"""Minimal web view for browsing and administering articles."""

from .app import create_app
from .server import WebServer

__all__ = ["WebServer", "create_app"]

"""Configuration management for the AI RSS Scraper."""

from .intervals import parse_interval
from .loader import Config, default_config_paths, load_config, save_config
from .models import (
    ConfigModel,
    DatabaseConfig,
    EmailConfig,
    FeedConfig,
    LLMConfig,
    PostgresConfig,
    ReportConfig,
    ServerConfig,
)

__all__ = [
    "Config",
    "ConfigModel",
    "DatabaseConfig",
    "EmailConfig",
    "FeedConfig",
    "LLMConfig",
    "PostgresConfig",
    "ReportConfig",
    "ServerConfig",
    "default_config_paths",
    "load_config",
    "parse_interval",
    "save_config",
]

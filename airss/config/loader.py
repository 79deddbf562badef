"""Configuration loader."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml
from pydantic import ValidationError

from ..errors import ConfigError
from .models import ConfigModel, DatabaseConfig, EmailConfig

log = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = ".ai-rss-scraper.yaml"

# Environment variable -> config key path
ENV_OVERRIDES: Dict[str, Tuple[str, ...]] = {
    "DB_PATH": ("database", "path"),
    "BASE_URL": ("llm", "base_url"),
    "MODEL": ("llm", "model"),
    "PROMPT": ("llm", "prompt"),
    "FEED_URL": ("feed", "url"),
    "EMAIL_SMARTHOST": ("email", "smarthost"),
    "EMAIL_USERNAME": ("email", "username"),
    "EMAIL_PASSWORD": ("email", "password"),
    "EMAIL_TO": ("email", "to"),
    "EMAIL_FROM": ("email", "from"),
    "EMAIL_SUBJECT": ("email", "subject"),
}


class Config:
    """Configuration manager.

    Built once at startup and handed to every component that needs
    settings; nothing reads configuration from ambient state after that.
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        overrides: Optional[Dict[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Initialize config manager."""
        self.config_path = config_path
        self.overrides = overrides or {}
        self.environ = os.environ if environ is None else environ
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config."""
        if self._config is None:
            self._config = load_config(self.config_path, self.overrides, self.environ)
        return self._config

    def get_db_config(self) -> DatabaseConfig:
        """Get database configuration with the Postgres password resolved."""
        db_config = self.config.database.model_copy(deep=True)
        postgres = db_config.postgres
        if postgres is not None and postgres.password_env:
            password = self.environ.get(postgres.password_env)
            if password:
                postgres.password = password
        return db_config

    def get_llm_config(self) -> Dict[str, Any]:
        """Get LLM configuration dict."""
        llm_config = self.config.llm.model_dump()

        # Handle API key from environment if specified
        if not llm_config.get("api_key") and llm_config.get("api_key_env"):
            api_key = self.environ.get(llm_config["api_key_env"])
            if api_key:
                llm_config["api_key"] = api_key

        return llm_config

    def get_email_config(self) -> EmailConfig:
        """Get email configuration with the password resolved."""
        email_config = self.config.email.model_copy()
        if not email_config.password and email_config.password_env:
            password = self.environ.get(email_config.password_env)
            if password:
                email_config.password = password
        return email_config


def default_config_paths() -> List[Path]:
    """Candidate config files, in lookup order."""
    return [Path.home() / DEFAULT_CONFIG_NAME, Path.cwd() / DEFAULT_CONFIG_NAME]


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def _set_nested(data: Dict[str, Any], path: Tuple[str, ...], value: Any) -> None:
    current = data
    for part in path[:-1]:
        node = current.get(part)
        if not isinstance(node, dict):
            node = {}
            current[part] = node
        current = node
    current[path[-1]] = value


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ConfigModel:
    """Load configuration from YAML, then environment, then explicit overrides.

    An explicit ``config_path`` must exist. Without one, the default
    locations are tried and silently skipped when absent.

    ``overrides`` maps dotted keys (``"llm.model"``) to values; ``None``
    values are ignored so unset CLI flags do not clobber the file.
    """
    data: Dict[str, Any] = {}

    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        data = _read_yaml(config_path)
    else:
        for candidate in default_config_paths():
            if candidate.is_file():
                log.info("Using config file: %s", candidate)
                data = _read_yaml(candidate)
                break

    env = os.environ if environ is None else environ
    for var, path in ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            _set_nested(data, path, value)

    for dotted, value in (overrides or {}).items():
        if value is not None:
            _set_nested(data, tuple(dotted.split(".")), value)

    try:
        return ConfigModel(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(
            config.model_dump(by_alias=True, exclude_none=True),
            f,
            default_flow_style=False,
            sort_keys=False,
        )

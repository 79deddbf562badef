"""Configuration models."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("airss", description="Database name")
    user: str = Field("airss", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")


class DatabaseConfig(BaseModel):
    """Article store configuration."""

    path: str = Field("rss_history.db", description="SQLite database file path")
    url: Optional[str] = Field(None, description="Full SQLAlchemy URL (overrides path)")
    postgres: Optional[PostgresConfig] = Field(None, description="Use Postgres instead of SQLite")


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    api_key_env: Optional[str] = Field("API_KEY", description="Environment variable for API key")
    base_url: Optional[str] = Field(
        "https://api.poe.com/v1", description="OpenAI compatible API URL"
    )
    model: str = Field("gemini-3-flash", description="Model name")
    prompt: Optional[str] = Field(None, description="Prompt template, or @filename")
    content_limit: int = Field(4096, description="Max content chars sent to the model", ge=1)
    timeout: Optional[float] = Field(None, description="Request timeout in seconds")


class FeedConfig(BaseModel):
    """Feed configuration."""

    url: str = Field("https://hackaday.com/blog/feed/", description="RSS feed URL")
    timeout: float = Field(30.0, description="HTTP timeout in seconds", gt=0)
    content_limit: int = Field(4096, description="Max content chars stored per article", ge=1)


class EmailConfig(BaseModel):
    """Report email configuration."""

    model_config = ConfigDict(populate_by_name=True)

    smarthost: Optional[str] = Field(None, description="SMTP smarthost (hostname:port)")
    username: Optional[str] = Field(None, description="SMTP auth username")
    password: Optional[str] = Field(None, description="SMTP auth password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")
    to: Optional[str] = Field(None, description="Recipient address(es), comma separated")
    from_address: Optional[str] = Field(None, alias="from", description="Sender address")
    subject: str = Field("rss article scrape results", description="Email subject")

    @property
    def recipients(self) -> List[str]:
        if not self.to:
            return []
        return [addr.strip() for addr in self.to.split(",") if addr.strip()]


class ReportConfig(BaseModel):
    """Default report parameters."""

    age_days: int = Field(7, description="Age of articles in days to include", ge=0)
    threshold: int = Field(50, description="Score threshold")
    out: Optional[str] = Field("report.html", description="Output filename for the report")


class ServerConfig(BaseModel):
    """Web view configuration."""

    host: str = Field("0.0.0.0", description="Host interface to listen on")
    port: int = Field(8080, description="Port to listen on", ge=1, le=65535)
    limit: int = Field(100, description="Articles shown on the list page", ge=1)


class ConfigModel(BaseModel):
    """Main configuration model."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)
    email: EmailConfig = Field(default_factory=EmailConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

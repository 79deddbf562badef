"""Select high-scoring articles and deliver them as a digest."""

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field
from rich.console import Console

from ..clock import utcnow
from ..config import EmailConfig
from ..db import ArticleStore
from ..errors import ConfigError
from ..models import Article
from ..scoring import parse_score
from .mailer import SMTPMailer
from .renderer import ReportRenderer

log = logging.getLogger(__name__)
console = Console()


class ReportResult(BaseModel):
    """Outcome of one report run."""

    selected: List[str] = Field(default_factory=list, description="GUIDs included and marked reported")
    out_path: Optional[Path] = Field(None, description="Report file written, if any")
    emailed: bool = Field(False, description="Whether the report was mailed")


def report_title(age_days: int, threshold: int) -> str:
    return f"AI RSS Report ({age_days} days, score >= {threshold})"


class ReportBuilder:
    """Build, write and mail the digest, then mark its articles reported."""

    def __init__(
        self,
        store: ArticleStore,
        renderer: Optional[ReportRenderer] = None,
        mailer: Optional[SMTPMailer] = None,
        email_config: Optional[EmailConfig] = None,
    ) -> None:
        self.store = store
        self.renderer = renderer or ReportRenderer()
        self.email_config = email_config or EmailConfig()
        self.mailer = mailer or SMTPMailer(self.email_config)

    def select(
        self,
        age_days: int,
        threshold: int,
        include_reported: bool = False,
        now: Optional[datetime] = None,
    ) -> List[Article]:
        """Articles from the last ``age_days`` days scoring at least ``threshold``.

        Unscored or unparseable scores count as 0.
        """
        since = (now or utcnow()) - timedelta(days=age_days)
        candidates = self.store.select_since(since, unreported_only=not include_reported)
        return [a for a in candidates if parse_score(a.score) >= threshold]

    def run(
        self,
        age_days: int,
        threshold: int,
        out_path: Optional[str] = None,
        send_email: bool = False,
        include_reported: bool = False,
        now: Optional[datetime] = None,
    ) -> ReportResult:
        """
        Produce the digest.

        Articles are marked reported only after every requested destination
        succeeded.

        Raises:
            ConfigError: if there is no destination or email settings are missing
            MailError: if sending fails; nothing is marked reported
        """
        if not out_path and not send_email:
            raise ConfigError("must specify --out or --send-email")

        articles = self.select(age_days, threshold, include_reported, now)
        if not articles:
            log.info("No articles met the score threshold. Skipping report.")
            return ReportResult()

        title = report_title(age_days, threshold)
        result = ReportResult()

        if out_path:
            path = Path(out_path).expanduser()
            path.write_text(self.renderer.render(title, articles), encoding="utf-8")
            console.print(f"Report generated at: {path.resolve()}")
            result.out_path = path

        if send_email:
            subject = self.email_config.subject or title
            html_body = self.renderer.render(subject, articles)
            self.mailer.send(
                self.email_config.recipients,
                self.email_config.from_address or "",
                subject,
                html_body,
            )
            result.emailed = True

        console.print(f"Processed {len(articles)} articles.")

        guids = [a.guid for a in articles]
        self.store.mark_reported(guids)
        log.info("Marked %d articles as reported.", len(guids))
        result.selected = guids
        return result

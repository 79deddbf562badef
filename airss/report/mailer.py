"""SMTP delivery of HTML reports."""

import logging
import smtplib
from email.message import EmailMessage
from typing import Sequence, Tuple

from ..config import EmailConfig
from ..errors import ConfigError, MailError

log = logging.getLogger(__name__)

DEFAULT_SMTP_PORT = 25


def split_smarthost(smarthost: str) -> Tuple[str, int]:
    """Split ``host:port``; the port defaults to 25."""
    host, sep, port = smarthost.rpartition(":")
    if not sep:
        return smarthost, DEFAULT_SMTP_PORT
    try:
        return host, int(port)
    except ValueError as e:
        raise ConfigError(f"Invalid smarthost port in {smarthost!r}") from e


class SMTPMailer:
    """Send HTML mail through a smarthost."""

    def __init__(self, email_config: EmailConfig, timeout: float = 30.0) -> None:
        self.email_config = email_config
        self.timeout = timeout

    def build_message(
        self, to: Sequence[str], from_address: str, subject: str, html_body: str
    ) -> EmailMessage:
        msg = EmailMessage()
        msg["To"] = ", ".join(to)
        msg["From"] = from_address
        msg["Subject"] = subject
        msg.set_content(html_body, subtype="html", charset="utf-8")
        return msg

    def send(self, to: Sequence[str], from_address: str, subject: str, html_body: str) -> None:
        """
        Send one HTML message.

        Raises:
            ConfigError: if smarthost, recipients or sender are missing
            MailError: if the SMTP exchange fails
        """
        smarthost = self.email_config.smarthost
        if not smarthost or not to or not from_address:
            raise ConfigError("email configuration missing (smarthost, to, from)")

        host, port = split_smarthost(smarthost)
        msg = self.build_message(to, from_address, subject, html_body)

        log.info("Sending email to %s via %s...", ", ".join(to), smarthost)
        try:
            with smtplib.SMTP(host, port, timeout=self.timeout) as smtp:
                smtp.ehlo()
                if smtp.has_extn("starttls"):
                    smtp.starttls()
                    smtp.ehlo()
                if self.email_config.username:
                    smtp.login(self.email_config.username, self.email_config.password or "")
                smtp.send_message(msg, from_addr=from_address, to_addrs=list(to))
        except (smtplib.SMTPException, OSError) as e:
            raise MailError(f"failed to send email: {e}") from e
        log.info("Email sent successfully.")

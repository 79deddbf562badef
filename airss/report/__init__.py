"""HTML digest reports."""

from .builder import ReportBuilder, ReportResult, report_title
from .mailer import SMTPMailer, split_smarthost
from .renderer import REPORT_TEMPLATE, ReportRenderer

__all__ = [
    "REPORT_TEMPLATE",
    "ReportBuilder",
    "ReportRenderer",
    "ReportResult",
    "SMTPMailer",
    "report_title",
    "split_smarthost",
]

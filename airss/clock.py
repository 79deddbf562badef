"""Timestamp helpers. Stored timestamps are naive UTC."""

from datetime import datetime

import pendulum


def utcnow() -> datetime:
    """Current time as naive UTC."""
    return pendulum.now("UTC").naive()


def to_utc_naive(value: datetime) -> datetime:
    """Normalize a datetime to naive UTC; naive inputs are taken as UTC."""
    return pendulum.instance(value).in_timezone("UTC").naive()


def format_date(value: datetime, fmt: str = "YYYY-MM-DD HH:mm") -> str:
    """Format a stored timestamp for display."""
    return pendulum.instance(value).format(fmt)

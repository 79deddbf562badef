"""Data models for the AI RSS Scraper."""

from .article import NOT_SCORED, SCORE_NA, Article

__all__ = ["Article", "NOT_SCORED", "SCORE_NA"]

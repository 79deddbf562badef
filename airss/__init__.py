"""AI RSS Scraper - fetch a feed, score articles with an LLM, report the best."""

__version__ = "0.1.0"

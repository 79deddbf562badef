"""Data models for ingestion."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class FeedItem(BaseModel):
    """Parsed RSS feed item."""

    guid: Optional[str] = Field(None, description="Entry id/guid, if the feed has one")
    title: str = Field("", description="Article title")
    link: str = Field("", description="Article URL")
    description: str = Field("", description="Article description/summary")
    content: Optional[str] = Field(None, description="Full content, if the feed has it")
    published: Optional[datetime] = Field(None, description="Publication date (UTC)")


class FeedResult(BaseModel):
    """Result of fetching an RSS feed."""

    source_url: str = Field(..., description="RSS feed URL")
    success: bool = Field(..., description="Whether fetch was successful")
    items: list[FeedItem] = Field(default_factory=list, description="Parsed feed items")
    error: Optional[str] = Field(None, description="Error message if failed")

    @property
    def item_count(self) -> int:
        return len(self.items)


class FetchStats(BaseModel):
    """Counts from one fetch-and-store pass."""

    received: int = Field(0, description="Items in the feed")
    existing: int = Field(0, description="Items already stored")
    added: int = Field(0, description="Items newly stored")
    failed: int = Field(0, description="Items that could not be checked or stored")

"""Article model for fetched and scored feed entries."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

NOT_SCORED = ""
SCORE_NA = "N/A"


class Article(BaseModel):
    """Article model, one row of the articles table."""

    model_config = ConfigDict(from_attributes=True)

    guid: str = Field(..., description="Stable identifier (feed id, or link when absent)")
    title: str = Field("", description="Article title")
    link: str = Field("", description="Article URL")
    description: str = Field("", description="Sanitized description")
    content: str = Field("", description="Sanitized, length-capped content")
    published_date: datetime = Field(..., description="Publication timestamp (naive UTC)")
    score: str = Field(NOT_SCORED, description="Extracted score, 'N/A', or empty if unscored")
    analysis: str = Field("", description="Raw model output")
    feed_url: str = Field("", description="Feed that produced the article")
    model: str = Field("", description="Model that produced the score")
    reported: bool = Field(False, description="Already included in a digest")
    created_at: Optional[datetime] = Field(None, description="Insert timestamp")

"""Trend report schema: a reporting view over a time window of the corpus."""

from datetime import datetime

from pydantic import BaseModel, Field


class TopicCount(BaseModel):
    """Number of records in the window mentioning a keyword."""

    topic: str
    count: int = Field(..., ge=0)

    model_config = {"frozen": True}


class EmergingTopic(BaseModel):
    """Topic whose mentions concentrate in the most recent part of the window."""

    topic: str
    total_mentions: int
    recent_mentions: int
    recent_share: float = Field(..., ge=0.0, le=1.0)

    model_config = {"frozen": True}


class TrendReport(BaseModel):
    """Topic frequency, emerging topics and risk patterns over a window."""

    window_days: int
    generated_at: datetime
    record_count: int = 0
    top_topics: list[TopicCount] = Field(default_factory=list)
    emerging_topics: list[EmergingTopic] = Field(default_factory=list)
    risk_patterns: list[TopicCount] = Field(default_factory=list)
    jurisdiction_activity: dict[str, int] = Field(default_factory=dict)
    litigation_types: dict[str, int] = Field(default_factory=dict)

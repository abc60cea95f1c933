"""Social sentiment schemas (derived per poll cycle, not stored)."""
from datetime import datetime
from enum import Enum

from pydantic import Field

from opportunity_radar.schemas.base import CamelModel


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"

    @property
    def polarity(self) -> int:
        return {"positive": 1, "negative": -1}.get(self.value, 0)


class PublicMetrics(CamelModel):
    retweet_count: int = 0
    like_count: int = 0
    reply_count: int = 0
    quote_count: int = 0


class SocialMention(CamelModel):
    """A post matching a tracked term, classified and tagged."""

    id: str
    text: str
    author: str
    author_followers: int = 0
    created_at: datetime
    public_metrics: PublicMetrics = Field(default_factory=PublicMetrics)
    sentiment: Sentiment = Sentiment.NEUTRAL
    relevant_terms: list[str] = Field(default_factory=list)
    hashtags: list[str] = Field(default_factory=list)

    @property
    def engagement(self) -> int:
        return self.public_metrics.retweet_count + self.public_metrics.like_count

    @property
    def influence(self) -> int:
        return self.author_followers * self.engagement


class SentimentTrend(CamelModel):
    term: str
    volume: int
    sentiment: float  # mean polarity in [-1, 1]
    mentions_24h: int = Field(alias="mentions24h")
    influencer_mentions: int
    trending: bool


class TermSentiment(CamelModel):
    term: str
    sentiment: float
    volume: int

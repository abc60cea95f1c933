"""Database models for opportunity discovery.

Opportunities and their score events are persisted; price alerts, source
status and sentiment trends live in memory.
"""
from datetime import datetime
from enum import Enum

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from opportunity_radar.utils import utcnow


class Category(str, Enum):
    """Fixed category labels; OTHER is the fallback for unrecognized input."""

    P2E_GAMES = "P2E Games"
    AIRDROPS = "Airdrops"
    NEW_LISTINGS = "New Listings"
    DEFI = "DeFi"
    NFT = "NFT"
    OTHER = "Other"

    @classmethod
    def normalize(cls, label: str) -> "Category":
        """Match a label case-insensitively; unknown labels map to OTHER."""
        wanted = label.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return cls.OTHER


class Opportunity(SQLModel, table=True):
    """A discovered token, game or airdrop with its hotness score."""

    __tablename__ = "opportunities"

    id: int | None = Field(default=None, primary_key=True)
    name: str
    description: str
    category: str = Field(index=True)
    source_url: str
    website_url: str | None = None
    discord_url: str | None = None
    twitter_url: str | None = None
    image_url: str | None = None

    estimated_value: float | None = None
    participants: int | None = None
    twitter_followers: int = 0
    discord_members: int = 0
    trading_volume: float = 0.0
    market_cap: float = 0.0
    time_remaining: str | None = None
    deadline: datetime | None = Field(default=None, sa_column=Column(DateTime(timezone=False)))

    hotness_score: float = Field(default=0.0, index=True)
    is_active: bool = Field(default=True, index=True)
    content_key: str = Field(index=True)  # lower(name)|source_url

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=False), index=True, nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=False), nullable=False),
    )


class ScoreEvent(SQLModel, table=True):
    """Append-only record of an opportunity's score at a point in time."""

    __tablename__ = "score_events"

    id: int | None = Field(default=None, primary_key=True)
    opportunity_id: int = Field(index=True)
    hotness_score: float
    estimated_value: float | None = None
    recorded_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=False), index=True, nullable=False),
    )
